from typing import Optional

from pydantic import BaseModel, ConfigDict


class LoginSchema(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={"example": {"username": "pedro", "password": "RaconPed#39"}}
    )


class SessionUserSchema(BaseModel):
    role: str
    consultant_id: Optional[int] = None


class LoginResponseSchema(BaseModel):
    ok: bool = True
    token: str
    user: SessionUserSchema


class MeResponseSchema(BaseModel):
    ok: bool = True
    user: SessionUserSchema


class OkSchema(BaseModel):
    ok: bool = True
