from typing import Optional

from pydantic import BaseModel, ConfigDict


class ConsultantCreateSchema(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    active: bool = True

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"name": "Marcelo", "email": "marcelo@example.com", "active": True}
        }
    )


class ConsultantUpdateSchema(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    active: Optional[bool] = None


class ConsultantLoginCreateSchema(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class ConsultantSchema(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    active: bool


class PublicConsultantSchema(BaseModel):
    id: int
    name: str
