from typing import List, Optional

from fastapi import Depends, Response, Security, status
from fastapi_restful import set_responses

from api.auth.actor import Actor
from api.auth.auth_bearer import api_key_cookie, api_key_header, current_actor
from api.configurations.config import get_settings
from api.resources.abstract_resource import AbstractResource, PublicResource
from api.schemas import (
    BadRequestError,
    LoginResponseSchema,
    LoginSchema,
    MeResponseSchema,
    OkSchema,
    UnauthorizedError,
)
from api.services.auth import AuthService


class LoginResource(PublicResource):
    def path(self) -> str:
        return "/auth/login"

    def tags(self) -> List[str]:
        return ["auth"]

    @set_responses(
        LoginResponseSchema,
        status.HTTP_200_OK,
        responses={
            status.HTTP_400_BAD_REQUEST: {"model": BadRequestError},
            status.HTTP_401_UNAUTHORIZED: {"model": UnauthorizedError},
        },
    )
    def post(self, login: LoginSchema, response: Response):
        """
        Autentica usuário e senha. O token retornado também é gravado no
        cookie de sessão.
        """
        settings = get_settings()
        session = AuthService().login(login.username, login.password)
        response.set_cookie(
            key=settings.session_cookie_name,
            value=session["token"],
            max_age=settings.session_ttl_days * 24 * 60 * 60,
            httponly=True,
            samesite="lax",
        )

        return {"ok": True, **session}


class LogoutResource(PublicResource):
    def path(self) -> str:
        return "/auth/logout"

    def tags(self) -> List[str]:
        return ["auth"]

    @set_responses(OkSchema, status.HTTP_200_OK)
    def post(
        self,
        response: Response,
        header_token: Optional[str] = Security(api_key_header),
        cookie_token: Optional[str] = Security(api_key_cookie),
    ):
        response.delete_cookie(get_settings().session_cookie_name)

        return AuthService().logout(header_token or cookie_token)


class MeResource(AbstractResource):
    def path(self) -> str:
        return "/auth/me"

    def tags(self) -> List[str]:
        return ["auth"]

    @set_responses(
        MeResponseSchema,
        status.HTTP_200_OK,
        responses={status.HTTP_401_UNAUTHORIZED: {"model": UnauthorizedError}},
    )
    def get(self, actor: Actor = Depends(current_actor)):
        return {
            "ok": True,
            "user": {"role": actor.role, "consultant_id": actor.consultant_id},
        }
