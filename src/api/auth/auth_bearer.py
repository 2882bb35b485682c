from typing import Optional

from fastapi import Security
from fastapi.security import APIKeyCookie, APIKeyHeader

from api.auth.actor import Actor
from api.services.auth import AuthService
from api.configurations.config import get_settings
from common.exceptions import Forbidden, Unauthorized

api_key_header = APIKeyHeader(name="x-session-token", auto_error=False)
api_key_cookie = APIKeyCookie(name=get_settings().session_cookie_name, auto_error=False)


def current_actor(
    header_token: Optional[str] = Security(api_key_header),
    cookie_token: Optional[str] = Security(api_key_cookie),
) -> Actor:
    token = header_token or cookie_token
    if not token:
        raise Unauthorized()

    return AuthService().resolve_actor(token)


def current_admin(actor: Actor = Security(current_actor)) -> Actor:
    if not actor.is_admin:
        raise Forbidden(detail="Operação restrita a administradores.")

    return actor
