from datetime import date
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings

from simple_common.utils import today


class Settings(BaseSettings):
    app_name: str = "Dashboard de Comissões"
    description: str = (
        "API REST para registro de vendas, cotas e parcelas de comissão "
        "dos consultores, com acompanhamento de recebimentos."
    )
    version: str = "0.1.0"
    docs_url: str = "/docs"
    openapi_url: str = "/openapi.json"
    root_path: str = ""

    admin_user: str = "admin"
    admin_password: str = "admin"
    consultant_passwords_json: str = "{}"
    default_consultants: List[str] = [
        "Graziele",
        "Gustavo",
        "Pedro",
        "Poli",
        "Marcelo",
        "Victor",
    ]

    bcrypt_rounds: int = 10
    session_ttl_days: int = 7
    session_cookie_name: str = "session"

    ranking_start: date = date(2026, 1, 1)
    ranking_end: date = date(2026, 3, 31)

    reference_date: Optional[date] = None


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def current_date() -> date:
    return get_settings().reference_date or today()
