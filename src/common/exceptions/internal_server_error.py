from fastapi import status
from typing import Dict, Any

from common.exceptions.base_error import ApiError


class InternalServerError(ApiError):
    code = "internal_error"

    def __init__(
        self,
        detail: str = "Erro desconhecido.",
        code: str = None,
        headers: Dict[str, Any] = None,
    ) -> None:
        super().__init__(
            status.HTTP_500_INTERNAL_SERVER_ERROR, detail, code, headers
        )
