from fastapi import status
from typing import Dict, Any

from common.exceptions.base_error import ApiError


class Unauthorized(ApiError):
    code = "unauthorized"

    def __init__(
        self,
        detail: str = "Usuário não identificado.",
        code: str = None,
        headers: Dict[str, Any] = None,
    ) -> None:
        super().__init__(status.HTTP_401_UNAUTHORIZED, detail, code, headers)
