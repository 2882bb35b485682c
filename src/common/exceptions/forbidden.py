from fastapi import status
from typing import Dict, Any

from common.exceptions.base_error import ApiError


class Forbidden(ApiError):
    code = "forbidden"

    def __init__(
        self,
        detail: str = "Usuário sem permissão sobre o recurso.",
        code: str = None,
        headers: Dict[str, Any] = None,
    ) -> None:
        super().__init__(status.HTTP_403_FORBIDDEN, detail, code, headers)
