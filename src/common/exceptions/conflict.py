from fastapi import status
from typing import Dict, Any

from common.exceptions.base_error import ApiError


class Conflict(ApiError):
    code = "conflict"

    def __init__(
        self,
        detail: str = "Erro de integridade.",
        code: str = None,
        headers: Dict[str, Any] = None,
    ) -> None:
        super().__init__(status.HTTP_409_CONFLICT, detail, code, headers)
