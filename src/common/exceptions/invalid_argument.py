from fastapi import status
from typing import Dict, Any

from common.exceptions.base_error import ApiError


class InvalidArgument(ApiError):
    code = "invalid_argument"

    def __init__(
        self,
        detail: str = "Valor informado é inválido.",
        code: str = None,
        headers: Dict[str, Any] = None,
    ) -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, detail, code, headers)
