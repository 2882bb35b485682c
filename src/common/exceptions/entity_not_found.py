from fastapi import status
from typing import Dict, Any

from common.exceptions.base_error import ApiError


class EntityNotFound(ApiError):
    code = "not_found"

    def __init__(
        self,
        detail: str = "Entidade não encontrada.",
        code: str = None,
        headers: Dict[str, Any] = None,
    ) -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, detail, code, headers)
