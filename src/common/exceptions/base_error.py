from fastapi import HTTPException
from typing import Dict, Any


class ApiError(HTTPException):
    code: str = "internal_error"

    def __init__(
        self,
        status_code: int,
        detail: str,
        code: str = None,
        headers: Dict[str, Any] = None,
    ) -> None:
        super().__init__(status_code, detail=detail, headers=headers)
        if code is not None:
            self.code = code
