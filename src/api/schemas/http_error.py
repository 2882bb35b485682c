from typing import Any

from pydantic import BaseModel, ConfigDict


class HTTPErrorSchema(BaseModel):
    error: str
    detail: Any = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"error": "internal_error", "detail": "Erro ao processar requisição."}
        }
    )


class NotFoundError(HTTPErrorSchema):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"error": "not_found", "detail": "Venda 10 não encontrada."}
        }
    )


class ForbiddenError(HTTPErrorSchema):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "forbidden",
                "detail": "Venda 10 pertence a outro consultor.",
            }
        }
    )


class BadRequestError(HTTPErrorSchema):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "missing_fields",
                "detail": "Campos obrigatórios não informados: client_name.",
            }
        }
    )


class UnauthorizedError(HTTPErrorSchema):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"error": "unauthorized", "detail": "Usuário não identificado."}
        }
    )


class ConflictError(HTTPErrorSchema):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"error": "username_taken", "detail": "Usuário pedro já existe."}
        }
    )
