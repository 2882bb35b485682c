from typing import List

from pydantic import BaseModel, ConfigDict


class ImportRowErrorSchema(BaseModel):
    row: int
    error: str
    detail: str


class ImportSummarySchema(BaseModel):
    createdSales: int
    createdConsultants: int
    errors: List[ImportRowErrorSchema]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "createdSales": 12,
                "createdConsultants": 1,
                "errors": [
                    {"row": 5, "error": "missing_fields", "detail": "Campos obrigatórios não informados: client_name."}
                ],
            }
        }
    )
