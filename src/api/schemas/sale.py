from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict


class QuotaValueSchema(BaseModel):
    value: float


class InstallmentInputSchema(BaseModel):
    number: Optional[int] = None
    value: Optional[float] = None
    due_date: Optional[date] = None
    status: Optional[str] = None
    bill_overdue: Optional[Union[bool, int]] = False
    paid_date: Optional[date] = None


class SaleCreateSchema(BaseModel):
    consultant_id: Optional[int] = None
    client_name: Optional[str] = None
    product: Optional[str] = None
    sale_date: Optional[date] = None
    insurance: bool = False
    quotas_values: Optional[List[Union[float, QuotaValueSchema]]] = None
    quotas: Optional[int] = None
    unit_value: Optional[float] = None
    base_value: Optional[float] = None
    commission_percentage: Optional[float] = None
    credit_generated: Optional[float] = 0
    installments: Optional[List[InstallmentInputSchema]] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "consultant_id": 1,
                "client_name": "Maria Souza",
                "product": "Imóvel",
                "sale_date": "2026-01-15",
                "insurance": True,
                "quotas_values": [250000, 150000],
                "commission_percentage": 0.8,
                "credit_generated": 400000,
            }
        }
    )


class SaleUpdateSchema(BaseModel):
    client_name: Optional[str] = None
    product: Optional[str] = None
    sale_date: Optional[date] = None
    insurance: Optional[bool] = None
    quotas_values: Optional[List[Union[float, QuotaValueSchema]]] = None
    base_value: Optional[float] = None
    commission_percentage: Optional[float] = None
    credit_generated: Optional[float] = None
    installments: Optional[List[InstallmentInputSchema]] = None


class SaleQuotasUpdateSchema(BaseModel):
    quotas_values: Optional[List[Union[float, QuotaValueSchema]]] = None
    quotas: Optional[int] = None

    model_config = ConfigDict(
        json_schema_extra={"example": {"quotas_values": [1000, 1000, 500.5]}}
    )


class SaleInstallmentsUpdateSchema(BaseModel):
    installments: Optional[List[InstallmentInputSchema]] = None


class InstallmentSchema(BaseModel):
    number: int
    value: float
    due_date: date
    status: str
    display_status: str
    bill_overdue: bool
    paid_date: Optional[date] = None


class SaleSchema(BaseModel):
    id: int
    consultant_id: int
    consultant_name: str
    client_name: str
    product: str
    sale_date: date
    insurance: bool
    base_value: float
    quotas: int
    unit_value: float
    commission_percentage: float
    total_commission: float
    credit_generated: float
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    quotas_values: List[float]
    installments: List[InstallmentSchema]


class SaleInstallmentsSchema(BaseModel):
    ok: bool = True
    installments: List[InstallmentSchema]
