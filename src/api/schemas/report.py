from datetime import date
from typing import List, Optional

from pydantic import BaseModel


class SalesWindowSchema(BaseModel):
    sales_count: int
    base_total: float
    commission_total: float
    credit_total: float


class InstallmentBucketsSchema(BaseModel):
    paid: int
    pending: int
    overdue: int


class SummarySchema(BaseModel):
    today: SalesWindowSchema
    last7: SalesWindowSchema
    month: SalesWindowSchema
    all: SalesWindowSchema
    installments: InstallmentBucketsSchema
    as_of: date


class RankingEntrySchema(BaseModel):
    consultant_id: int
    name: str
    totalSales: float
    salesCount: int


class MonthRangeSchema(BaseModel):
    start: date
    end: date


class ReceivableSchema(BaseModel):
    sale_id: int
    installment_number: int
    value: float
    due_date: date
    status: str
    display_status: str
    bill_overdue: bool
    paid_date: Optional[date] = None
    sale_date: date
    client_name: str
    product: str
    consultant_name: str


class ReceivablesSchema(BaseModel):
    month: str
    range: MonthRangeSchema
    count: int
    total: float
    installments: List[ReceivableSchema]
