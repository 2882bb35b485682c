from sqlalchemy import (
    Boolean,
    Column,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import relationship

from common.database.connection import Base
from common.models.commissions.commissions_base import CommissionsBaseModel
from common.models.commissions.consultant import ConsultantModel


class SaleModel(Base, CommissionsBaseModel):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    consultant_id = Column(
        Integer, ForeignKey(ConsultantModel.id), nullable=False, index=True
    )
    consultant_name = Column(String(255), nullable=False)
    client_name = Column(String(255), nullable=False)
    product = Column(String(50), nullable=False)
    sale_date = Column(Date, nullable=False, index=True)
    insurance = Column(Boolean, nullable=False, default=False)
    base_value = Column(Numeric(14, 2), nullable=False)
    commission_percentage = Column(Numeric(9, 4), nullable=False)
    total_commission = Column(Numeric(14, 2), nullable=False)
    credit_generated = Column(Numeric(14, 2), nullable=False, default=0)

    consultant = relationship("ConsultantModel", back_populates="sales")
    quotas = relationship(
        "SaleQuotaModel",
        back_populates="sale",
        cascade="all",
        order_by="SaleQuotaModel.number",
    )
    installments = relationship(
        "InstallmentModel",
        back_populates="sale",
        cascade="all",
        order_by="InstallmentModel.number",
    )
