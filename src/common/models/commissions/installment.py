from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from common.database.connection import Base
from common.models.commissions.sale import SaleModel


class InstallmentModel(Base):
    __tablename__ = "installments"
    __table_args__ = (
        UniqueConstraint("sale_id", "number"),
        CheckConstraint("status IN ('paid', 'pending', 'overdue')"),
    )

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column(Integer, ForeignKey(SaleModel.id), nullable=False, index=True)
    number = Column(Integer, nullable=False)
    value = Column(Numeric(14, 2), nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending")
    # boleto do cliente atrasado, independente do status da comissão
    bill_overdue = Column(Boolean, nullable=False, default=False)
    paid_date = Column(Date, nullable=True)

    sale = relationship("SaleModel", back_populates="installments")
