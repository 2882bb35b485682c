from sqlalchemy import Column, ForeignKey, Integer, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship

from common.database.connection import Base
from common.models.commissions.sale import SaleModel


class SaleQuotaModel(Base):
    __tablename__ = "sale_quotas"
    __table_args__ = (UniqueConstraint("sale_id", "number"),)

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column(Integer, ForeignKey(SaleModel.id), nullable=False, index=True)
    number = Column(Integer, nullable=False)
    value = Column(Numeric(14, 2), nullable=False)

    sale = relationship("SaleModel", back_populates="quotas")
