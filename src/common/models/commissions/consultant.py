from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.orm import relationship

from common.database.connection import Base
from common.models.commissions.commissions_base import CommissionsBaseModel


class ConsultantModel(Base, CommissionsBaseModel):
    __tablename__ = "consultants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    active = Column(Boolean, nullable=False, default=True)

    sales = relationship("SaleModel", back_populates="consultant")
    users = relationship("UserModel", back_populates="consultant")
