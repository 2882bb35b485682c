from sqlalchemy import Column, ForeignKey, Integer, String, CheckConstraint
from sqlalchemy.orm import relationship

from common.database.connection import Base
from common.models.commissions.commissions_base import CommissionsBaseModel
from common.models.commissions.consultant import ConsultantModel


class UserModel(Base, CommissionsBaseModel):
    __tablename__ = "users"
    __table_args__ = (CheckConstraint("role IN ('admin', 'consultant')"),)

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)
    consultant_id = Column(Integer, ForeignKey(ConsultantModel.id), nullable=True)

    consultant = relationship("ConsultantModel", back_populates="users")
    sessions = relationship(
        "UserSessionModel", back_populates="user", cascade="all"
    )
