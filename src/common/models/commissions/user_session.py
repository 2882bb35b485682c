from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from common.database.connection import Base
from common.models.commissions.commissions_base import CommissionsBaseModel
from common.models.commissions.user import UserModel


class UserSessionModel(Base, CommissionsBaseModel):
    __tablename__ = "user_sessions"

    token = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey(UserModel.id), nullable=False)
    expires_at = Column(DateTime, nullable=False)

    user = relationship("UserModel", back_populates="sessions")
