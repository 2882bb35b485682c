from sqlalchemy import Column, DateTime
from datetime import datetime


class CommissionsBaseModel:
    created_at = Column(DateTime, default=datetime.now)
    modified_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
