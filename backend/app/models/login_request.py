from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
import enum

from app.core.database import Base


class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LoginRequest(Base):
    __tablename__ = "login_requests"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255))
    password = Column(String(255))
    ip_address = Column(String(45))                      # fits IPv6
    status = Column(String(20), default=RequestStatus.PENDING.value, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.now, nullable=False)
