from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
from app.core.database import Base


class LoginAttempt(Base):
    __tablename__ = "login_attempts"
    id = Column(Integer, primary_key=True)
    username = Column(String(255), index=True)
    ip_address = Column(String(45))
    status = Column(String(20))                          # "approved" | "rejected"
    created_at = Column(DateTime, default=datetime.now, nullable=False)
