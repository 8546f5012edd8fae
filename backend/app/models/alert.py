from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean
from app.database import Base, utcnow


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(300), nullable=False)
    message = Column(Text, nullable=False)
    severity = Column(String(20), nullable=False, default="medium")  # low | medium | high | critical
    location = Column(String(300))
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
