from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base, utcnow


class CaseReport(Base):
    __tablename__ = "case_reports"

    id = Column(Integer, primary_key=True, index=True)
    patient_name = Column(String(200), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(20), nullable=False)
    symptoms = Column(JSON, default=list)
    water_source = Column(String(200), nullable=False)
    location = Column(String(300), nullable=False)
    notes = Column(Text)
    image_url = Column(String(500))
    reported_by_id = Column(Integer, ForeignKey("users.id"), index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    reported_by = relationship("User", lazy="raise")
