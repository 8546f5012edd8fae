from sqlalchemy import Column, Integer, String, Text, DateTime, Float, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base, utcnow


class WaterTest(Base):
    __tablename__ = "water_tests"

    id = Column(Integer, primary_key=True, index=True)
    location = Column(String(300), nullable=False)
    turbidity = Column(Float, nullable=False)  # NTU
    ph = Column(Float, nullable=False)
    temperature = Column(Float)  # Celsius
    bacterial_test = Column(String(100))
    notes = Column(Text)
    reported_by_id = Column(Integer, ForeignKey("users.id"), index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    reported_by = relationship("User", lazy="raise")
