from sqlalchemy import Column, Integer, String, DateTime
from app.database import Base, utcnow

DEFAULT_ROLE = "ASHA Worker"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(320), unique=True, nullable=False, index=True)  # stored normalized
    password_hash = Column(String(100), nullable=False)
    role = Column(String(50), nullable=False, default=DEFAULT_ROLE)  # informational only
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
