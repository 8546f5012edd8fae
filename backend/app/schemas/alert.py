from datetime import datetime
from typing import Literal, Optional
from app.schemas.base import CamelModel

Severity = Literal["low", "medium", "high", "critical"]


class AlertCreate(CamelModel):
    title: str
    message: str
    severity: Severity = "medium"
    location: Optional[str] = None


class AlertResponse(AlertCreate):
    id: int
    is_active: bool
    created_at: datetime


class AlertCreated(CamelModel):
    message: str
    alert: AlertResponse


class AlertList(CamelModel):
    alerts: list[AlertResponse]
