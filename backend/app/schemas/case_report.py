from pydantic import Field
from datetime import datetime
from typing import Optional
from app.schemas.base import CamelModel, ReporterSummary


class CaseReportCreate(CamelModel):
    patient_name: str
    age: int = Field(..., ge=0, le=150)
    gender: str
    symptoms: list[str] = []
    water_source: str
    location: str
    notes: Optional[str] = None
    image_url: Optional[str] = None


class CaseReportResponse(CaseReportCreate):
    id: int
    reported_by: Optional[ReporterSummary] = None
    created_at: datetime


class CaseReportCreated(CamelModel):
    message: str
    case: CaseReportResponse


class CaseReportList(CamelModel):
    cases: list[CaseReportResponse]
