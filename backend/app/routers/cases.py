from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.schemas.case_report import CaseReportCreate, CaseReportCreated, CaseReportList, CaseReportResponse
from app.services.records import case_reports
from app.auth import get_current_user, UserPrincipal

router = APIRouter()


@router.post("", response_model=CaseReportCreated, status_code=201)
async def submit_case(
    data: CaseReportCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    record = await case_reports.submit(db, data.model_dump(), current_user)
    return CaseReportCreated(
        message="Case report submitted successfully",
        case=CaseReportResponse.model_validate(record),
    )


@router.get("", response_model=CaseReportList)
async def list_cases(
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    records = await case_reports.list(db)
    return CaseReportList(cases=[CaseReportResponse.model_validate(r) for r in records])
