from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.schemas.alert import AlertCreate, AlertCreated, AlertList, AlertResponse
from app.services.records import alerts
from app.auth import get_current_user, UserPrincipal

router = APIRouter()


@router.get("", response_model=AlertList)
async def list_alerts(
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    """Active alerts only, newest first."""
    records = await alerts.list(db)
    return AlertList(alerts=[AlertResponse.model_validate(r) for r in records])


@router.post("", response_model=AlertCreated, status_code=201)
async def create_alert(
    data: AlertCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    record = await alerts.submit(db, data.model_dump(), current_user)
    return AlertCreated(message="Alert created successfully", alert=AlertResponse.model_validate(record))
