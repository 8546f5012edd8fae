from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.logging_config import get_logger
from app.models.alert import Alert

logger = get_logger(__name__)

SAMPLE_ALERTS = [
    {
        "title": "Water Quality Alert",
        "message": "High bacterial contamination detected in Ward 5 handpumps",
        "severity": "high",
        "location": "Ward 5, Village Center",
    },
    {
        "title": "Diarrhea Outbreak",
        "message": "Multiple cases reported in surrounding areas",
        "severity": "critical",
        "location": "Northern Districts",
    },
    {
        "title": "Preventive Measures",
        "message": "Boil water before consumption as precautionary measure",
        "severity": "medium",
        "location": "All Areas",
    },
]


async def seed_sample_alerts(session: AsyncSession) -> int:
    """Insert the sample alerts if the alert table is empty. Idempotent."""
    count = await session.scalar(select(func.count(Alert.id))) or 0
    if count:
        return 0
    session.add_all([Alert(**a) for a in SAMPLE_ALERTS])
    await session.commit()
    logger.info("Sample alerts created")
    return len(SAMPLE_ALERTS)
