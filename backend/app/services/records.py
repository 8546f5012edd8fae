"""
Uniform submit/list access for the field record kinds.

Each kind is one RecordResource configured with its model, the fields that
must be present, whether records are attributed to the submitting account,
and an optional filter applied when listing.
"""

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from pydantic.alias_generators import to_camel

from app.auth import UserPrincipal
from app.exceptions import AuthorizationError, UnexpectedStoreError, ValidationError
from app.logging_config import get_logger
from app.models import Alert, CaseReport, User, WaterTest

logger = get_logger(__name__)


def missing_fields(data: dict[str, Any], required: tuple[str, ...]) -> list[str]:
    missing = []
    for name in required:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing


class RecordResource:
    def __init__(self, model, required: tuple[str, ...], attributed: bool, label: str, list_filter=None):
        self.model = model
        self.required = required
        self.attributed = attributed
        self.label = label
        self.list_filter = list_filter

    def _query(self):
        query = select(self.model)
        if self.attributed:
            query = query.options(selectinload(self.model.reported_by))
        return query

    async def submit(self, db: AsyncSession, data: dict[str, Any], principal: Optional[UserPrincipal]):
        missing = missing_fields(data, self.required)
        if missing:
            names = [to_camel(f) for f in missing]
            raise ValidationError(f"Missing required fields: {', '.join(names)}")

        record = self.model(**data)
        try:
            if self.attributed:
                if principal is None or await db.get(User, principal.account_id) is None:
                    # Valid signature, but the account behind it is gone.
                    raise AuthorizationError()
                record.reported_by_id = principal.account_id

            db.add(record)
            # Commit before the 201 goes out so a list right after submit sees the record.
            await db.commit()
            record = await db.scalar(
                self._query()
                .where(self.model.id == record.id)
                .execution_options(populate_existing=True)
            )
        except SQLAlchemyError:
            await db.rollback()
            logger.exception("Failed to store %s", self.label)
            raise UnexpectedStoreError()

        logger.info(
            "Stored %s id=%s%s",
            self.label,
            record.id,
            f" by account id={record.reported_by_id}" if self.attributed else "",
        )
        return record

    async def list(self, db: AsyncSession) -> list:
        query = self._query()
        if self.list_filter is not None:
            query = query.where(self.list_filter)
        query = query.order_by(self.model.created_at.desc(), self.model.id.desc())
        try:
            result = await db.execute(query)
        except SQLAlchemyError:
            logger.exception("Failed to list %s records", self.label)
            raise UnexpectedStoreError()
        return list(result.scalars().all())


case_reports = RecordResource(
    CaseReport,
    required=("patient_name", "age", "gender", "water_source", "location"),
    attributed=True,
    label="case report",
)

water_tests = RecordResource(
    WaterTest,
    required=("location", "turbidity", "ph"),
    attributed=True,
    label="water test",
)

alerts = RecordResource(
    Alert,
    required=("title", "message", "severity"),
    attributed=False,
    label="alert",
    list_filter=Alert.is_active.is_(True),
)
