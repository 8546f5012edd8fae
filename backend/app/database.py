from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from app.config import get_settings

Base = declarative_base()

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_database_url() -> str:
    """Return the configured URL with an async driver."""
    db_url = get_settings().database_url
    if db_url.startswith("postgresql://"):
        db_url = db_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return db_url


def get_engine() -> AsyncEngine:
    """Create the engine on first use so importing models never touches the database."""
    global _engine
    if _engine is None:
        db_url = get_database_url()
        settings = get_settings()
        if db_url.startswith("sqlite"):
            _engine = create_async_engine(db_url, echo=settings.db_echo, poolclass=NullPool)
        else:
            _engine = create_async_engine(db_url, echo=settings.db_echo, pool_pre_ping=True)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)
    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, committed when the handler succeeds."""
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_models(engine: Optional[AsyncEngine] = None) -> None:
    import app.models  # noqa: F401  registers tables on Base.metadata

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


def utcnow() -> datetime:
    """Column default for created_at; microsecond precision keeps newest-first ordering stable."""
    return datetime.now(timezone.utc)
