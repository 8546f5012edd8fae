"""
Health Surveillance API - test configuration and fixtures
"""
import os
import tempfile
from typing import AsyncGenerator

import pytest
from faker import Faker
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# Settings are cached on first use, so the environment must be ready before app imports.
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-for-testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="hs-uploads-")
os.environ["SEED_SAMPLE_ALERTS"] = "false"

from app.main import app  # noqa: E402
from app.database import get_db, init_models  # noqa: E402
from app.services.credential_store import CredentialStore  # noqa: E402
from app.services.token_service import TokenService  # noqa: E402

fake = Faker()

TEST_SECRET = os.environ["JWT_SECRET_KEY"]
PASSWORD = "pw12345"


@pytest.fixture
async def engine(tmp_path_factory):
    """A fresh SQLite database file per test."""
    db_dir = tmp_path_factory.mktemp("db")
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_dir / 'test.db'}", poolclass=NullPool)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests each get their own session, committed like production."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TEST_SECRET)


@pytest.fixture
def store(db_session) -> CredentialStore:
    return CredentialStore(db_session, bcrypt_rounds=4)


@pytest.fixture
async def registered(client: AsyncClient) -> dict:
    """Sign up a worker over HTTP; returns the response body plus the password used."""
    payload = {"name": fake.name(), "email": fake.unique.email(), "password": PASSWORD}
    resp = await client.post("/api/auth/signup", json=payload)
    assert resp.status_code == 201, resp.text
    return {**resp.json(), "password": PASSWORD}


@pytest.fixture
def auth_headers(registered: dict) -> dict:
    return {"Authorization": f"Bearer {registered['token']}"}


def assert_no_secrets(value) -> None:
    """Recursively check that no password material appears in a response body."""
    if isinstance(value, dict):
        for key, item in value.items():
            assert "password" not in key.lower()
            assert_no_secrets(item)
    elif isinstance(value, list):
        for item in value:
            assert_no_secrets(item)
    elif isinstance(value, str):
        assert not value.startswith("$2b$")


CASE_PAYLOAD = {
    "patientName": "Ravi Kumar",
    "age": 34,
    "gender": "male",
    "symptoms": ["diarrhea", "fever"],
    "waterSource": "Handpump",
    "location": "Ward 5",
}
