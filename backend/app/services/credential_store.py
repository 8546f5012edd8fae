"""
Account persistence and password checks.

Passwords are hashed with bcrypt in a worker thread so the event loop keeps
serving other requests while the work factor burns CPU.
"""

import asyncio
from typing import Optional

import bcrypt
from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import get_db
from app.exceptions import AuthenticationError, DuplicateIdentity, UnexpectedStoreError, ValidationError
from app.logging_config import get_logger
from app.models.user import User

logger = get_logger(__name__)

BCRYPT_MAX_BYTES = 72

_dummy_hashes: dict[int, bytes] = {}


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _encode(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes; newer releases raise instead of truncating.
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def check_password(password: str, stored_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(password), stored_hash.encode("utf-8"))
    except ValueError:
        return False


def _dummy_hash(rounds: int) -> str:
    if rounds not in _dummy_hashes:
        _dummy_hashes[rounds] = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(rounds=rounds))
    return _dummy_hashes[rounds].decode("utf-8")


class CredentialStore:
    def __init__(self, session: AsyncSession, bcrypt_rounds: int = 10):
        self.session = session
        self.bcrypt_rounds = bcrypt_rounds

    async def find_by_email(self, email: str) -> Optional[User]:
        try:
            return await self.session.scalar(select(User).where(User.email == normalize_email(email)))
        except SQLAlchemyError:
            logger.exception("Account lookup failed")
            raise UnexpectedStoreError()

    async def get(self, account_id: int) -> Optional[User]:
        try:
            return await self.session.get(User, account_id)
        except SQLAlchemyError:
            logger.exception("Account lookup failed")
            raise UnexpectedStoreError()

    async def register(self, name: str, email: str, password: str) -> User:
        email = normalize_email(email)
        name = (name or "").strip()
        missing = [f for f, v in (("name", name), ("email", email), ("password", password)) if not v]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        if await self.find_by_email(email) is not None:
            raise DuplicateIdentity()

        password_hash = await asyncio.to_thread(hash_password, password, self.bcrypt_rounds)
        user = User(name=name, email=email, password_hash=password_hash)
        self.session.add(user)
        try:
            await self.session.flush()
            # Commit before the token goes out so a login right after signup finds the row.
            await self.session.commit()
        except IntegrityError:
            # Another registration for the same email committed first; the unique index decides.
            await self.session.rollback()
            raise DuplicateIdentity()
        except SQLAlchemyError:
            await self.session.rollback()
            logger.exception("Failed to insert account")
            raise UnexpectedStoreError()
        await self.session.refresh(user)
        logger.info("Registered account id=%s", user.id)
        return user

    async def verify_password(self, plaintext: str, stored_hash: str) -> bool:
        return await asyncio.to_thread(check_password, plaintext, stored_hash)

    async def authenticate(self, email: str, password: str) -> User:
        """Return the account for valid credentials, else raise AuthenticationError."""
        user = await self.find_by_email(email)
        if user is None:
            # Spend the same bcrypt time as a real check.
            dummy = await asyncio.to_thread(_dummy_hash, self.bcrypt_rounds)
            await self.verify_password(password or "", dummy)
            logger.info("Login failed")
            raise AuthenticationError()
        if not await self.verify_password(password or "", user.password_hash):
            logger.info("Login failed for account id=%s", user.id)
            raise AuthenticationError()
        return user


def get_credential_store(db: AsyncSession = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db, bcrypt_rounds=get_settings().bcrypt_rounds)
