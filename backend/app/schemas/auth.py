from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional
from app.schemas.base import CamelModel


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    if value and "@" not in value:
        raise ValueError("must be an email address")
    return value


class SignupRequest(BaseModel):
    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ResetPasswordRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class AccountResponse(CamelModel):
    """Public view of an account. password_hash is deliberately absent."""
    id: int
    name: str
    email: str
    role: str
    created_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    message: str
    token: str
    user: AccountResponse


class MeResponse(BaseModel):
    user: AccountResponse


class MessageResponse(BaseModel):
    message: str
