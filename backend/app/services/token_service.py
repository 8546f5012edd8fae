"""
Session tokens: stateless HS256 JWTs binding one account id and email,
valid for a fixed window after issuance. Nothing is stored server-side.
"""

import time
from dataclasses import dataclass
from jose import jwt, JWTError, ExpiredSignatureError
from app.config import get_settings
from app.exceptions import TokenExpired, TokenInvalid
from app.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    account_id: int
    email: str


class TokenService:
    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_seconds: int = 86400):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_seconds = expire_seconds

    def issue(self, account_id: int, email: str, now: float = None) -> str:
        issued_at = int(now if now is not None else time.time())
        payload = {
            "sub": str(account_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.expire_seconds,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Check signature, then expiry. Only the configured algorithm is accepted.
        Both failure kinds carry the same public message.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpired()
        except JWTError:
            raise TokenInvalid()

        try:
            account_id = int(payload["sub"])
            email = payload["email"]
        except (KeyError, TypeError, ValueError):
            logger.warning("Token with a valid signature but malformed claims")
            raise TokenInvalid()
        if not isinstance(email, str) or "exp" not in payload:
            raise TokenInvalid()
        return TokenClaims(account_id=account_id, email=email)


def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_seconds=settings.token_expire_hours * 3600,
    )
