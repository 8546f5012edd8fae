"""
Auth module: the get_current_user FastAPI dependency guarding every protected route.

A request is authorized only when it carries ``Authorization: Bearer <token>``
and the token verifies. Anything else is rejected before the handler runs:
a missing or malformed header gives 401, a bad or expired token gives 403.
The resolved principal is stored on ``request.state.user``.
"""

from dataclasses import dataclass
from fastapi import Depends, Request
from app.exceptions import AuthorizationError, MissingToken
from app.logging_config import get_logger
from app.services.token_service import TokenService, get_token_service

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class UserPrincipal:
    """Resolved identity attached to each request."""
    account_id: int
    email: str


def extract_bearer_token(header_value: str) -> str:
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        raise MissingToken()
    token = header_value[len(BEARER_PREFIX):].strip()
    if not token or " " in token:
        raise MissingToken()
    return token


async def get_current_user(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> UserPrincipal:
    token = extract_bearer_token(request.headers.get("Authorization", ""))
    try:
        claims = tokens.verify(token)
    except AuthorizationError as e:
        logger.warning("Rejected token on %s %s (%s)", request.method, request.url.path, type(e).__name__)
        raise
    principal = UserPrincipal(account_id=claims.account_id, email=claims.email)
    request.state.user = principal
    return principal
