from fastapi import APIRouter, Depends
from app.auth import get_current_user, UserPrincipal
from app.exceptions import NotFound
from app.logging_config import get_logger
from app.schemas.auth import (
    AccountResponse,
    AuthResponse,
    LoginRequest,
    MeResponse,
    MessageResponse,
    ResetPasswordRequest,
    SignupRequest,
)
from app.services.credential_store import CredentialStore, get_credential_store
from app.services.token_service import TokenService, get_token_service

router = APIRouter()
logger = get_logger(__name__)


@router.post("/signup", response_model=AuthResponse, status_code=201)
@router.post("/register", response_model=AuthResponse, status_code=201, include_in_schema=False)
async def signup(
    body: SignupRequest,
    store: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
):
    user = await store.register(body.name, body.email, body.password)
    return AuthResponse(
        message="User created successfully",
        token=tokens.issue(user.id, user.email),
        user=AccountResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    store: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
):
    user = await store.authenticate(body.email, body.password)
    logger.info("Login succeeded for account id=%s", user.id)
    return AuthResponse(
        message="Login successful",
        token=tokens.issue(user.id, user.email),
        user=AccountResponse.model_validate(user),
    )


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    body: ResetPasswordRequest,
    store: CredentialStore = Depends(get_credential_store),
):
    """Acknowledge a reset request. No email is sent yet."""
    user = await store.find_by_email(body.email)
    if not user:
        raise NotFound("User not found")
    logger.info("Password reset requested for account id=%s", user.id)
    return MessageResponse(message="Password reset link sent to your email")


@router.get("/me", response_model=MeResponse)
async def me(
    current_user: UserPrincipal = Depends(get_current_user),
    store: CredentialStore = Depends(get_credential_store),
):
    user = await store.get(current_user.account_id)
    if not user:
        raise NotFound("User not found")
    return MeResponse(user=AccountResponse.model_validate(user))
