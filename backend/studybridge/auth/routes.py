"""
Email/password registration and login.
"""
import logging

from fastapi import APIRouter, Depends, status

from studybridge.api.dependencies import get_account_service
from studybridge.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from studybridge.schemas.user import UserRead
from studybridge.services import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register with Email/Password",
)
async def register(
    registration: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
):
    """
    Register a new user and return an access token.

    Raises:
        400 (conflict): the email or phone is already registered.
    """
    user, token, expires_at = await accounts.register(
        name=registration.name,
        email=registration.email,
        password=registration.password,
        phone=registration.phone,
    )
    return AuthResponse(
        message="User registered successfully",
        token=token,
        expires_at=expires_at,
        user=UserRead.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse, summary="Login with Email/Password")
async def login(
    credentials: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
):
    """
    Authenticate with email and password.

    Raises:
        400 (invalid_credentials): unknown email or wrong password.
    """
    user, token, expires_at = await accounts.login(credentials.email, credentials.password)
    return AuthResponse(
        message="Login successful",
        token=token,
        expires_at=expires_at,
        user=UserRead.model_validate(user),
    )
