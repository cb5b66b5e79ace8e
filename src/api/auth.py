"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_auth_service
from src.exceptions import NotFoundError
from src.schemas.auth import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    MessageResponse,
    Token,
    UserLogin,
    UserRegister,
    VerifyEmailRequest,
)
from src.services.auth import AuthService

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login", response_model=Token)
def login(
    credentials: UserLogin,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    try:
        token = auth_service.login(credentials.email, credentials.password)
    except NotFoundError as e:
        # Unknown email is a bad request on this endpoint, not a 404
        raise NotFoundError(e.message, status_code=status.HTTP_400_BAD_REQUEST) from e

    return Token(token=token)


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user and send the verification code."""
    auth_service.register(
        user_data.email,
        user_data.password,
        user_data.first_name,
        user_data.last_name,
        user_data.bio,
    )
    return MessageResponse(message="User registered successfully. Please verify your email.")


@router.post("/verify-email", response_model=MessageResponse)
def verify_email(
    data: VerifyEmailRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Confirm an email address with the emailed code."""
    auth_service.verify_email(data.email, data.code)
    return MessageResponse(message="Email verified successfully.")


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    data: ForgotPasswordRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Email a password reset code."""
    auth_service.forgot_password(data.email)
    return MessageResponse(message="Password reset code sent.")


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    data: ChangePasswordRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Set a new password using the reset code."""
    auth_service.change_password(data.email, data.code, data.new_password)
    return MessageResponse(message="Password changed successfully.")
