"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    MessageResponse,
    Token,
    UserLogin,
    UserRegister,
    VerifyEmailRequest,
)
from src.schemas.profile import ProfilePictureResponse, ProfileResponse, ProfileUpdate
from src.schemas.task import TaskCreate, TaskPageResponse, TaskResponse, TaskUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "VerifyEmailRequest",
    "ForgotPasswordRequest",
    "ChangePasswordRequest",
    "Token",
    "MessageResponse",
    "ProfileUpdate",
    "ProfileResponse",
    "ProfilePictureResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskPageResponse",
]
