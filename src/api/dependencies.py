"""FastAPI dependencies for authentication, database and services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.database import get_db
from src.models.user import User
from src.services.auth import AuthService
from src.services.mailer import Mailer, SmtpMailer
from src.services.profile_service import ProfileService
from src.services.security import PasswordHasher, TokenSigner
from src.services.storage import PictureStorage
from src.services.task_service import TaskService
from src.services.verification import VerificationCodes

security = HTTPBearer()


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Get the shared password hasher."""
    return PasswordHasher()


def get_token_signer(settings: Annotated[Settings, Depends(get_settings)]) -> TokenSigner:
    """Get a token signer configured from settings."""
    return TokenSigner(settings)


def get_mailer(settings: Annotated[Settings, Depends(get_settings)]) -> Mailer:
    """Get the outbound mail transport."""
    return SmtpMailer(settings)


def get_picture_storage(settings: Annotated[Settings, Depends(get_settings)]) -> PictureStorage:
    """Get profile picture storage."""
    return PictureStorage(settings.upload_dir)


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    signer: Annotated[TokenSigner, Depends(get_token_signer)],
    mailer: Annotated[Mailer, Depends(get_mailer)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, hasher, signer, mailer, VerificationCodes())


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    """Get the current authenticated user from JWT token."""
    user = auth_service.authenticate(credentials.credentials)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_profile_service(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[PictureStorage, Depends(get_picture_storage)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ProfileService:
    """Get profile service with dependencies."""
    return ProfileService(db, storage, settings.max_picture_bytes)


def get_task_service(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TaskService:
    """Get task service scoped to the current user."""
    return TaskService(db, current_user, settings)
