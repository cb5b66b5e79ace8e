"""Authentication service: registration, verification, login and password reset."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.exceptions import (
    ConflictError,
    DeliveryError,
    InvalidCodeError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from src.models.profile import Profile
from src.models.user import DEFAULT_ROLES, User
from src.services.mailer import Mailer, password_reset_email, verification_email
from src.services.security import PasswordHasher, TokenSigner
from src.services.verification import VerificationCodes

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Missing required fields."


class AuthService:
    """Service for account lifecycle operations."""

    def __init__(
        self,
        db: Session,
        hasher: PasswordHasher,
        signer: TokenSigner,
        mailer: Mailer,
        codes: VerificationCodes | None = None,
    ):
        self.db = db
        self.hasher = hasher
        self.signer = signer
        self.mailer = mailer
        self.codes = codes or VerificationCodes()

    def get_user_by_email(self, email: str | None) -> User | None:
        """Get a user by email."""
        if not email:
            return None
        return self.db.query(User).filter(User.email == email).first()

    def register(
        self,
        email: str | None,
        password: str | None,
        first_name: str | None,
        last_name: str | None,
        bio: str | None = None,
    ) -> User:
        """Create a user and profile, persisting them only once the verification email is sent."""
        if not email or not password or not first_name or not last_name:
            raise ValidationError(MISSING_FIELDS)

        if self.get_user_by_email(email):
            raise ConflictError("User already exists.")

        profile = Profile(first_name=first_name, last_name=last_name, bio=bio)
        user = User(
            email=email,
            password_hash=self.hasher.hash(password),
            roles=list(DEFAULT_ROLES),
            verification_code=self.codes.issue_code(),
            profile=profile,
        )

        subject, html = verification_email(user.verification_code)
        try:
            self.mailer.send(email, subject, html)
        except DeliveryError as e:
            logger.error(f"Registration aborted for {email}: {e}")
            raise DeliveryError("Failed to send verification email.") from e

        self.db.add(profile)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # A concurrent registration claimed the email after the existence check
            self.db.rollback()
            raise ConflictError("User already exists.") from e
        self.db.refresh(user)
        logger.info(f"Registered user {user.id} ({email}), verification pending")
        return user

    def login(self, email: str | None, password: str | None) -> str:
        """Validate credentials and return a signed bearer token."""
        if not email or not password:
            raise ValidationError(MISSING_FIELDS)

        user = self.get_user_by_email(email)
        if not user:
            raise NotFoundError("User not found.")

        if not self.hasher.verify(password, user.password_hash):
            logger.warning(f"Failed login for user {user.id}")
            raise InvalidCredentialsError("Invalid password.")

        return self.signer.create(user.id, user.email, user.roles or [])

    def authenticate(self, token: str) -> User | None:
        """Resolve a bearer token to its user, or None if it is invalid."""
        payload = self.signer.decode(token)
        if payload is None:
            return None

        user_id = payload.get("sub")
        if user_id is None:
            return None

        try:
            return self.db.query(User).filter(User.id == int(user_id)).first()
        except ValueError:
            return None

    def _consume_code(self, email: str | None, code: Any) -> User:
        user = self.get_user_by_email(email)
        if not self.codes.check_code(user, code):
            logger.warning(f"Invalid verification code submitted for {email}")
            raise InvalidCodeError("Invalid verification code.")
        return user

    def verify_email(self, email: str | None, code: Any) -> User:
        """Confirm a pending registration."""
        user = self._consume_code(email, code)
        user.verification_code = None
        self.db.commit()
        logger.info(f"Email verified for user {user.id}")
        return user

    def forgot_password(self, email: str | None) -> User:
        """Replace the user's pending code with a fresh one and email it.

        Any pending email verification code is overwritten. Issued tokens stay valid.
        """
        user = self.get_user_by_email(email)
        if not user:
            raise NotFoundError("User not found.")

        user.verification_code = self.codes.issue_code()
        self.db.commit()

        subject, html = password_reset_email(user.verification_code)
        try:
            self.mailer.send(user.email, subject, html)
        except DeliveryError as e:
            raise DeliveryError("Failed to send password reset email.") from e

        logger.info(f"Password reset code issued for user {user.id}")
        return user

    def change_password(self, email: str | None, code: Any, new_password: str | None) -> User:
        """Set a new password using the emailed reset code."""
        user = self._consume_code(email, code)
        if not new_password:
            raise ValidationError(MISSING_FIELDS)

        user.password_hash = self.hasher.hash(new_password)
        user.verification_code = None
        self.db.commit()
        logger.info(f"Password changed for user {user.id}")
        return user
