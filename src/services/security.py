"""Password hashing and JWT signing collaborators."""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from src.config import Settings


class PasswordHasher:
    """One-way salted password hashing backed by passlib."""

    def __init__(self, schemes: list[str] | None = None):
        self._context = CryptContext(schemes=schemes or ["bcrypt"], deprecated="auto")

    def hash(self, password: str) -> str:
        """Hash a password."""
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return self._context.verify(plain_password, hashed_password)


class TokenSigner:
    """Issues and validates bearer tokens."""

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.expiration = timedelta(minutes=settings.jwt_expiration_minutes)

    def create(self, user_id: int, email: str, roles: list[str]) -> str:
        """Create a JWT access token."""
        expire = datetime.now(UTC) + self.expiration
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "roles": list(roles),
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict | None:
        """Decode and validate a JWT token, returning None when invalid or expired."""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            return None
