"""User model."""

from sqlalchemy import JSON, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin

DEFAULT_ROLES = ["USER"]


class User(Base, TimestampMixin):
    """User model for authentication and task ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    roles = Column(JSON, nullable=False, default=lambda: list(DEFAULT_ROLES))
    # Set while an email verification or password reset is pending
    verification_code = Column(Integer, nullable=True)
    profile_id = Column(Integer, ForeignKey("profiles.id"), nullable=True, unique=True)

    # Relationships
    profile = relationship("Profile", back_populates="user", foreign_keys=[profile_id])
    tasks = relationship("Task", back_populates="user", cascade="all, delete-orphan")
