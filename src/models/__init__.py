"""SQLAlchemy models."""

from src.models.profile import Profile
from src.models.task import Task
from src.models.user import User

__all__ = [
    "User",
    "Profile",
    "Task",
]
