"""Profile model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Profile(Base, TimestampMixin):
    """Personal details linked one-to-one with a user."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    bio = Column(String(255), nullable=True)
    profile_picture = Column(String(255), nullable=True)  # stored filename

    # The foreign key lives on users.profile_id; deleting a profile nulls it
    user = relationship("User", back_populates="profile", uselist=False)
