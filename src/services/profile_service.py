"""Profile service for reading, editing and removing user profiles."""

import logging

from sqlalchemy.orm import Session

from src.exceptions import NotFoundError, ValidationError
from src.models.profile import Profile
from src.services.storage import EXTENSIONS, PictureStorage

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("first_name", "last_name", "bio")


class ProfileService:
    """Service for profile operations.

    Profiles are addressed by id only; no check is made that the caller owns them.
    """

    def __init__(self, db: Session, storage: PictureStorage, max_picture_bytes: int):
        self.db = db
        self.storage = storage
        self.max_picture_bytes = max_picture_bytes

    def get(self, profile_id: int) -> Profile:
        """Get a profile by id."""
        profile = self.db.get(Profile, profile_id)
        if profile is None:
            raise NotFoundError("Profile not found.")
        return profile

    def update(self, profile_id: int, fields: dict) -> Profile:
        """Overwrite each provided non-null field, leaving the rest unchanged."""
        profile = self.get(profile_id)
        for name in UPDATABLE_FIELDS:
            value = fields.get(name)
            if value is not None:
                setattr(profile, name, value)

        self.db.commit()
        self.db.refresh(profile)
        return profile

    def delete(self, profile_id: int) -> None:
        """Remove a profile. The owning user is kept and unlinked."""
        profile = self.get(profile_id)
        picture = profile.profile_picture

        self.db.delete(profile)
        self.db.commit()

        if picture:
            self.storage.delete(picture)
        logger.info(f"Deleted profile {profile_id}")

    def upload_picture(self, profile_id: int, content_type: str | None, data: bytes) -> Profile:
        """Store a new picture for the profile, replacing any previous one."""
        profile = self.get(profile_id)

        if content_type not in EXTENSIONS:
            raise ValidationError(
                field_errors={"profilePicture": "Please upload a JPEG, PNG, GIF or WebP image."}
            )
        if not data:
            raise ValidationError(field_errors={"profilePicture": "The uploaded file is empty."})
        if len(data) > self.max_picture_bytes:
            raise ValidationError(
                field_errors={
                    "profilePicture": f"The file is too large. Allowed maximum size is "
                    f"{self.max_picture_bytes} bytes."
                }
            )

        previous = profile.profile_picture
        profile.profile_picture = self.storage.save(data, content_type)
        self.db.commit()
        self.db.refresh(profile)

        if previous:
            self.storage.delete(previous)
        return profile
