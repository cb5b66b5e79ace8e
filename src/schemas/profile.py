"""Profile schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpdate(BaseModel):
    """Update a profile. Absent or null fields are left unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str | None = Field(None, alias="firstName", max_length=255)
    last_name: str | None = Field(None, alias="lastName", max_length=255)
    bio: str | None = Field(None, max_length=255)


class ProfileResponse(BaseModel):
    """Public profile fields."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    first_name: str = Field(serialization_alias="firstName")
    last_name: str = Field(serialization_alias="lastName")
    bio: str | None = None
    profile_picture: str | None = Field(None, serialization_alias="profilePicture")


class ProfilePictureResponse(BaseModel):
    """Result of a picture upload."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    profile_picture: str = Field(serialization_alias="profilePicture")
