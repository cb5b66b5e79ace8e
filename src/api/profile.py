"""Profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from src.api.dependencies import get_profile_service
from src.schemas.auth import MessageResponse
from src.schemas.profile import ProfilePictureResponse, ProfileResponse, ProfileUpdate
from src.services.profile_service import ProfileService

router = APIRouter(prefix="/api/profile", tags=["profile"])

# TODO: restrict these endpoints to the profile's owner once clients send a bearer token here


@router.get("/{profile_id}", response_model=ProfileResponse)
def get_profile(
    profile_id: int,
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Get a profile's public fields."""
    return profile_service.get(profile_id)


@router.put("/{profile_id}", response_model=MessageResponse)
def update_profile(
    profile_id: int,
    profile_data: ProfileUpdate,
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Update a profile. Omitted fields keep their current value."""
    profile_service.update(profile_id, profile_data.model_dump(exclude_unset=True))
    return MessageResponse(message="Profile updated successfully.")


@router.delete("/{profile_id}", response_model=MessageResponse)
def delete_profile(
    profile_id: int,
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Delete a profile without deleting its user."""
    profile_service.delete(profile_id)
    return MessageResponse(message="Profile deleted.")


@router.post("/{profile_id}/picture", response_model=ProfilePictureResponse)
async def upload_profile_picture(
    profile_id: int,
    file: Annotated[UploadFile, File(description="Profile picture (JPEG, PNG, GIF, or WebP)")],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Upload or replace the profile picture.

    Must stay async because UploadFile.read() is async.
    """
    data = await file.read()
    profile = profile_service.upload_picture(profile_id, file.content_type, data)
    return ProfilePictureResponse(
        message="Profile picture uploaded.", profile_picture=profile.profile_picture
    )
