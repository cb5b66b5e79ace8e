"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRegister(BaseModel):
    """User registration request.

    Required fields are optional here so that a missing field is reported as
    "Missing required fields." by the auth service rather than per field.
    """

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)
    first_name: str | None = Field(None, alias="firstName", max_length=255)
    last_name: str | None = Field(None, alias="lastName", max_length=255)
    bio: str | None = Field(None, max_length=255)


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class VerifyEmailRequest(BaseModel):
    """Email verification request."""

    email: EmailStr | None = Field(None, max_length=255)
    code: int | str | None = None


class ForgotPasswordRequest(BaseModel):
    """Password reset code request."""

    email: EmailStr | None = Field(None, max_length=255)


class ChangePasswordRequest(BaseModel):
    """Password change using an emailed reset code."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr | None = Field(None, max_length=255)
    code: int | str | None = None
    new_password: str | None = Field(None, alias="newPassword", max_length=128)


class Token(BaseModel):
    """JWT token response."""

    token: str


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
