"""Domain errors raised by services and rendered by the API layer."""

from fastapi import status


class AppError(Exception):
    """Base class for errors surfaced to API clients.

    ``message`` is rendered as ``{"error": message}``. When ``field_errors``
    is set the body is ``{"errors": {field: message}}`` instead.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str = "",
        field_errors: dict[str, str] | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message or "; ".join(f"{k}: {v}" for k, v in (field_errors or {}).items()))
        self.message = message
        self.field_errors = field_errors
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> dict:
        """Build the JSON response body."""
        if self.field_errors:
            return {"errors": self.field_errors}
        return {"error": self.message}


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AppError):
    """Resource already exists (duplicate email)."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """Resource does not exist or is not visible to the caller."""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidCredentialsError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidCodeError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class DeliveryError(AppError):
    """Outbound email could not be sent."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
