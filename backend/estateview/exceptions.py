"""Application exceptions mapped to HTTP error envelopes."""

from typing import Optional

from fastapi import status


class EstateViewError(Exception):
    """Base exception for EstateView application."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Something went wrong!"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(EstateViewError):
    """Requested record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"

    @classmethod
    def for_entity(cls, entity: str) -> "NotFoundError":
        return cls(f"{entity} not found")


class UploadRejectedError(EstateViewError):
    """Uploaded file failed the type or size constraint."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Only image files are allowed"


class UnauthorizedError(EstateViewError):
    """Missing or invalid admin credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"
