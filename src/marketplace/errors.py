"""
Error taxonomy for remote marketplace operations.

None of these are retried by this package; controllers catch them and show
``user_message`` to the user.
"""

from typing import Optional


class MarketplaceError(Exception):
    """Base class for every recoverable marketplace failure."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def user_message(self) -> str:
        return self.message


class TransportError(MarketplaceError):
    """Network or service unavailable."""

    default_message = "The marketplace service is unavailable. Please try again."


class NotFoundError(MarketplaceError):
    """The requested id does not exist."""

    default_message = "Listing not found."

    def __init__(self, record_id: str, message: Optional[str] = None):
        super().__init__(message or f"No record with id {record_id}")
        self.record_id = record_id


class ValidationError(MarketplaceError):
    """The store rejected the shape of a record."""

    default_message = "The listing was rejected by the store."


class UploadError(MarketplaceError):
    """Writing an image to object storage failed."""

    default_message = "Failed to upload image"

    def __init__(self, message: Optional[str] = None, uploaded_count: int = 0):
        super().__init__(message)
        self.uploaded_count = uploaded_count


class AuthenticationError(MarketplaceError):
    """The auth provider rejected the credentials or the session."""

    default_message = "Sign in failed. Check your email and password."
