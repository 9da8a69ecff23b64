"""
Profile module exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class ProfileNotFoundError(NotFoundError):
    """Raised when a user's profile row does not exist."""

    def __init__(
        self,
        user_id: str,
        message: str = "Profile not found",
    ):
        super().__init__(
            message,
            code="PROFILE_NOT_FOUND",
            details={"user_id": user_id},
        )


class InvalidPhotoUpdateError(ValidationError):
    """Raised when a photo update carries anything but a usable ``photo_url``."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_PHOTO_UPDATE")
