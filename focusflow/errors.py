"""Error taxonomy for FocusFlow.

Every error raised by the core carries the HTTP status it maps to, so the API
layer can translate it without knowing which component raised it.
"""

from typing import List, Optional

from focusflow.models.validation import FieldError


class FocusFlowError(Exception):
    """Base class for all handled FocusFlow errors."""

    status_code = 500
    default_message = "Something went wrong!"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[FieldError]] = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)


class ValidationError(FocusFlowError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Validation failed"


class ConflictError(FocusFlowError):
    """Duplicate identity on registration."""

    status_code = 400
    default_message = "User with this email or username already exists"


class InvalidCredentialsError(FocusFlowError):
    """Login failure. Same message whether the email or the password was wrong."""

    status_code = 400
    default_message = "Invalid credentials"


class UnauthenticatedError(FocusFlowError):
    """Missing, malformed or expired bearer token."""

    status_code = 401
    default_message = "No token, authorization denied"


class NotFoundError(FocusFlowError):
    """Resource absent or owned by someone else."""

    status_code = 404
    default_message = "Not found"


class InternalError(FocusFlowError):
    """Store or unexpected failure."""

    status_code = 500
