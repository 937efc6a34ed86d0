"""Field-level validation rules for FocusFlow entities.

Each validator returns a list of ``FieldError`` (empty when the input is
valid) so callers can report every problem at once before touching the
database.
"""

from typing import Any, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel

from focusflow.models.constants import (
    ALLOWED_PREFERENCE_FIELDS,
    MAX_DAILY_GOAL,
    MAX_PASSWORD_BYTES,
    MAX_PREFERENCE_MINUTES,
    MAX_PRODUCTIVITY,
    MIN_PASSWORD_LENGTH,
    MIN_PRODUCTIVITY,
    MIN_USERNAME_LENGTH,
)
from focusflow.models.session import SessionType


class FieldError(BaseModel):
    """A single field-level validation failure."""
    field: str
    message: str


SESSION_TYPES = tuple(t.value for t in SessionType)


def normalize_email(email: str) -> str:
    """Lower-case and trim an email address (assumes it already validated)."""
    return email.strip().lower()


def _is_positive_int(value: Any) -> bool:
    # bool is an int subclass; reject it explicitly
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_registration(username: Optional[str], email: Optional[str], password: Optional[str]) -> List[FieldError]:
    """Validate registration input."""
    errors: List[FieldError] = []

    if not username or len(username.strip()) < MIN_USERNAME_LENGTH:
        errors.append(FieldError(
            field="username",
            message=f"Username must be at least {MIN_USERNAME_LENGTH} characters long",
        ))

    errors.extend(_validate_email(email))

    if not password or len(password) < MIN_PASSWORD_LENGTH:
        errors.append(FieldError(
            field="password",
            message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
        ))
    elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        errors.append(FieldError(
            field="password",
            message=f"Password must be at most {MAX_PASSWORD_BYTES} bytes long",
        ))

    return errors


def validate_login(email: Optional[str], password: Optional[str]) -> List[FieldError]:
    """Validate login input (shape only; credentials are checked separately)."""
    errors = _validate_email(email)
    if not password:
        errors.append(FieldError(field="password", message="Password is required"))
    return errors


def _validate_email(email: Optional[str]) -> List[FieldError]:
    if not email:
        return [FieldError(field="email", message="Invalid email format")]
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return [FieldError(field="email", message="Invalid email format")]
    return []


def validate_preferences_update(fields: Dict[str, Any]) -> List[FieldError]:
    """Validate a partial preferences update keyed by API field names.

    Any key outside the allow-list fails the whole update.
    """
    invalid_keys = [key for key in fields if key not in ALLOWED_PREFERENCE_FIELDS]
    if invalid_keys:
        return [
            FieldError(field=key, message="Invalid updates in preferences")
            for key in invalid_keys
        ]

    errors: List[FieldError] = []
    for key, value in fields.items():
        upper = MAX_DAILY_GOAL if key == "dailyGoal" else MAX_PREFERENCE_MINUTES
        if not _is_positive_int(value) or value > upper:
            errors.append(FieldError(field=key, message=f"{key} must be an integer between 1 and {upper}"))
    return errors


def validate_new_session(duration: Any, session_type: Any, task: Optional[Dict[str, Any]] = None) -> List[FieldError]:
    """Validate the inputs for starting a session."""
    errors: List[FieldError] = []

    if duration is None:
        errors.append(FieldError(field="duration", message="Duration is required"))
    elif not _is_positive_int(duration):
        errors.append(FieldError(field="duration", message="Duration must be a positive number of minutes"))

    if session_type is None:
        errors.append(FieldError(field="type", message="Type is required"))
    elif session_type not in SESSION_TYPES:
        errors.append(FieldError(
            field="type",
            message=f"Type must be one of: {', '.join(SESSION_TYPES)}",
        ))

    if task is not None:
        for key, value in task.items():
            if value is not None and not isinstance(value, str):
                errors.append(FieldError(field=f"task.{key}", message=f"task.{key} must be a string"))

    return errors


def validate_completion(completed: bool, productivity: Any) -> List[FieldError]:
    """Productivity is required (and bounded) exactly when a session is completed."""
    if not completed:
        return []
    if productivity is None:
        return [FieldError(
            field="productivity",
            message="Productivity is required when session is marked as completed.",
        )]
    if not isinstance(productivity, int) or isinstance(productivity, bool) or not (
        MIN_PRODUCTIVITY <= productivity <= MAX_PRODUCTIVITY
    ):
        return [FieldError(
            field="productivity",
            message=f"Productivity must be an integer between {MIN_PRODUCTIVITY} and {MAX_PRODUCTIVITY}",
        )]
    return []


def normalize_reason(reason: Optional[str]) -> Optional[str]:
    """Interruptions may omit a reason; blank reasons are stored as none."""
    if reason is None or not reason.strip():
        return None
    return reason.strip()
