"""Account operations: registration, login and preference updates."""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Tuple

from sqlalchemy.exc import IntegrityError

from focusflow.auth.jwt import create_access_token
from focusflow.auth.passwords import dummy_hash, hash_password, verify_password
from focusflow.database.user_repository import UserRepository
from focusflow.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from focusflow.models.user import Preferences, User
from focusflow.models.validation import (
    normalize_email,
    validate_login,
    validate_preferences_update,
    validate_registration,
)

logger = logging.getLogger(__name__)

# API preference name -> model field
PREFERENCE_FIELDS = {
    "pomodoroLength": "pomodoro_length",
    "shortBreakLength": "short_break_length",
    "longBreakLength": "long_break_length",
    "dailyGoal": "daily_goal",
}


def register(users: UserRepository, username: str, email: str, password: str) -> Tuple[str, User]:
    """Create a user and issue a token.

    Returns:
        (access token, created user)

    Raises:
        ValidationError: if any field is malformed
        ConflictError: if the username or email is already taken
    """
    errors = validate_registration(username, email, password)
    if errors:
        raise ValidationError(errors=errors)

    username = username.strip()
    email = normalize_email(email)

    if users.exists(username, email):
        logger.info(f"Registration rejected, identity already taken: {username}")
        raise ConflictError()

    now = datetime.utcnow()
    user = User(
        id=str(uuid.uuid4()),
        username=username,
        email=email,
        password_hash=hash_password(password),
        preferences=Preferences(),
        created_at=now,
        updated_at=now,
    )
    try:
        user = users.create(user)
    except IntegrityError:
        # Lost a race with a concurrent registration for the same identity
        raise ConflictError()

    logger.info(f"Registered user {user.id}")
    return create_access_token(user.id), user


def login(users: UserRepository, email: str, password: str) -> Tuple[str, User]:
    """Verify credentials and issue a token.

    Raises:
        ValidationError: if the email or password is malformed
        InvalidCredentialsError: if the email is unknown or the password is wrong
    """
    errors = validate_login(email, password)
    if errors:
        raise ValidationError(errors=errors)

    user = users.get_by_email(normalize_email(email))
    if user is None:
        # Burn the same bcrypt time as a real check
        verify_password(password, dummy_hash())
        logger.info("Login failed: unknown email")
        raise InvalidCredentialsError()

    if not verify_password(password, user.password_hash):
        logger.info(f"Login failed: password mismatch for user {user.id}")
        raise InvalidCredentialsError()

    return create_access_token(user.id), user


def update_preferences(users: UserRepository, user_id: str, fields: Dict[str, Any]) -> Preferences:
    """Merge allow-listed preference fields into the user's preferences.

    Raises:
        ValidationError: if a key is outside the allow-list or a value is not a positive integer
        NotFoundError: if the user no longer exists
    """
    errors = validate_preferences_update(fields)
    if errors:
        raise ValidationError("Invalid updates in preferences", errors=errors)

    user = users.get(user_id)
    if user is None:
        raise NotFoundError("User not found")

    updates = {PREFERENCE_FIELDS[key]: value for key, value in fields.items()}
    merged = user.preferences.model_copy(update=updates)

    preferences = users.update_preferences(user_id, merged)
    if preferences is None:
        raise NotFoundError("User not found")
    logger.debug(f"Preferences updated for user {user_id}: {sorted(fields)}")
    return preferences
