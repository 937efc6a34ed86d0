"""User data model for FocusFlow."""

from datetime import datetime

from pydantic import Field

from focusflow.models.base import CamelModel
from focusflow.models.constants import (
    DEFAULT_DAILY_GOAL,
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_POMODORO_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
)


class Preferences(CamelModel):
    """Per-user timer preferences."""

    pomodoro_length: int = Field(DEFAULT_POMODORO_MINUTES, description="Work interval in minutes")
    short_break_length: int = Field(DEFAULT_SHORT_BREAK_MINUTES, description="Short break in minutes")
    long_break_length: int = Field(DEFAULT_LONG_BREAK_MINUTES, description="Long break in minutes")
    daily_goal: int = Field(DEFAULT_DAILY_GOAL, description="Target number of work sessions per day")


class User(CamelModel):
    """User model for FocusFlow."""

    id: str = Field(..., description="Unique user identifier (UUID v4)")
    username: str = Field(..., description="Unique username")
    email: str = Field(..., description="Unique, lower-cased email address")
    password_hash: str = Field(..., exclude=True, description="bcrypt hash; never serialized")
    preferences: Preferences = Field(default_factory=Preferences)
    created_at: datetime = Field(..., description="User creation timestamp")
    updated_at: datetime = Field(..., description="User last update timestamp")


class UserPublic(CamelModel):
    """Secret-free view of a user."""

    id: str
    username: str
    email: str
    preferences: Preferences
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            preferences=user.preferences,
            created_at=user.created_at,
        )


class UserSummary(CamelModel):
    """Identity fields returned alongside a freshly issued token."""

    id: str
    username: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(id=user.id, username=user.username, email=user.email)
