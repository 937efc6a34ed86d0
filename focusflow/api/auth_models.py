"""Request/response models for authentication endpoints."""

from typing import Optional
from pydantic import BaseModel, Field

from focusflow.models.base import CamelModel
from focusflow.models.user import Preferences, UserSummary


class RegisterRequest(BaseModel):
    """Request model for registration."""
    username: Optional[str] = Field(None, description="Unique username (at least 3 characters)")
    email: Optional[str] = Field(None, description="Unique email address")
    password: Optional[str] = Field(None, description="Password (at least 6 characters)")


class LoginRequest(BaseModel):
    """Request model for login."""
    email: Optional[str] = Field(None, description="Registered email address")
    password: Optional[str] = Field(None, description="Password")


class AuthResponse(CamelModel):
    """Response model for authentication."""
    token: str
    user: UserSummary


class PreferencesResponse(CamelModel):
    """Response model for a preferences update."""
    preferences: Preferences
