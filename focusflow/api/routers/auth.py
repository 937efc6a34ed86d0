"""Authentication endpoints: register, login, profile and preferences."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from focusflow.api.auth_models import AuthResponse, LoginRequest, PreferencesResponse, RegisterRequest
from focusflow.auth import accounts
from focusflow.auth.dependencies import get_current_user
from focusflow.database.database import get_db
from focusflow.database.user_repository import UserRepository
from focusflow.errors import InternalError
from focusflow.models.user import User, UserPublic, UserSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user and return a token.

    Sync handler: FastAPI runs it in the threadpool, keeping bcrypt off the event loop.
    """
    try:
        token, user = accounts.register(
            UserRepository(db), request.username, request.email, request.password
        )
    except SQLAlchemyError as e:
        logger.error(f"Register failed: {type(e).__name__}: {str(e)}")
        raise InternalError("Server error")
    return AuthResponse(token=token, user=UserSummary.from_user(user))


@router.post("/login", response_model=AuthResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Log in with email and password (sync, for the same reason as register)."""
    try:
        token, user = accounts.login(UserRepository(db), request.email, request.password)
    except SQLAlchemyError as e:
        logger.error(f"Login failed: {type(e).__name__}: {str(e)}")
        raise InternalError("Server error")
    return AuthResponse(token=token, user=UserSummary.from_user(user))


@router.get("/me", response_model=UserPublic)
async def me(current_user: User = Depends(get_current_user)):
    """Get the current user (without password hash)."""
    return UserPublic.from_user(current_user)


@router.patch("/preferences", response_model=PreferencesResponse)
async def update_preferences(
    fields: Dict[str, Any] = Body(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update a subset of the allow-listed timer preferences."""
    logger.debug(f"Preference update for user {current_user.id}: keys={sorted(fields)}")
    try:
        preferences = accounts.update_preferences(UserRepository(db), current_user.id, fields)
    except SQLAlchemyError as e:
        logger.error(f"Preference update failed for user {current_user.id}: {type(e).__name__}: {str(e)}")
        raise HTTPException(status_code=400, detail="Failed to update preferences")
    return PreferencesResponse(preferences=preferences)
