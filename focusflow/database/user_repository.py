"""Repository for User database operations."""

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session

from focusflow.models.user import User, Preferences
from focusflow.database.models import UserDB

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        return user_db.to_pydantic() if user_db else None

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (normalized) email."""
        user_db = self.db.query(UserDB).filter(UserDB.email == email).first()
        return user_db.to_pydantic() if user_db else None

    def exists(self, username: str, email: str) -> bool:
        """Whether any user already holds this username or email."""
        return self.db.query(UserDB.id).filter(
            or_(UserDB.username == username, UserDB.email == email)
        ).first() is not None

    def create(self, user: User) -> User:
        """Create a new user."""
        try:
            user_db = UserDB.from_pydantic(user)
            self.db.add(user_db)
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Created user {user.id}: {user.username}")
            return user_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create user {user.id}: {type(e).__name__}: {str(e)}")
            raise

    def update_preferences(self, user_id: str, preferences: Preferences) -> Optional[Preferences]:
        """Replace a user's stored preferences. Returns None if the user does not exist."""
        user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        if not user_db:
            return None

        # Assign a new dict so the JSON column is flagged dirty
        user_db.preferences = preferences.model_dump()
        user_db.updated_at = datetime.utcnow()
        try:
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Updated preferences for user {user_id}")
            return user_db.to_pydantic().preferences
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update preferences for user {user_id}: {type(e).__name__}: {str(e)}")
            raise
