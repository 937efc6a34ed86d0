"""SQLAlchemy database models for FocusFlow."""

from datetime import datetime
import uuid
from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON, ForeignKey, Index
from sqlalchemy.orm import relationship, validates

from typing import Union, TypeVar, Type
from focusflow.database.database import Base
from focusflow.models.session import SessionType

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string)."""
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default.

    Session type values are camelCase ("shortBreak"), so no case folding.
    """
    if not value:
        return default
    try:
        return enum_class(value)
    except (ValueError, AttributeError):
        return default


class UserDB(Base):
    """Database model for User."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # Identity
    username = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)

    # Timer preferences (stored as JSON object keyed by model field name)
    preferences = Column(JSON, nullable=False, default=dict)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from focusflow.models.user import User, Preferences
        return User(
            id=self.id,
            username=self.username,
            email=self.email,
            password_hash=self.password_hash,
            preferences=Preferences(**(self.preferences or {})),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, user):
        """Create database model from Pydantic model."""
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            preferences=user.preferences.model_dump(),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class PomodoroSessionDB(Base):
    """Database model for PomodoroSession."""

    __tablename__ = "pomodoro_sessions"
    __table_args__ = (
        Index("ix_pomodoro_sessions_user_start", "user_id", "start_time"),
        Index("ix_pomodoro_sessions_user_completed", "user_id", "completed"),
    )

    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # Owner (set once at creation)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # Timing
    start_time = Column(DateTime, nullable=False, default=datetime.utcnow)
    end_time = Column(DateTime, nullable=True)
    duration = Column(Integer, nullable=False)

    type = Column(String, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)

    # Task descriptor (flattened)
    task_title = Column(String, nullable=True)
    task_description = Column(String, nullable=True)
    task_category = Column(String, nullable=True, index=True)

    productivity = Column(Integer, nullable=True)
    notes = Column(String, nullable=True)

    interruptions = relationship(
        "InterruptionDB",
        order_by="InterruptionDB.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @validates("user_id", "type")
    def _validate_immutable(self, key, value):
        current = getattr(self, key)
        if current is not None and value != current:
            raise ValueError(f"Session {key} cannot be changed once set")
        return value

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from focusflow.models.session import PomodoroSession, TaskInfo, Interruption

        task = None
        if self.task_title is not None or self.task_description is not None or self.task_category is not None:
            task = TaskInfo(
                title=self.task_title,
                description=self.task_description,
                category=self.task_category,
            )

        return PomodoroSession(
            id=self.id,
            user_id=self.user_id,
            start_time=self.start_time,
            end_time=self.end_time,
            duration=self.duration,
            type=value_to_enum(self.type, SessionType, SessionType.WORK),
            completed=self.completed,
            task=task,
            interruptions=[
                Interruption(timestamp=i.timestamp, reason=i.reason)
                for i in self.interruptions
            ],
            productivity=self.productivity,
            notes=self.notes,
        )

    @classmethod
    def from_pydantic(cls, session):
        """Create database model from Pydantic model (interruptions excluded; they are appended separately)."""
        task = session.task
        return cls(
            id=session.id,
            user_id=session.user_id,
            start_time=session.start_time,
            end_time=session.end_time,
            duration=session.duration,
            type=enum_to_value(session.type),
            completed=session.completed,
            task_title=task.title if task else None,
            task_description=task.description if task else None,
            task_category=task.category if task else None,
            productivity=session.productivity,
            notes=session.notes,
        )


class InterruptionDB(Base):
    """One interruption appended to a session.

    Stored as its own row so appending is a single INSERT; the autoincrement
    id gives insertion order.
    """

    __tablename__ = "session_interruptions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String, ForeignKey("pomodoro_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow)
    reason = Column(String, nullable=True)
