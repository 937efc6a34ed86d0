"""Pomodoro session data model for FocusFlow."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from focusflow.models.base import CamelModel


class SessionType(str, Enum):
    """Pomodoro session type enumeration."""
    WORK = "work"
    SHORT_BREAK = "shortBreak"
    LONG_BREAK = "longBreak"


class TaskInfo(CamelModel):
    """What the user was working on during a session."""

    title: Optional[str] = Field(None, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    category: Optional[str] = Field(None, description="Free-form task category")


class Interruption(CamelModel):
    """A distraction recorded against a session."""

    timestamp: datetime = Field(..., description="When the interruption was recorded (UTC)")
    reason: Optional[str] = Field(None, description="What interrupted the session")


class PomodoroSession(CamelModel):
    """Canonical Pomodoro session model."""

    id: str = Field(..., description="Unique session identifier (UUID v4)")
    user_id: str = Field(..., description="User ID who owns this session")
    start_time: datetime = Field(..., description="Session start (UTC)")
    end_time: Optional[datetime] = Field(None, description="Session end (UTC), set when the session is ended")
    duration: int = Field(..., description="Planned duration in minutes")
    type: SessionType = Field(..., description="Session type")
    completed: bool = Field(False, description="Whether the session has been ended")
    task: Optional[TaskInfo] = Field(None, description="Task worked on during the session")
    interruptions: List[Interruption] = Field(default_factory=list, description="Interruptions in insertion order")
    productivity: Optional[int] = Field(None, description="Self-rated productivity (1-10), set when ended")
    notes: Optional[str] = Field(None, description="Free-text notes")
