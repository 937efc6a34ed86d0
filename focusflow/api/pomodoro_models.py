"""Request/response models for Pomodoro session endpoints."""

from typing import List, Optional
from pydantic import BaseModel, Field, StrictInt

from focusflow.models.base import CamelModel
from focusflow.models.session import PomodoroSession


class TaskRequest(BaseModel):
    """Task descriptor attached to a new session."""
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None


class StartSessionRequest(BaseModel):
    """Request model for starting a session."""
    duration: Optional[StrictInt] = Field(None, description="Planned duration in minutes")
    type: Optional[str] = Field(None, description="work, shortBreak or longBreak")
    task: Optional[TaskRequest] = None


class EndSessionRequest(BaseModel):
    """Request model for ending a session."""
    productivity: Optional[StrictInt] = Field(None, description="Self-rated productivity, 1-10")
    notes: Optional[str] = None


class InterruptionRequest(BaseModel):
    """Request model for recording an interruption."""
    reason: Optional[str] = Field(None, description="What interrupted the session")


class SessionListResponse(CamelModel):
    """Response for session listing."""
    sessions: List[PomodoroSession]
    total: int
    has_more: bool
