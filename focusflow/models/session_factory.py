"""Session creation factory for FocusFlow.

Centralizes how a new (in-progress) session is built so every caller gets the
same defaults and the same validation.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from focusflow.errors import ValidationError
from focusflow.models.session import PomodoroSession, TaskInfo
from focusflow.models.validation import validate_new_session


def create_session(
    user_id: str,
    duration: Any,
    session_type: Any,
    task: Optional[Dict[str, Any]] = None,
    start_time: Optional[datetime] = None,
) -> PomodoroSession:
    """Build a new in-progress session owned by `user_id`.

    Args:
        user_id: Owner (verified identity)
        duration: Planned length in minutes
        session_type: One of "work", "shortBreak", "longBreak"
        task: Optional {title, description, category}
        start_time: Defaults to now (UTC)

    Raises:
        ValidationError: if duration, type or task are invalid
    """
    errors = validate_new_session(duration, session_type, task)
    if errors:
        raise ValidationError("Could not start session", errors=errors)

    task_info = None
    if task and any(value is not None for value in task.values()):
        task_info = TaskInfo(
            title=task.get("title"),
            description=task.get("description"),
            category=task.get("category"),
        )

    return PomodoroSession(
        id=str(uuid.uuid4()),
        user_id=user_id,
        start_time=start_time or datetime.utcnow(),
        end_time=None,
        duration=duration,
        type=session_type,
        completed=False,
        task=task_info,
        interruptions=[],
        productivity=None,
        notes=None,
    )
