"""Repository for Pomodoro session database operations.

Every query is scoped by `user_id`. A session owned by another user is
treated exactly like a missing one.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy import asc, desc
from sqlalchemy.orm import Session

from focusflow.errors import NotFoundError, ValidationError
from focusflow.models.analytics import SummaryStats
from focusflow.models.constants import DEFAULT_PAGE_LIMIT, DEFAULT_SORT
from focusflow.models.session import PomodoroSession
from focusflow.models.validation import FieldError, normalize_reason, validate_completion
from focusflow.database.models import PomodoroSessionDB, InterruptionDB
from focusflow.engine.analytics import summarize

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1)

# API sort field name -> column
SORTABLE_COLUMNS = {
    "startTime": PomodoroSessionDB.start_time,
    "endTime": PomodoroSessionDB.end_time,
    "duration": PomodoroSessionDB.duration,
    "type": PomodoroSessionDB.type,
    "completed": PomodoroSessionDB.completed,
    "productivity": PomodoroSessionDB.productivity,
}


def parse_sort(sort_by: Optional[str]):
    """Parse `field:direction` into an ORDER BY clause.

    Direction `desc` sorts descending; anything else (or nothing) ascending.
    """
    field, _, direction = (sort_by or DEFAULT_SORT).partition(":")
    column = SORTABLE_COLUMNS.get(field)
    if column is None:
        raise ValidationError(
            "Invalid sort field",
            errors=[FieldError(
                field="sortBy",
                message=f"sortBy must be one of: {', '.join(SORTABLE_COLUMNS)}",
            )],
        )
    return desc(column) if direction == "desc" else asc(column)


class SessionRepository:
    """Repository for PomodoroSession database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _get_owned(self, user_id: str, session_id: str) -> PomodoroSessionDB:
        session_db = self.db.query(PomodoroSessionDB).filter(
            PomodoroSessionDB.id == session_id,
            PomodoroSessionDB.user_id == user_id,
        ).first()
        if not session_db:
            raise NotFoundError("Session not found")
        return session_db

    def _commit(self, session_db: PomodoroSessionDB, action: str) -> PomodoroSession:
        try:
            self.db.commit()
            self.db.refresh(session_db)
            logger.debug(f"{action} session {session_db.id}")
            return session_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to save session {session_db.id} ({action.lower()}): {type(e).__name__}: {str(e)}")
            raise

    def create(self, session: PomodoroSession) -> PomodoroSession:
        """Persist a new session."""
        session_db = PomodoroSessionDB.from_pydantic(session)
        self.db.add(session_db)
        return self._commit(session_db, "Created")

    def get(self, user_id: str, session_id: str) -> Optional[PomodoroSession]:
        """Get session by ID for a specific user."""
        session_db = self.db.query(PomodoroSessionDB).filter(
            PomodoroSessionDB.id == session_id,
            PomodoroSessionDB.user_id == user_id,
        ).first()
        return session_db.to_pydantic() if session_db else None

    def end(
        self,
        user_id: str,
        session_id: str,
        productivity: Optional[int],
        notes: Optional[str] = None,
        ended_at: Optional[datetime] = None,
    ) -> PomodoroSession:
        """Mark a session completed.

        Allowed in any state; ending twice overwrites the previous end.

        Raises:
            NotFoundError: if the user has no session with this ID
            ValidationError: if productivity is missing or out of range
        """
        session_db = self._get_owned(user_id, session_id)

        errors = validate_completion(True, productivity)
        if errors:
            raise ValidationError("Could not end session", errors=errors)

        session_db.end_time = ended_at or datetime.utcnow()
        session_db.completed = True
        session_db.productivity = productivity
        session_db.notes = notes
        return self._commit(session_db, "Ended")

    def add_interruption(
        self,
        user_id: str,
        session_id: str,
        reason: Optional[str],
        timestamp: Optional[datetime] = None,
    ) -> PomodoroSession:
        """Append an interruption to a session (single-row insert).

        Raises:
            NotFoundError: if the user has no session with this ID
        """
        session_db = self._get_owned(user_id, session_id)

        self.db.add(InterruptionDB(
            session_id=session_db.id,
            timestamp=timestamp or datetime.utcnow(),
            reason=normalize_reason(reason),
        ))
        return self._commit(session_db, "Interrupted")

    def list(
        self,
        user_id: str,
        completed: Optional[bool] = None,
        session_type: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        sort_by: Optional[str] = None,
        limit: int = DEFAULT_PAGE_LIMIT,
        skip: int = 0,
    ) -> Tuple[List[PomodoroSession], int]:
        """List a user's sessions with filters, sorting and offset pagination.

        Returns:
            (page of sessions, total matching count)
        """
        order = parse_sort(sort_by)

        query = self.db.query(PomodoroSessionDB).filter(PomodoroSessionDB.user_id == user_id)
        if completed is not None:
            query = query.filter(PomodoroSessionDB.completed == completed)
        if session_type:
            query = query.filter(PomodoroSessionDB.type == session_type)
        if start_date:
            query = query.filter(PomodoroSessionDB.start_time >= start_date)
        if end_date:
            query = query.filter(PomodoroSessionDB.start_time <= end_date)

        total = query.count()
        sessions_db = query.order_by(order, PomodoroSessionDB.id).offset(skip).limit(limit).all()
        return [s.to_pydantic() for s in sessions_db], total

    def get_completed(
        self,
        user_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[PomodoroSession]:
        """Completed sessions for a user, oldest first, optionally within an inclusive start-time range."""
        query = self.db.query(PomodoroSessionDB).filter(
            PomodoroSessionDB.user_id == user_id,
            PomodoroSessionDB.completed.is_(True),
        )
        if start_date:
            query = query.filter(PomodoroSessionDB.start_time >= start_date)
        if end_date:
            query = query.filter(PomodoroSessionDB.start_time <= end_date)
        sessions_db = query.order_by(asc(PomodoroSessionDB.start_time), PomodoroSessionDB.id).all()
        return [s.to_pydantic() for s in sessions_db]

    def get_all(self, user_id: str) -> List[PomodoroSession]:
        """All sessions for a user, oldest first."""
        sessions_db = self.db.query(PomodoroSessionDB).filter(
            PomodoroSessionDB.user_id == user_id,
        ).order_by(asc(PomodoroSessionDB.start_time), PomodoroSessionDB.id).all()
        return [s.to_pydantic() for s in sessions_db]

    def summary_stats(
        self,
        user_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> SummaryStats:
        """Totals over completed sessions in an inclusive range (default: all time up to now)."""
        sessions = self.get_completed(
            user_id,
            start_date=start_date or EPOCH,
            end_date=end_date or datetime.utcnow(),
        )
        return summarize(sessions)
