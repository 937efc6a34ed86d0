"""Pomodoro session endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from focusflow.api.params import parse_date_param
from focusflow.api.pomodoro_models import (
    EndSessionRequest,
    InterruptionRequest,
    SessionListResponse,
    StartSessionRequest,
)
from focusflow.auth.dependencies import get_current_user
from focusflow.database.database import get_db
from focusflow.database.session_repository import SessionRepository
from focusflow.errors import InternalError
from focusflow.models.analytics import SummaryStats
from focusflow.models.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from focusflow.models.session import PomodoroSession
from focusflow.models.session_factory import create_session
from focusflow.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pomodoro", tags=["pomodoro"])


@router.post("/start", response_model=PomodoroSession, status_code=status.HTTP_201_CREATED)
async def start_session(
    request: StartSessionRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Start a new session owned by the current user."""
    task = request.task.model_dump() if request.task else None
    session = create_session(current_user.id, request.duration, request.type, task)
    try:
        return SessionRepository(db).create(session)
    except SQLAlchemyError as e:
        logger.error(f"Could not start session for user {current_user.id}: {type(e).__name__}: {str(e)}")
        raise InternalError("Could not start session")


@router.patch("/{session_id}/end", response_model=PomodoroSession)
async def end_session(
    session_id: str,
    request: EndSessionRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """End a session: sets endTime, completed and productivity."""
    try:
        return SessionRepository(db).end(current_user.id, session_id, request.productivity, request.notes)
    except SQLAlchemyError as e:
        logger.error(f"Could not end session {session_id}: {type(e).__name__}: {str(e)}")
        raise InternalError("Could not end session")


@router.post("/{session_id}/interruption", response_model=PomodoroSession)
async def record_interruption(
    session_id: str,
    request: InterruptionRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Append an interruption to a session."""
    try:
        session = SessionRepository(db).add_interruption(current_user.id, session_id, request.reason)
    except SQLAlchemyError as e:
        logger.error(f"Could not record interruption on session {session_id}: {type(e).__name__}: {str(e)}")
        raise InternalError("Could not record interruption")
    logger.info(f"Interruption recorded on session {session_id} ({len(session.interruptions)} total)")
    return session


@router.get("", response_model=SessionListResponse)
async def list_sessions(
    completed: Optional[bool] = None,
    session_type: Optional[str] = Query(None, alias="type"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    skip: int = Query(0, ge=0),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the current user's sessions with filters, sorting and pagination."""
    try:
        sessions, total = SessionRepository(db).list(
            current_user.id,
            completed=completed,
            session_type=session_type,
            start_date=parse_date_param(start_date, "startDate"),
            end_date=parse_date_param(end_date, "endDate"),
            sort_by=sort_by,
            limit=limit,
            skip=skip,
        )
    except SQLAlchemyError as e:
        logger.error(f"Could not fetch sessions for user {current_user.id}: {type(e).__name__}: {str(e)}")
        raise InternalError("Could not fetch sessions")
    return SessionListResponse(sessions=sessions, total=total, has_more=total > skip + limit)


@router.get("/stats", response_model=SummaryStats)
async def session_stats(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Totals over the current user's completed sessions."""
    start = parse_date_param(start_date, "startDate")
    end = parse_date_param(end_date, "endDate")
    try:
        return SessionRepository(db).summary_stats(current_user.id, start, end)
    except SQLAlchemyError as e:
        logger.error(f"Could not fetch statistics for user {current_user.id}: {type(e).__name__}: {str(e)}")
        raise InternalError("Could not fetch statistics")
