"""Analytics endpoints. Read-only; every query is scoped to the current user."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from focusflow.auth.dependencies import get_current_user
from focusflow.database.database import get_db
from focusflow.database.session_repository import SessionRepository
from focusflow.engine.analytics import (
    build_insights,
    category_breakdown,
    daily_trends,
    hourly_patterns,
    trend_window,
)
from focusflow.errors import InternalError
from focusflow.models.analytics import CategoryStat, DailyTrend, HourlyPattern, Insights
from focusflow.models.constants import DEFAULT_TREND_DAYS, MAX_TREND_DAYS
from focusflow.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/daily", response_model=List[DailyTrend])
async def get_daily_trends(
    days: int = Query(DEFAULT_TREND_DAYS, ge=1, le=MAX_TREND_DAYS),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Daily productivity trends over the last `days` days."""
    start, end = trend_window(days)
    logger.debug(f"[Daily] user={current_user.id} from {start.isoformat()} to {end.isoformat()}")
    try:
        sessions = SessionRepository(db).get_completed(current_user.id, start_date=start, end_date=end)
    except SQLAlchemyError as e:
        logger.error(f"[Daily] {type(e).__name__}: {str(e)}")
        raise InternalError("Could not fetch daily analytics")
    return daily_trends(sessions)


@router.get("/patterns", response_model=List[HourlyPattern])
async def get_hourly_patterns(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Productivity by hour of day."""
    try:
        sessions = SessionRepository(db).get_completed(current_user.id)
    except SQLAlchemyError as e:
        logger.error(f"[Patterns] {type(e).__name__}: {str(e)}")
        raise InternalError("Could not fetch productivity patterns")
    return hourly_patterns(sessions)


@router.get("/categories", response_model=List[CategoryStat])
async def get_category_breakdown(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Time and productivity per task category."""
    try:
        sessions = SessionRepository(db).get_completed(current_user.id)
    except SQLAlchemyError as e:
        logger.error(f"[Categories] {type(e).__name__}: {str(e)}")
        raise InternalError("Could not fetch category analytics")
    return category_breakdown(sessions)


@router.get("/insights", response_model=Insights)
async def get_insights(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Most productive hours, common interruptions and recommendations."""
    try:
        sessions = SessionRepository(db).get_all(current_user.id)
    except SQLAlchemyError as e:
        logger.error(f"[Insights] {type(e).__name__}: {str(e)}")
        raise InternalError("Could not generate insights")
    return build_insights(sessions)
