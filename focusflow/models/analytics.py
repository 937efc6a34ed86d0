"""Analytics result models for FocusFlow."""

from typing import List, Optional

from focusflow.models.base import CamelModel


class SummaryStats(CamelModel):
    """Totals over completed sessions in a date range."""
    total_sessions: int = 0
    total_minutes: int = 0
    avg_productivity: float = 0
    total_interruptions: int = 0


class DailyTrend(CamelModel):
    """One calendar day (UTC) of completed sessions."""
    date: str
    total_sessions: int
    total_minutes: int
    avg_productivity: Optional[float] = None
    interruption_count: int


class HourlyPattern(CamelModel):
    """Completed sessions grouped by the hour they started."""
    hour: int
    avg_productivity: Optional[float] = None
    total_sessions: int
    total_minutes: int


class CategoryStat(CamelModel):
    """Completed sessions grouped by task category."""
    category: str
    total_sessions: int
    total_minutes: int
    avg_productivity: Optional[float] = None
    interruption_count: int


class ProductiveHour(CamelModel):
    hour: int
    avg_productivity: float
    session_count: int


class InterruptionReason(CamelModel):
    reason: Optional[str] = None
    count: int


class Recommendation(CamelModel):
    type: str
    message: str


class Insights(CamelModel):
    """Top hours, top interruption reasons and generated advice."""
    productive_hours: List[ProductiveHour]
    interruptions: List[InterruptionReason]
    recommendations: List[Recommendation]
