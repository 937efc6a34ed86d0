"""Productivity analytics for FocusFlow.

Pure folds over lists of sessions. Nothing here touches the database: the
caller fetches the user's sessions (already scoped to that user) and passes
them in. Every function returns empty/zero results for an empty input.

Grouping preserves first-seen order, and every sort is stable, so ties keep
the order in which their groups first appeared.
"""

from collections import Counter
from datetime import datetime, timedelta
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Tuple

from focusflow.models.analytics import (
    CategoryStat,
    DailyTrend,
    HourlyPattern,
    Insights,
    InterruptionReason,
    ProductiveHour,
    Recommendation,
    SummaryStats,
)
from focusflow.models.constants import TOP_INTERRUPTION_REASONS, TOP_PRODUCTIVE_HOURS
from focusflow.models.session import PomodoroSession


class _Bucket:
    """Running totals for one group of sessions."""

    def __init__(self):
        self.sessions = 0
        self.minutes = 0
        self.interruptions = 0
        self.ratings: List[int] = []

    def add(self, session: PomodoroSession) -> None:
        self.sessions += 1
        self.minutes += session.duration
        self.interruptions += len(session.interruptions)
        if session.productivity is not None:
            self.ratings.append(session.productivity)

    @property
    def avg_productivity(self) -> Optional[float]:
        if not self.ratings:
            return None
        return sum(self.ratings) / len(self.ratings)


def _completed(sessions: Iterable[PomodoroSession]) -> List[PomodoroSession]:
    return [s for s in sessions if s.completed]


def _group(sessions: Iterable[PomodoroSession], key: Callable[[PomodoroSession], Hashable]) -> Dict[Hashable, _Bucket]:
    buckets: Dict[Hashable, _Bucket] = {}
    for session in sessions:
        buckets.setdefault(key(session), _Bucket()).add(session)
    return buckets


def trend_window(days: int, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Return the inclusive `[now - days, now]` window used by daily trends."""
    end = now or datetime.utcnow()
    return end - timedelta(days=days), end


def summarize(sessions: Iterable[PomodoroSession]) -> SummaryStats:
    """Totals over completed sessions; a zeroed record when there are none."""
    completed = _completed(sessions)
    if not completed:
        return SummaryStats()

    bucket = _group(completed, lambda s: None)[None]
    return SummaryStats(
        total_sessions=bucket.sessions,
        total_minutes=bucket.minutes,
        avg_productivity=bucket.avg_productivity or 0,
        total_interruptions=bucket.interruptions,
    )


def daily_trends(sessions: Iterable[PomodoroSession]) -> List[DailyTrend]:
    """Completed sessions per UTC calendar day, oldest day first. Days without sessions are omitted."""
    buckets = _group(_completed(sessions), lambda s: s.start_time.strftime("%Y-%m-%d"))
    return [
        DailyTrend(
            date=day,
            total_sessions=bucket.sessions,
            total_minutes=bucket.minutes,
            avg_productivity=bucket.avg_productivity,
            interruption_count=bucket.interruptions,
        )
        for day, bucket in sorted(buckets.items(), key=lambda item: item[0])
    ]


def hourly_patterns(sessions: Iterable[PomodoroSession]) -> List[HourlyPattern]:
    """Completed sessions grouped by start hour (0-23), ascending."""
    buckets = _group(_completed(sessions), lambda s: s.start_time.hour)
    return [
        HourlyPattern(
            hour=hour,
            avg_productivity=bucket.avg_productivity,
            total_sessions=bucket.sessions,
            total_minutes=bucket.minutes,
        )
        for hour, bucket in sorted(buckets.items(), key=lambda item: item[0])
    ]


def _category(session: PomodoroSession) -> Optional[str]:
    if session.task is None or session.task.category is None:
        return None
    category = session.task.category.strip()
    return category or None


def category_breakdown(sessions: Iterable[PomodoroSession]) -> List[CategoryStat]:
    """Completed sessions with a task category, grouped by category, most minutes first."""
    categorized = [s for s in _completed(sessions) if _category(s) is not None]
    buckets = _group(categorized, _category)
    ordered = sorted(buckets.items(), key=lambda item: item[1].minutes, reverse=True)
    return [
        CategoryStat(
            category=category,
            total_sessions=bucket.sessions,
            total_minutes=bucket.minutes,
            avg_productivity=bucket.avg_productivity,
            interruption_count=bucket.interruptions,
        )
        for category, bucket in ordered
    ]


def productive_hours(sessions: Iterable[PomodoroSession], limit: int = TOP_PRODUCTIVE_HOURS) -> List[ProductiveHour]:
    """Hours with the highest average productivity among rated, completed sessions."""
    rated = [s for s in _completed(sessions) if s.productivity is not None]
    buckets = _group(rated, lambda s: s.start_time.hour)
    # sorted() is stable, so equal averages keep first-seen hour order
    ordered = sorted(buckets.items(), key=lambda item: item[1].avg_productivity, reverse=True)
    return [
        ProductiveHour(hour=hour, avg_productivity=bucket.avg_productivity, session_count=bucket.sessions)
        for hour, bucket in ordered[:limit]
    ]


def top_interruptions(sessions: Iterable[PomodoroSession], limit: int = TOP_INTERRUPTION_REASONS) -> List[InterruptionReason]:
    """Most frequent interruption reasons across all given sessions."""
    counts = Counter(
        interruption.reason
        for session in sessions
        for interruption in session.interruptions
    )
    return [
        InterruptionReason(reason=reason, count=count)
        for reason, count in counts.most_common(limit)
    ]


def build_recommendations(
    hours: List[ProductiveHour],
    interruptions: List[InterruptionReason],
) -> List[Recommendation]:
    if hours:
        hour_list = ", ".join(f"{h.hour}:00" for h in hours)
        optimal_time = (
            f"Your most productive hours are {hour_list}. "
            "Try scheduling important tasks during these times."
        )
    else:
        optimal_time = "Complete and rate a few sessions to discover your most productive hours."

    if interruptions:
        reasons = ", ".join(i.reason or "unspecified" for i in interruptions)
        interruption_management = f"Common interruptions: {reasons}. Consider addressing these distractions."
    else:
        interruption_management = "No significant interruption patterns detected."

    return [
        Recommendation(type="optimal_time", message=optimal_time),
        Recommendation(type="interruption_management", message=interruption_management),
    ]


def build_insights(sessions: List[PomodoroSession]) -> Insights:
    """Top productive hours, top interruption reasons and recommendation text.

    Productive hours consider completed, rated sessions only; interruption
    reasons are counted over every session the user has, finished or not.
    """
    hours = productive_hours(sessions)
    interruptions = top_interruptions(sessions)
    return Insights(
        productive_hours=hours,
        interruptions=interruptions,
        recommendations=build_recommendations(hours, interruptions),
    )
