"""Tests for the analytics folds."""

import uuid
from datetime import datetime, timedelta

from focusflow.engine.analytics import (
    build_insights,
    build_recommendations,
    category_breakdown,
    daily_trends,
    hourly_patterns,
    productive_hours,
    summarize,
    top_interruptions,
    trend_window,
)
from focusflow.models.analytics import InterruptionReason, ProductiveHour
from focusflow.models.session import Interruption, PomodoroSession, SessionType, TaskInfo

USER = "user-1"


def completed_session(user_id, start_time, duration=25, productivity=7, category=None, reasons=()):
    """Build a completed session in memory."""
    return PomodoroSession(
        id=str(uuid.uuid4()),
        user_id=user_id,
        start_time=start_time,
        end_time=start_time + timedelta(minutes=duration),
        duration=duration,
        type=SessionType.WORK,
        completed=True,
        task=TaskInfo(title="Write", category=category) if category is not None else None,
        interruptions=[Interruption(timestamp=start_time, reason=r) for r in reasons],
        productivity=productivity,
    )


def at(day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(2024, 5, day, hour, minute)


class TestEmptyInputs:
    """Every fold degrades to empty/zero results."""

    def test_all_empty(self):
        assert summarize([]).total_sessions == 0
        assert daily_trends([]) == []
        assert hourly_patterns([]) == []
        assert category_breakdown([]) == []
        insights = build_insights([])
        assert insights.productive_hours == []
        assert insights.interruptions == []
        assert len(insights.recommendations) == 2


class TestDailyTrends:

    def test_groups_by_calendar_day_ascending(self):
        sessions = [
            completed_session(USER, at(3, 9), duration=25, productivity=6, reasons=["phone"]),
            completed_session(USER, at(1, 14), duration=50, productivity=8),
            completed_session(USER, at(3, 23, 59), duration=25, productivity=8, reasons=["email", "chat"]),
        ]

        trends = daily_trends(sessions)

        assert [t.date for t in trends] == ["2024-05-01", "2024-05-03"]
        may_third = trends[1]
        assert may_third.total_sessions == 2
        assert may_third.total_minutes == 50
        assert may_third.avg_productivity == 7
        assert may_third.interruption_count == 3

    def test_no_zero_fill(self):
        sessions = [completed_session(USER, at(1, 9)), completed_session(USER, at(5, 9))]
        assert len(daily_trends(sessions)) == 2

    def test_ignores_incomplete_sessions(self):
        session = completed_session(USER, at(1, 9))
        session.completed = False
        assert daily_trends([session]) == []

    def test_trend_window(self):
        now = datetime(2024, 5, 8, 12, 0)
        start, end = trend_window(7, now=now)
        assert start == datetime(2024, 5, 1, 12, 0)
        assert end == now


class TestHourlyPatterns:

    def test_groups_by_hour_ascending(self):
        sessions = [
            completed_session(USER, at(1, 15), productivity=4),
            completed_session(USER, at(2, 9), productivity=9, duration=50),
            completed_session(USER, at(3, 9, 45), productivity=7),
        ]

        patterns = hourly_patterns(sessions)

        assert [p.hour for p in patterns] == [9, 15]
        assert patterns[0].total_sessions == 2
        assert patterns[0].total_minutes == 75
        assert patterns[0].avg_productivity == 8


class TestCategoryBreakdown:

    def test_excludes_uncategorized_and_orders_by_minutes(self):
        sessions = [
            completed_session(USER, at(1, 9), duration=25, category="reading"),
            completed_session(USER, at(1, 10), duration=90),  # no task
            completed_session(USER, at(1, 11), duration=50, category="coding"),
            completed_session(USER, at(1, 12), duration=50, category="coding", reasons=["slack"]),
            completed_session(USER, at(1, 13), duration=30, category="  "),
        ]

        breakdown = category_breakdown(sessions)

        assert [c.category for c in breakdown] == ["coding", "reading"]
        assert breakdown[0].total_minutes == 100
        assert breakdown[0].total_sessions == 2
        assert breakdown[0].interruption_count == 1

    def test_ties_keep_first_seen_order(self):
        sessions = [
            completed_session(USER, at(1, 9), duration=25, category="b"),
            completed_session(USER, at(1, 10), duration=25, category="a"),
        ]
        assert [c.category for c in category_breakdown(sessions)] == ["b", "a"]


class TestInsights:

    def test_productive_hours_top_three_descending(self):
        sessions = [
            completed_session(USER, at(1, 8), productivity=5),
            completed_session(USER, at(1, 10), productivity=9),
            completed_session(USER, at(1, 14), productivity=7),
            completed_session(USER, at(1, 20), productivity=3),
            completed_session(USER, at(2, 10), productivity=7),
        ]

        hours = productive_hours(sessions)

        assert [h.hour for h in hours] == [10, 14, 8]
        assert hours[0].avg_productivity == 8
        assert hours[0].session_count == 2

    def test_productive_hours_ties_keep_grouping_order(self):
        sessions = [
            completed_session(USER, at(1, 16), productivity=8),
            completed_session(USER, at(1, 7), productivity=8),
        ]
        assert [h.hour for h in productive_hours(sessions)] == [16, 7]

    def test_top_interruptions_counts_all_sessions(self):
        in_progress = completed_session(USER, at(1, 9), reasons=["phone", "phone"])
        in_progress.completed = False
        sessions = [
            in_progress,
            completed_session(USER, at(1, 10), reasons=["email", "phone"]),
            completed_session(USER, at(1, 11), reasons=["a", "b", "c", "d"]),
        ]

        reasons = top_interruptions(sessions)

        assert len(reasons) == 5
        assert reasons[0].reason == "phone"
        assert reasons[0].count == 3
        assert [r.reason for r in reasons[1:]] == ["email", "a", "b", "c"]

    def test_recommendation_text(self):
        hours = [ProductiveHour(hour=9, avg_productivity=9, session_count=1),
                 ProductiveHour(hour=14, avg_productivity=8, session_count=1)]
        reasons = [InterruptionReason(reason="phone", count=2), InterruptionReason(reason="email", count=1)]

        optimal, interruptions = build_recommendations(hours, reasons)

        assert optimal.type == "optimal_time"
        assert optimal.message == (
            "Your most productive hours are 9:00, 14:00. "
            "Try scheduling important tasks during these times."
        )
        assert interruptions.type == "interruption_management"
        assert interruptions.message == "Common interruptions: phone, email. Consider addressing these distractions."

    def test_recommendation_names_reasonless_interruptions(self):
        _, interruptions = build_recommendations([], [InterruptionReason(reason=None, count=3)])
        assert interruptions.message == "Common interruptions: unspecified. Consider addressing these distractions."

    def test_reasonless_interruptions_are_counted_together(self):
        sessions = [completed_session(USER, at(1, 9), reasons=[None, None, "phone"])]
        reasons = top_interruptions(sessions)
        assert reasons[0] == InterruptionReason(reason=None, count=2)

    def test_recommendation_without_interruptions(self):
        _, interruptions = build_recommendations([], [])
        assert interruptions.message == "No significant interruption patterns detected."


class TestSummarize:

    def test_totals(self):
        start = datetime.utcnow() - timedelta(hours=1)
        stats = summarize([
            completed_session(USER, start, duration=25, productivity=4, reasons=["x"]),
            completed_session(USER, start, duration=25, productivity=8),
        ])
        assert stats.total_sessions == 2
        assert stats.total_minutes == 50
        assert stats.avg_productivity == 6
        assert stats.total_interruptions == 1
