"""Analytics tests — per-date ingestion, period folds, reports and trends.

Tests cover:
    - Only completed tasks are folded, bucketed by completion date
    - Daily efficiency recomputed on every add
    - Weekly / monthly folds over the right window
    - Report validation, empty-range fallback and deep-copied daily stats
    - Two-bucket trends, category trends and peak weekdays
"""

from datetime import date, datetime, time, timedelta
from uuid import uuid4

import pytest

from lifetracker.core.analytics import Analytics
from lifetracker.core.errors import ValidationError
from lifetracker.core.recommendations import (
    MSG_INCREASE_TIME,
    MSG_KEEP_GOING,
    MSG_RAPID_GROWTH,
)
from lifetracker.core.task import Task
from lifetracker.core.time_stats import TimeStats

MONDAY = date(2024, 1, 1)


def _completed(hours: float, day: date = MONDAY, category_id=None) -> Task:
    task = Task(name="t", category_id=category_id)
    task.complete(timedelta(hours=hours))
    task.completed_at = datetime.combine(day, time(12, 0))
    return task


def _analytics_with(*tasks: Task) -> Analytics:
    analytics = Analytics()
    for task in tasks:
        analytics.add_task_data(task)
    return analytics


# --- Ingestion ----------------------------------------------------------------

def test_completed_task_creates_daily_stats():
    category_id = uuid4()
    analytics = _analytics_with(_completed(4, category_id=category_id))

    stats = analytics.get_daily_stats(MONDAY)
    assert stats is not None
    assert stats.total_time == timedelta(hours=4)
    assert stats.task_count == 1
    assert stats.completed_tasks == 1
    assert stats.longest_session == timedelta(hours=4)
    assert stats.average_session == timedelta(hours=4)
    assert stats.category_stats == {category_id: timedelta(hours=4)}
    assert stats.efficiency_score == pytest.approx(0.7)


def test_non_completed_tasks_are_ignored():
    active = Task(name="active")
    cancelled = Task(name="cancelled")
    cancelled.cancel()
    analytics = _analytics_with(active, cancelled)
    assert analytics.get_stats_count() == 0


def test_same_day_tasks_accumulate():
    a, b = uuid4(), uuid4()
    analytics = _analytics_with(
        _completed(1, category_id=a), _completed(3, category_id=b),
    )
    stats = analytics.get_daily_stats(MONDAY)
    assert stats.total_time == timedelta(hours=4)
    assert stats.get_most_active_category() == b
    assert stats.get_category_percentage(b) == pytest.approx(75.0)
    assert stats.longest_session == timedelta(hours=3)
    assert stats.average_session == timedelta(hours=2)
    assert analytics.get_stats_count() == 1


def test_daily_efficiency_uses_configured_target():
    analytics = Analytics(daily_target_hours=4.0)
    analytics.add_task_data(_completed(4))
    assert analytics.get_daily_stats(MONDAY).efficiency_score == pytest.approx(1.0)


def test_completed_task_without_timestamp_goes_to_today():
    task = Task(name="t")
    task.complete(timedelta(minutes=30))
    task.completed_at = None
    analytics = _analytics_with(task)
    assert analytics.get_today_stats() is not None


def test_today_comes_from_the_clock(clock):
    analytics = Analytics(clock=clock)
    task = Task(name="t")
    task.complete(timedelta(minutes=30))
    task.completed_at = None
    analytics.add_task_data(task)
    assert analytics.get_today_stats().date == clock.now.date()
    assert analytics.get_daily_stats(clock.now.date()).total_time == timedelta(minutes=30)


def test_report_generated_at_comes_from_the_clock(clock):
    report = Analytics(clock=clock).generate_report(MONDAY, MONDAY)
    assert report.generated_at == clock.now


def test_load_daily_stats_replaces_entry():
    analytics = _analytics_with(_completed(1))
    persisted = TimeStats(date=MONDAY, total_time=timedelta(hours=9))
    analytics.load_daily_stats(persisted)
    assert analytics.get_daily_stats(MONDAY) is persisted


def test_clear_history():
    analytics = _analytics_with(_completed(1))
    analytics.clear_history()
    assert analytics.get_stats_count() == 0


# --- Period folds -------------------------------------------------------------

def test_weekly_stats_cover_seven_days():
    analytics = _analytics_with(
        _completed(1, MONDAY),
        _completed(2, MONDAY + timedelta(days=6)),
        _completed(5, MONDAY + timedelta(days=7)),
    )
    week = analytics.get_weekly_stats(MONDAY)
    assert week.date == MONDAY
    assert week.total_time == timedelta(hours=3)
    assert week.completed_tasks == 2
    assert week.average_session == timedelta(hours=1.5)


def test_monthly_stats_cover_whole_month():
    analytics = _analytics_with(
        _completed(1, date(2024, 2, 1)),
        _completed(2, date(2024, 2, 29)),
        _completed(7, date(2024, 3, 1)),
    )
    february = analytics.get_monthly_stats(2024, 2)
    assert february.total_time == timedelta(hours=3)
    assert february.longest_session == timedelta(hours=2)


def test_monthly_stats_reject_invalid_month():
    with pytest.raises(ValidationError) as exc_info:
        Analytics().get_monthly_stats(2024, 13)
    assert exc_info.value.field == "month"


# --- Reports ------------------------------------------------------------------

def test_report_rejects_inverted_range():
    with pytest.raises(ValidationError):
        Analytics().generate_report(MONDAY + timedelta(days=1), MONDAY)


def test_report_over_empty_range():
    report = Analytics().generate_report(MONDAY, MONDAY)
    assert report.daily_stats == []
    assert report.summary.total_time == timedelta(0)
    assert report.summary.efficiency_score == 0.0
    assert report.recommendations == [MSG_KEEP_GOING]
    assert report.trends.time_trend == 0.0


def test_single_day_range_has_zero_trends():
    report = _analytics_with(_completed(6)).generate_report(MONDAY, MONDAY)
    assert report.days_with_data == 1
    assert report.trends.time_trend == 0.0
    assert report.trends.efficiency_trend == 0.0
    assert report.recommendations == [MSG_KEEP_GOING]


def test_report_summary_and_recommendations():
    tuesday = MONDAY + timedelta(days=1)
    analytics = _analytics_with(_completed(2, MONDAY), _completed(4, tuesday))

    report = analytics.generate_report(MONDAY, MONDAY + timedelta(days=6))

    assert report.period_start == MONDAY
    assert [s.date for s in report.daily_stats] == [MONDAY, tuesday]
    assert report.summary.total_time == timedelta(hours=6)
    assert report.summary.completed_tasks == 2
    # 6h against a 16h two-day target, everything completed
    assert report.summary.efficiency_score == pytest.approx(0.6 * 6 / 16 + 0.4)
    assert report.recommendations == [MSG_INCREASE_TIME, MSG_RAPID_GROWTH]


def test_report_daily_stats_are_copies():
    analytics = _analytics_with(_completed(2))
    report = analytics.generate_report(MONDAY, MONDAY)
    report.daily_stats[0].total_time = timedelta(0)
    assert analytics.get_daily_stats(MONDAY).total_time == timedelta(hours=2)


# --- Trends -------------------------------------------------------------------

def test_trends_compare_halves():
    tuesday = MONDAY + timedelta(days=1)
    analytics = _analytics_with(_completed(2, MONDAY), _completed(4, tuesday))
    trends = analytics.analyze_trends([
        analytics.get_daily_stats(MONDAY), analytics.get_daily_stats(tuesday),
    ])
    assert trends.time_trend == pytest.approx(100.0)
    # 0.55 → 0.70 efficiency
    assert trends.efficiency_trend == pytest.approx(15.0)
    assert trends.peak_weekdays == [1]


def test_category_trends():
    reading = uuid4()
    analytics = _analytics_with(
        _completed(1, MONDAY, reading),
        _completed(3, MONDAY + timedelta(days=1), reading),
    )
    trends = analytics.generate_report(MONDAY, MONDAY + timedelta(days=1)).trends
    assert trends.category_trends[reading] == pytest.approx(200.0)


def test_time_trend_zero_when_first_half_empty():
    first = TimeStats(date=MONDAY)
    second = TimeStats(date=MONDAY + timedelta(days=1))
    second.add_category_time(None, timedelta(hours=2))
    trends = Analytics().analyze_trends([first, second])
    assert trends.time_trend == 0.0


def test_trends_for_short_series_are_zeroed():
    trends = Analytics().analyze_trends([TimeStats(date=MONDAY)])
    assert trends.time_trend == 0.0
    assert trends.peak_weekdays == []
    assert trends.category_trends == {}
