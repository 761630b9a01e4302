"""Recommendation rule tests — each rule in isolation, plus the fallback."""

from datetime import date, timedelta

from lifetracker.core.recommendations import (
    MSG_BURNOUT_RISK,
    MSG_DECLINING_EFFICIENCY,
    MSG_DECLINING_TIME,
    MSG_INCREASE_TIME,
    MSG_KEEP_GOING,
    MSG_OPTIMIZE,
    MSG_OVER_PLANNING,
    MSG_RAPID_GROWTH,
    generate_recommendations,
)
from lifetracker.core.time_stats import TimeStats, TrendAnalysis


def _summary(hours: float, efficiency: float = 0.8, tasks: int = 1, done: int = 1) -> TimeStats:
    stats = TimeStats(
        date=date(2024, 1, 1), task_count=tasks, completed_tasks=done,
        efficiency_score=efficiency,
    )
    stats.add_category_time(None, timedelta(hours=hours))
    return stats


def test_healthy_day_gets_fallback_only():
    assert generate_recommendations(_summary(6), TrendAnalysis(), 1) == [MSG_KEEP_GOING]


def test_empty_period_gets_fallback_only():
    empty = TimeStats(date=date(2024, 1, 1))
    assert generate_recommendations(empty, TrendAnalysis(), 0) == [MSG_KEEP_GOING]


def test_low_daily_hours():
    assert MSG_INCREASE_TIME in generate_recommendations(_summary(3), TrendAnalysis(), 1)


def test_daily_hours_are_averaged_over_days_with_data():
    # 20h over 4 days is 5h/day: neither too low nor too high
    recs = generate_recommendations(_summary(20), TrendAnalysis(), 4)
    assert MSG_INCREASE_TIME not in recs
    assert MSG_BURNOUT_RISK not in recs


def test_very_long_days():
    assert MSG_BURNOUT_RISK in generate_recommendations(_summary(13), TrendAnalysis(), 1)


def test_low_efficiency():
    recs = generate_recommendations(_summary(6, efficiency=0.3), TrendAnalysis(), 1)
    assert recs == [MSG_OPTIMIZE]


def test_time_trend_rules():
    down = generate_recommendations(_summary(6), TrendAnalysis(time_trend=-15.0), 2)
    up = generate_recommendations(_summary(12), TrendAnalysis(time_trend=25.0), 2)
    assert MSG_DECLINING_TIME in down
    assert MSG_RAPID_GROWTH in up


def test_declining_efficiency_trend():
    recs = generate_recommendations(
        _summary(6), TrendAnalysis(efficiency_trend=-12.0), 2,
    )
    assert recs == [MSG_DECLINING_EFFICIENCY]


def test_low_completion_rate():
    recs = generate_recommendations(_summary(6, tasks=4, done=1), TrendAnalysis(), 1)
    assert recs == [MSG_OVER_PLANNING]


def test_multiple_rules_fire_in_order():
    recs = generate_recommendations(
        _summary(2, efficiency=0.2), TrendAnalysis(time_trend=-50.0), 1,
    )
    assert recs == [MSG_INCREASE_TIME, MSG_OPTIMIZE, MSG_DECLINING_TIME]
