"""Recommendations — rule-based advice derived from a report summary and its trends.

Invariants:
    - Rules are independent: every firing rule contributes one message, in rule order
    - Data-driven rules fire only when the period has at least one day with data
    - "Daily hours" is the mean over days with data, not the period total
    - If no rule fires, exactly one positive fallback message is returned

Design Decisions:
    - Thresholds as module constants: single source of truth, asserted in tests
    - Pure function over (summary, trends, days) — no access to Analytics state
"""

from lifetracker.core.time_stats import TimeStats, TrendAnalysis

LOW_DAILY_HOURS: float = 4.0
HIGH_DAILY_HOURS: float = 12.0
LOW_EFFICIENCY: float = 0.5
DECLINING_TIME_TREND: float = -10.0
RAPID_TIME_TREND: float = 20.0
DECLINING_EFFICIENCY_TREND: float = -10.0
LOW_COMPLETION_RATE: float = 0.7

MSG_INCREASE_TIME = "Consider increasing your daily tracked time to raise productivity."
MSG_BURNOUT_RISK = "Your daily hours are very long; balance work with rest to avoid burnout."
MSG_OPTIMIZE = "Efficiency is low; try optimizing how you plan and manage your time."
MSG_DECLINING_TIME = "Tracked time is trending down; keep an eye on it."
MSG_RAPID_GROWTH = "Tracked time is growing quickly; make sure the pace is sustainable."
MSG_DECLINING_EFFICIENCY = "Efficiency is trending down; consider adjusting how you work."
MSG_OVER_PLANNING = "Task completion rate is low; plan a more realistic workload."
MSG_KEEP_GOING = "Great time management, keep it up!"


def generate_recommendations(
    summary: TimeStats, trends: TrendAnalysis, days_with_data: int,
) -> list[str]:
    """Apply every rule to the summary; fall back to a positive note."""
    recommendations: list[str] = []

    if days_with_data > 0:
        daily_hours = summary.total_hours / days_with_data
        if daily_hours < LOW_DAILY_HOURS:
            recommendations.append(MSG_INCREASE_TIME)
        elif daily_hours > HIGH_DAILY_HOURS:
            recommendations.append(MSG_BURNOUT_RISK)

        if summary.efficiency_score < LOW_EFFICIENCY:
            recommendations.append(MSG_OPTIMIZE)

    if trends.time_trend < DECLINING_TIME_TREND:
        recommendations.append(MSG_DECLINING_TIME)
    elif trends.time_trend > RAPID_TIME_TREND:
        recommendations.append(MSG_RAPID_GROWTH)

    if trends.efficiency_trend < DECLINING_EFFICIENCY_TREND:
        recommendations.append(MSG_DECLINING_EFFICIENCY)

    if days_with_data > 0 and summary.completion_rate < LOW_COMPLETION_RATE:
        recommendations.append(MSG_OVER_PLANNING)

    if not recommendations:
        recommendations.append(MSG_KEEP_GOING)
    return recommendations
