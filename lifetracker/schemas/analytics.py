"""Analytics Schemas — rendering of timer status, stats and reports.

Invariants:
    - Per-category time is a list of entries (JSON object keys cannot be UUID | None)
    - category_id None denotes uncategorised time
    - All durations are seconds (float)
"""

from datetime import date as date_type, datetime
from uuid import UUID

from pydantic import BaseModel

from lifetracker.core.domain_types import TimerStatus
from lifetracker.core.time_stats import AnalyticsReport, TimeStats, TrendAnalysis
from lifetracker.core.timer import Timer


class TimerStatusResponse(BaseModel):
    """Snapshot for the presentation layer's polling loop."""
    status: TimerStatus
    elapsed_seconds: float
    current_task_id: UUID | None = None

    @classmethod
    def from_domain(
        cls, timer: Timer, current_task_id: UUID | None = None,
    ) -> "TimerStatusResponse":
        return cls(
            status=timer.status,
            elapsed_seconds=timer.get_elapsed().total_seconds(),
            current_task_id=current_task_id,
        )


class CategoryTime(BaseModel):
    category_id: UUID | None
    seconds: float
    percentage: float


class TimeStatsResponse(BaseModel):
    date: date_type
    categories: list[CategoryTime]
    total_seconds: float
    task_count: int
    completed_tasks: int
    completion_rate: float
    efficiency_score: float
    longest_session_seconds: float
    average_session_seconds: float
    most_active_category: UUID | None

    @classmethod
    def from_domain(cls, stats: TimeStats) -> "TimeStatsResponse":
        categories = [
            CategoryTime(
                category_id=cid,
                seconds=duration.total_seconds(),
                percentage=stats.get_category_percentage(cid),
            )
            for cid, duration in sorted(
                stats.category_stats.items(), key=lambda item: item[1], reverse=True,
            )
        ]
        return cls(
            date=stats.date,
            categories=categories,
            total_seconds=stats.total_time.total_seconds(),
            task_count=stats.task_count,
            completed_tasks=stats.completed_tasks,
            completion_rate=stats.completion_rate,
            efficiency_score=stats.efficiency_score,
            longest_session_seconds=stats.longest_session.total_seconds(),
            average_session_seconds=stats.average_session.total_seconds(),
            most_active_category=stats.get_most_active_category(),
        )


class CategoryTrend(BaseModel):
    category_id: UUID | None
    change_percent: float


class TrendAnalysisResponse(BaseModel):
    time_trend: float
    efficiency_trend: float
    peak_weekdays: list[int]
    category_trends: list[CategoryTrend]

    @classmethod
    def from_domain(cls, trends: TrendAnalysis) -> "TrendAnalysisResponse":
        return cls(
            time_trend=trends.time_trend,
            efficiency_trend=trends.efficiency_trend,
            peak_weekdays=list(trends.peak_weekdays),
            category_trends=[
                CategoryTrend(category_id=cid, change_percent=change)
                for cid, change in trends.category_trends.items()
            ],
        )


class AnalyticsReportResponse(BaseModel):
    generated_at: datetime
    period_start: date_type
    period_end: date_type
    daily_stats: list[TimeStatsResponse]
    summary: TimeStatsResponse
    trends: TrendAnalysisResponse
    recommendations: list[str]

    @classmethod
    def from_domain(cls, report: AnalyticsReport) -> "AnalyticsReportResponse":
        return cls(
            generated_at=report.generated_at,
            period_start=report.period_start,
            period_end=report.period_end,
            daily_stats=[TimeStatsResponse.from_domain(s) for s in report.daily_stats],
            summary=TimeStatsResponse.from_domain(report.summary),
            trends=TrendAnalysisResponse.from_domain(report.trends),
            recommendations=list(report.recommendations),
        )
