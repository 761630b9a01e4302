"""Analytics — aggregates completed tasks into per-date TimeStats and period reports.

Invariants:
    - Only Completed tasks contribute; anything else is a no-op
    - A date's TimeStats is created lazily on its first completed task
      and removed only by clear_history()
    - Week / month / range reports fold daily stats the same way
      (add_category_time + counter sums, longest = max, average recomputed once)
    - start_date > end_date is a ValidationError

Design Decisions:
    - Two-bucket trend (first half vs second half): a deliberate simplification, not regression
    - Daily efficiency recomputed on each add using the configured daily target
    - "Today" and report timestamps come from the injected clock
"""

import calendar
import copy
import logging
from collections import defaultdict
from datetime import date, datetime, timedelta

from lifetracker.core.domain_types import CategoryId, DEFAULT_DAILY_TARGET_HOURS
from lifetracker.core.errors import ErrorContext, ValidationError
from lifetracker.core.recommendations import generate_recommendations
from lifetracker.core.task import Task
from lifetracker.core.time_stats import AnalyticsReport, TimeStats, TrendAnalysis
from lifetracker.core.timer import Clock

logger = logging.getLogger(__name__)


class Analytics:
    """Historical per-date statistics plus report generation. In-memory only."""

    def __init__(
        self,
        daily_target_hours: float = DEFAULT_DAILY_TARGET_HOURS,
        clock: Clock | None = None,
    ):
        self.daily_target_hours = daily_target_hours
        self._clock: Clock = clock or datetime.now
        self._historical_stats: dict[date, TimeStats] = {}

    # --- Ingestion -------------------------------------------------------------

    def add_task_data(self, task: Task) -> None:
        """Fold one completed task into the stats of its completion date."""
        if not task.is_completed():
            return

        if task.completed_at is None:
            logger.warning(
                "Completed task has no completed_at; bucketing under today",
                extra={"task_id": str(task.id)},
            )
            day = self._today()
        else:
            day = task.completed_at.date()

        stats = self._historical_stats.get(day)
        if stats is None:
            stats = TimeStats(date=day)
            self._historical_stats[day] = stats

        stats.add_category_time(task.category_id, task.total_duration)
        stats.task_count += 1
        stats.completed_tasks += 1
        stats.longest_session = max(stats.longest_session, task.total_duration)
        stats.finalize()
        stats.calculate_efficiency(self.daily_target_hours)

        logger.debug(
            "Task folded into daily stats",
            extra={
                "task_id": str(task.id),
                "duration_seconds": task.total_duration.total_seconds(),
            },
        )

    def load_daily_stats(self, stats: TimeStats) -> None:
        """Hydrate one persisted day, replacing any existing entry for that date."""
        self._historical_stats[stats.date] = stats

    # --- Lookup ----------------------------------------------------------------

    def get_daily_stats(self, day: date) -> TimeStats | None:
        return self._historical_stats.get(day)

    def get_today_stats(self) -> TimeStats | None:
        return self.get_daily_stats(self._today())

    def get_weekly_stats(self, week_start: date) -> TimeStats:
        """Fold the 7 days starting at week_start."""
        days = (week_start + timedelta(days=i) for i in range(7))
        return self._fold(week_start, days)

    def get_monthly_stats(self, year: int, month: int) -> TimeStats:
        """Fold every day of the given calendar month."""
        if not 1 <= month <= 12:
            raise ValidationError(
                f"Month must be between 1 and 12, got {month}", "month",
                ErrorContext(operation="get_monthly_stats"),
            )
        month_start = date(year, month, 1)
        days_in_month = calendar.monthrange(year, month)[1]
        days = (month_start + timedelta(days=i) for i in range(days_in_month))
        return self._fold(month_start, days)

    def get_stats_count(self) -> int:
        return len(self._historical_stats)

    def clear_history(self) -> None:
        self._historical_stats.clear()
        logger.debug("Historical stats cleared")

    # --- Reports ---------------------------------------------------------------

    def generate_report(self, start_date: date, end_date: date) -> AnalyticsReport:
        if start_date > end_date:
            raise ValidationError(
                "start_date cannot be after end_date", "start_date",
                ErrorContext(operation="generate_report"),
            )

        daily_stats: list[TimeStats] = []
        summary = TimeStats(date=start_date)
        current = start_date
        while current <= end_date:
            stats = self._historical_stats.get(current)
            if stats is not None:
                daily_stats.append(copy.deepcopy(stats))
                summary.absorb(stats)
            current += timedelta(days=1)
        summary.finalize()

        if daily_stats:
            summary.calculate_efficiency(self.daily_target_hours * len(daily_stats))

        trends = self.analyze_trends(daily_stats)
        recommendations = generate_recommendations(summary, trends, len(daily_stats))

        logger.info(
            "Analytics report generated for %s..%s (%d days with data)",
            start_date, end_date, len(daily_stats),
        )
        return AnalyticsReport(
            period_start=start_date,
            period_end=end_date,
            daily_stats=daily_stats,
            summary=summary,
            trends=trends,
            recommendations=recommendations,
            generated_at=self._clock(),
        )

    def analyze_trends(self, daily_stats: list[TimeStats]) -> TrendAnalysis:
        """Compare first-half and second-half means. Zeroed for < 2 points."""
        trends = TrendAnalysis()
        if len(daily_stats) < 2:
            return trends

        middle = len(daily_stats) // 2
        first_half, second_half = daily_stats[:middle], daily_stats[middle:]

        trends.time_trend = _relative_change(
            _mean(s.total_time.total_seconds() for s in first_half),
            _mean(s.total_time.total_seconds() for s in second_half),
        )
        trends.efficiency_trend = (
            _mean(s.efficiency_score for s in second_half)
            - _mean(s.efficiency_score for s in first_half)
        ) * 100.0
        trends.category_trends = _category_trends(first_half, second_half)
        trends.peak_weekdays = _peak_weekdays(daily_stats)
        return trends

    # --- Helpers ---------------------------------------------------------------

    def _today(self) -> date:
        return self._clock().date()

    def _fold(self, start: date, days) -> TimeStats:
        folded = TimeStats(date=start)
        for day in days:
            stats = self._historical_stats.get(day)
            if stats is not None:
                folded.absorb(stats)
        folded.finalize()
        return folded


def _mean(values) -> float:
    values = list(values)
    return sum(values) / len(values) if values else 0.0


def _relative_change(before: float, after: float) -> float:
    if before <= 0:
        return 0.0
    return (after - before) / before * 100.0


def _category_trends(
    first_half: list[TimeStats], second_half: list[TimeStats],
) -> dict[CategoryId | None, float]:
    categories = {cid for s in first_half + second_half for cid in s.category_stats}
    return {
        cid: _relative_change(
            _mean(_seconds(s, cid) for s in first_half),
            _mean(_seconds(s, cid) for s in second_half),
        )
        for cid in categories
    }


def _seconds(stats: TimeStats, category_id: CategoryId | None) -> float:
    return stats.category_stats.get(category_id, timedelta(0)).total_seconds()


def _peak_weekdays(daily_stats: list[TimeStats]) -> list[int]:
    """Weekday(s) (0 = Monday) with the highest mean tracked time."""
    by_weekday: dict[int, list[float]] = defaultdict(list)
    for stats in daily_stats:
        by_weekday[stats.date.weekday()].append(stats.total_time.total_seconds())
    means = {weekday: _mean(totals) for weekday, totals in by_weekday.items()}
    best = max(means.values(), default=0.0)
    if best <= 0:
        return []
    return sorted(weekday for weekday, value in means.items() if value == best)
