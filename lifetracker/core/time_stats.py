"""Time Stats — per-date aggregates, trend results and report containers.

Invariants:
    - total_time == sum(category_stats.values()) after any add_category_time sequence
    - Uncategorised time is keyed under None, so no tracked time is dropped
    - efficiency_score is always within [0.0, 1.0]
    - average_session == total_time / completed_tasks (zero when nothing completed)

Design Decisions:
    - Dataclasses with computed properties: pure, deterministic, testable without mocks
    - Folding (absorb + finalize) lives here so week/month/range reports share one path
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from lifetracker.core.domain_types import CategoryId, SECONDS_PER_HOUR

TIME_WEIGHT: float = 0.6
COMPLETION_WEIGHT: float = 0.4


@dataclass
class TimeStats:
    """Aggregate for one date (or a folded period starting at `date`)."""

    date: date
    category_stats: dict[CategoryId | None, timedelta] = field(default_factory=dict)
    total_time: timedelta = timedelta(0)
    task_count: int = 0
    completed_tasks: int = 0
    efficiency_score: float = 0.0
    longest_session: timedelta = timedelta(0)
    average_session: timedelta = timedelta(0)

    @property
    def completion_rate(self) -> float:
        if self.task_count == 0:
            return 0.0
        return self.completed_tasks / self.task_count

    @property
    def total_hours(self) -> float:
        return self.total_time.total_seconds() / SECONDS_PER_HOUR

    def add_category_time(
        self, category_id: CategoryId | None, duration: timedelta,
    ) -> None:
        self.category_stats[category_id] = (
            self.category_stats.get(category_id, timedelta(0)) + duration
        )
        self.total_time += duration

    def get_category_percentage(self, category_id: CategoryId | None) -> float:
        """Share of total_time spent in category_id, 0–100."""
        if not self.total_time:
            return 0.0
        category_time = self.category_stats.get(category_id, timedelta(0))
        return category_time / self.total_time * 100.0

    def get_most_active_category(self) -> CategoryId | None:
        """Category with the most time; the uncategorised bucket never wins."""
        categorised = [
            (cid, d) for cid, d in self.category_stats.items() if cid is not None
        ]
        if not categorised:
            return None
        return max(categorised, key=lambda item: item[1])[0]

    def calculate_efficiency(self, target_hours: float) -> float:
        """clamp01(0.6·min(actual/target, 1) + 0.4·completion_rate). Stores and returns it."""
        time_efficiency = (
            min(self.total_hours / target_hours, 1.0) if target_hours > 0 else 0.0
        )
        score = TIME_WEIGHT * time_efficiency + COMPLETION_WEIGHT * self.completion_rate
        self.efficiency_score = min(max(score, 0.0), 1.0)
        return self.efficiency_score

    # --- Folding ---------------------------------------------------------------

    def absorb(self, other: "TimeStats") -> None:
        """Fold another aggregate in. Call finalize() once after the last absorb."""
        for category_id, duration in other.category_stats.items():
            self.add_category_time(category_id, duration)
        self.task_count += other.task_count
        self.completed_tasks += other.completed_tasks
        self.longest_session = max(self.longest_session, other.longest_session)

    def finalize(self) -> None:
        """Recompute average_session from the folded totals."""
        if self.completed_tasks > 0:
            self.average_session = self.total_time / self.completed_tasks
        else:
            self.average_session = timedelta(0)


@dataclass
class TrendAnalysis:
    """Two-bucket comparison of a daily series (first half vs second half)."""

    time_trend: float = 0.0          # % change of mean total_time
    efficiency_trend: float = 0.0    # change of mean efficiency, in percentage points
    peak_weekdays: list[int] = field(default_factory=list)  # 0 = Monday
    category_trends: dict[CategoryId | None, float] = field(default_factory=dict)


@dataclass
class AnalyticsReport:
    period_start: date
    period_end: date
    daily_stats: list[TimeStats]
    summary: TimeStats
    trends: TrendAnalysis
    recommendations: list[str]
    generated_at: datetime = field(default_factory=datetime.now)

    @property
    def days_with_data(self) -> int:
        return len(self.daily_stats)
