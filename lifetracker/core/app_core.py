"""AppCore — orchestrator binding Timer, TaskManager, CategoryManager and Analytics.

Invariants:
    - _current_task_id is the ONLY record of "what is being timed"
    - Timer is Running/Paused  ⇔  _current_task_id is set
    - At most one task is tracked at a time; start_task auto-completes the previous one
    - Every completion feeds the finished task into Analytics exactly once
    - Every timestamp (timer, task stamps, analytics dates) comes from the one injected clock
    - Tasks registered without timing wait as Paused, so Active means "being timed"
    - Multi-step sequences are NOT atomic: after a failed call, re-read
      get_timer_state() / current_task_id instead of assuming a rollback

Design Decisions:
    - Settings passed in at construction (no process-wide config singleton)
    - Synchronous and single-threaded: a multi-threaded host wraps each call in one lock
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable

from lifetracker.config import Settings
from lifetracker.core.analytics import Analytics
from lifetracker.core.category import Category
from lifetracker.core.category_manager import CategoryManager
from lifetracker.core.domain_types import (
    CategoryId,
    Priority,
    TaskId,
    TaskStatus,
    TimerStatus,
)
from lifetracker.core.errors import ErrorContext, StateError
from lifetracker.core.repository_protocols import (
    CategoryRepository,
    StatsRepository,
    TaskRepository,
)
from lifetracker.core.task import Task
from lifetracker.core.task_manager import TaskManager
from lifetracker.core.time_stats import AnalyticsReport, TimeStats, TrendAnalysis
from lifetracker.core.timer import Clock, Timer, TimerState

logger = logging.getLogger(__name__)


class AppCore:
    """Single owner of the active-task pointer."""

    def __init__(self, settings: Settings | None = None, clock: Clock | None = None):
        self.settings = settings or Settings()
        self._clock: Clock = clock or datetime.now
        self.timer = Timer(self._clock)
        self.task_manager = TaskManager()
        self.category_manager = CategoryManager(
            seed_defaults=self.settings.seed_default_categories, clock=self._clock,
        )
        self.analytics = Analytics(self.settings.daily_target_hours, self._clock)
        self._current_task_id: TaskId | None = None

    @classmethod
    def from_repositories(
        cls,
        tasks: TaskRepository,
        categories: CategoryRepository,
        stats: StatsRepository,
        settings: Settings | None = None,
        clock: Clock | None = None,
    ) -> "AppCore":
        """Build a core hydrated from the persistence collaborator."""
        core = cls(settings, clock)
        core.load_state(
            tasks=tasks.list_all(),
            categories=categories.list_all(),
            daily_stats=stats.list_all(),
        )
        return core

    def load_state(
        self,
        tasks: Iterable[Task] = (),
        categories: Iterable[Category] = (),
        daily_stats: Iterable[TimeStats] = (),
        default_category_id: CategoryId | None = None,
    ) -> None:
        """Hydrate repositories. Persisted categories replace the seeded defaults."""
        categories = list(categories)
        if categories:
            manager = CategoryManager(seed_defaults=False, clock=self._clock)
            for category in categories:
                manager.add_category(category)
            manager.set_default_category(
                default_category_id or manager.get_all_categories()[0].id,
            )
            self.category_manager = manager
        for task in tasks:
            self.task_manager.add_task(task)
        for stats in daily_stats:
            self.analytics.load_daily_stats(stats)
        logger.info(
            "Core state loaded",
            extra={"operation": "load_state"},
        )

    # --- Active task queries ---------------------------------------------------

    @property
    def current_task_id(self) -> TaskId | None:
        return self._current_task_id

    def has_active_task(self) -> bool:
        return self._current_task_id is not None

    def get_current_task(self) -> Task | None:
        if self._current_task_id is None:
            return None
        return self.task_manager.get_task(self._current_task_id)

    def get_timer_state(self) -> TimerState:
        return self.timer.state

    def get_timer_status(self) -> TimerStatus:
        return self.timer.status

    def get_current_duration(self) -> timedelta:
        return self.timer.get_elapsed()

    # --- Timing ----------------------------------------------------------------

    def start_task(
        self,
        name: str,
        category_id: CategoryId | None = None,
        description: str | None = None,
    ) -> TaskId:
        """Create and start a task, auto-completing any task already being timed."""
        if self._current_task_id is not None:
            self.stop_current_task()

        task = Task(
            name=self._task_name(name),
            description=description,
            category_id=category_id,
            created_at=self._clock(),
        )
        self.task_manager.add_task(task)
        self.timer.start()
        task.start(self._clock())
        self._current_task_id = task.id
        logger.info("Task started", extra={"task_id": str(task.id)})
        return task.id

    def start_task_by_id(self, task_id: TaskId) -> None:
        """Start timing an existing task, auto-completing the current one."""
        task = self.task_manager.require_task(task_id)
        if task_id == self._current_task_id:
            raise StateError(
                "Task is already being timed",
                ErrorContext(task_id=task_id, operation="start_task_by_id"),
            )
        if task.is_terminal():
            raise StateError(
                f"Task cannot be restarted from {task.status.value}",
                ErrorContext(task_id=task_id, operation="start_task_by_id"),
            )
        if self._current_task_id is not None:
            self.stop_current_task()

        self.timer.start()
        task.start(self._clock())
        self._current_task_id = task_id
        logger.info("Task started", extra={"task_id": str(task_id)})

    def pause_current_task(self) -> None:
        task = self._require_current("pause_current_task")
        self.timer.pause()
        task.pause()
        logger.info("Task paused", extra={"task_id": str(task.id)})

    def resume_current_task(self) -> None:
        task = self._require_current("resume_current_task")
        self.timer.resume()
        task.start(self._clock())
        logger.info("Task resumed", extra={"task_id": str(task.id)})

    def stop_current_task(self) -> timedelta:
        """Stop the timer, complete the active task with the tracked time."""
        task = self._require_current("stop_current_task")
        duration = self.timer.stop()
        self.task_manager.complete_task(task.id, duration, self._clock())
        self._current_task_id = None
        self.analytics.add_task_data(task)
        logger.info(
            "Task stopped",
            extra={
                "task_id": str(task.id),
                "duration_seconds": duration.total_seconds(),
            },
        )
        return duration

    # --- Task lifecycle --------------------------------------------------------

    def create_task(
        self,
        name: str,
        description: str | None = None,
        category_id: CategoryId | None = None,
        priority: Priority = Priority.MEDIUM,
        estimated_duration: timedelta | None = None,
        tags: list[str] | None = None,
        due_date: date | None = None,
    ) -> TaskId:
        """Register a task without starting the timer. It waits as Paused."""
        task = Task(
            name=self._task_name(name),
            description=description,
            category_id=category_id,
            status=TaskStatus.PAUSED,
            created_at=self._clock(),
            priority=priority,
            due_date=due_date,
        )
        if estimated_duration is not None:
            task.set_estimated_duration(estimated_duration)
        for tag in tags or []:
            task.add_tag(tag)
        self.task_manager.add_task(task)
        logger.info("Task created", extra={"task_id": str(task.id)})
        return task.id

    def update_task(
        self,
        task_id: TaskId,
        name: str | None = None,
        description: str | None = None,
        category_id: CategoryId | None = None,
        priority: Priority | None = None,
        estimated_duration: timedelta | None = None,
        tags: list[str] | None = None,
        due_date: date | None = None,
    ) -> None:
        task = self.task_manager.require_task(task_id)
        task.update(
            name=name,
            description=description,
            category_id=category_id,
            priority=priority,
            estimated_duration=estimated_duration,
            tags=tags,
            due_date=due_date,
        )
        logger.info("Task updated", extra={"task_id": str(task_id)})

    def complete_task(self, task_id: TaskId) -> None:
        """Complete a task; the active one gets its tracked time, others get zero."""
        task = self.task_manager.require_task(task_id)
        if task_id == self._current_task_id:
            self.stop_current_task()
            return
        self.task_manager.complete_task(task_id, timedelta(0), self._clock())
        self.analytics.add_task_data(task)
        logger.info("Task completed", extra={"task_id": str(task_id)})

    def cancel_task(self, task_id: TaskId) -> None:
        """Cancel a task; if it is being timed, the elapsed time is discarded."""
        task = self.task_manager.require_task(task_id)
        if task_id == self._current_task_id:
            self.timer.reset()
            self._current_task_id = None
        task.cancel()
        logger.info("Task cancelled", extra={"task_id": str(task_id)})

    def delete_task(self, task_id: TaskId) -> None:
        """Remove a task; if it is being timed, the timer is reset without recording."""
        self.task_manager.remove_task(task_id)
        if task_id == self._current_task_id:
            self.timer.reset()
            self._current_task_id = None
        logger.info("Task deleted", extra={"task_id": str(task_id)})

    def get_tasks(self) -> list[Task]:
        return self.task_manager.get_all_tasks()

    def get_categories(self) -> list[Category]:
        return self.category_manager.get_all_categories()

    # --- Analytics -------------------------------------------------------------

    def generate_analytics_report(
        self, start_date: date, end_date: date,
    ) -> AnalyticsReport:
        return self.analytics.generate_report(start_date, end_date)

    def analyze_trends(self, start_date: date, end_date: date) -> TrendAnalysis:
        return self.analytics.generate_report(start_date, end_date).trends

    # --- Configuration ---------------------------------------------------------

    def update_config(self, settings: Settings) -> None:
        """Swap settings; the new daily target applies to future efficiency scores."""
        self.settings = settings
        self.analytics.daily_target_hours = settings.daily_target_hours
        logger.info(
            "Configuration updated - daily target: %.1fh, default task name: %r",
            settings.daily_target_hours, settings.default_task_name,
        )
        if settings.work_reminder_interval is not None:
            logger.info("Work reminder every %d minutes", settings.work_reminder_interval)
        if settings.break_reminder_interval is not None:
            logger.info("Break reminder every %d minutes", settings.break_reminder_interval)

    # --- Helpers ---------------------------------------------------------------

    def _require_current(self, operation: str) -> Task:
        if self._current_task_id is None:
            raise StateError(
                "No task is currently being timed",
                ErrorContext(operation=operation),
            )
        return self.task_manager.require_task(self._current_task_id)

    def _task_name(self, name: str) -> str:
        return name.strip() or self.settings.default_task_name
