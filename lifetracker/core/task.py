"""Task — one unit of tracked work.

Invariants:
    - Status lifecycle: Active ⇄ Paused → Completed | Cancelled (terminal)
    - total_duration never decreases (complete() rejects negative durations)
    - tags hold no duplicates; add/remove are idempotent
    - category_id is a weak reference — it may point at a deleted category

Design Decisions:
    - Dataclass with mutation methods: pure, deterministic, testable without mocks
    - Single-active-task rule is NOT enforced here; AppCore owns it
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from lifetracker.core.domain_types import CategoryId, Priority, TaskId, TaskStatus
from lifetracker.core.errors import ErrorContext, StateError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class Task:
    """Tracked work item — pure dataclass, no IO."""

    name: str
    description: str | None = None
    category_id: CategoryId | None = None
    id: TaskId = field(default_factory=lambda: TaskId(uuid.uuid4()))
    status: TaskStatus = TaskStatus.ACTIVE

    created_at: datetime = field(default_factory=datetime.now)
    started_at: datetime | None = None
    completed_at: datetime | None = None

    total_duration: timedelta = timedelta(0)
    tags: list[str] = field(default_factory=list)
    priority: Priority = Priority.MEDIUM
    estimated_duration: timedelta | None = None
    due_date: date | None = None

    # --- Status queries --------------------------------------------------------

    def is_active(self) -> bool:
        return self.status == TaskStatus.ACTIVE

    def is_paused(self) -> bool:
        return self.status == TaskStatus.PAUSED

    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def is_cancelled(self) -> bool:
        return self.status == TaskStatus.CANCELLED

    def is_terminal(self) -> bool:
        return self.status.is_terminal

    # --- Lifecycle -------------------------------------------------------------

    def start(self, now: datetime | None = None) -> None:
        """Active|Paused → Active; stamps started_at (with `now` when given)."""
        if self.status.is_terminal:
            raise StateError(
                f"Task '{self.name}' cannot start from {self.status.value}",
                ErrorContext(task_id=self.id, operation="start"),
            )
        self.started_at = now or datetime.now()
        self.status = TaskStatus.ACTIVE
        logger.debug("Task started", extra={"task_id": str(self.id)})

    def pause(self) -> None:
        """Active → Paused."""
        if self.status != TaskStatus.ACTIVE:
            raise StateError(
                f"Task '{self.name}' cannot pause from {self.status.value}",
                ErrorContext(task_id=self.id, operation="pause"),
            )
        self.status = TaskStatus.PAUSED
        logger.debug("Task paused", extra={"task_id": str(self.id)})

    def complete(self, duration: timedelta, now: datetime | None = None) -> None:
        """Add a session's duration and close the task, stamping completed_at."""
        if duration < timedelta(0):
            raise ValidationError(
                "Session duration cannot be negative", "duration",
                ErrorContext(task_id=self.id, operation="complete"),
            )
        if self.status.is_terminal:
            raise StateError(
                f"Task '{self.name}' is already {self.status.value}",
                ErrorContext(task_id=self.id, operation="complete"),
            )
        self.total_duration += duration
        self.completed_at = now or datetime.now()
        self.status = TaskStatus.COMPLETED
        logger.info(
            "Task completed",
            extra={
                "task_id": str(self.id),
                "duration_seconds": self.total_duration.total_seconds(),
            },
        )

    def cancel(self) -> None:
        """Force Cancelled from any state. Duration is left untouched."""
        self.status = TaskStatus.CANCELLED
        logger.debug("Task cancelled", extra={"task_id": str(self.id)})

    # --- Attributes ------------------------------------------------------------

    def add_tag(self, tag: str) -> None:
        if tag not in self.tags:
            self.tags.append(tag)

    def remove_tag(self, tag: str) -> None:
        self.tags = [t for t in self.tags if t != tag]

    def set_priority(self, priority: Priority) -> None:
        self.priority = priority

    def set_estimated_duration(self, duration: timedelta) -> None:
        if duration <= timedelta(0):
            raise ValidationError(
                "Estimated duration must be positive", "estimated_duration",
                ErrorContext(task_id=self.id),
            )
        self.estimated_duration = duration

    def update(
        self,
        name: str | None = None,
        description: str | None = None,
        category_id: CategoryId | None = None,
        priority: Priority | None = None,
        estimated_duration: timedelta | None = None,
        tags: list[str] | None = None,
        due_date: date | None = None,
    ) -> None:
        """Partial update — None means 'leave unchanged'."""
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if category_id is not None:
            self.category_id = category_id
        if priority is not None:
            self.priority = priority
        if estimated_duration is not None:
            self.set_estimated_duration(estimated_duration)
        if tags is not None:
            self.tags = []
            for tag in tags:
                self.add_tag(tag)
        if due_date is not None:
            self.due_date = due_date

    def get_progress_percentage(self) -> float | None:
        """total_duration / estimated_duration × 100, capped at 100."""
        if not self.estimated_duration:
            return None
        progress = self.total_duration / self.estimated_duration * 100.0
        return min(progress, 100.0)
