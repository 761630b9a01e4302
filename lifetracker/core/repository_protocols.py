"""Boundary Protocols — contracts between the core and its persistence collaborator.

Invariants:
    - Core NEVER imports a storage implementation — dependency arrows point inward only
    - The core holds no durable state; repositories hydrate it at startup
    - Callers persist after each mutating AppCore call (the core emits no events)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Synchronous methods: the core has no suspension points, so neither do its contracts
"""

from datetime import date
from typing import Protocol

from lifetracker.core.category import Category
from lifetracker.core.domain_types import CategoryId, TaskId
from lifetracker.core.task import Task
from lifetracker.core.time_stats import TimeStats


class TaskRepository(Protocol):
    """Contract for task persistence — implemented by the shell."""
    def list_all(self) -> list[Task]: ...
    def list_by_category(self, category_id: CategoryId) -> list[Task]: ...
    def list_completed_between(self, start: date, end: date) -> list[Task]: ...
    def save(self, task: Task) -> None: ...
    def delete(self, task_id: TaskId) -> None: ...


class CategoryRepository(Protocol):
    """Contract for category persistence — implemented by the shell."""
    def list_all(self) -> list[Category]: ...
    def save(self, category: Category) -> None: ...
    def delete(self, category_id: CategoryId) -> None: ...


class StatsRepository(Protocol):
    """Contract for per-date session aggregates — implemented by the shell."""
    def list_between(self, start: date, end: date) -> list[TimeStats]: ...
    def list_all(self) -> list[TimeStats]: ...
    def save(self, stats: TimeStats) -> None: ...
