"""Task Manager — in-memory id-keyed repository of Tasks.

Invariants:
    - Exactly one Task per id
    - Holds NO "active task" pointer — AppCore is the single owner of that state
    - Lookups return the live Task objects (callers mutate through Task methods)
"""

import logging
from datetime import datetime, timedelta

from lifetracker.core.domain_types import CategoryId, TaskId, TaskStatus
from lifetracker.core.errors import TaskNotFoundError
from lifetracker.core.task import Task

logger = logging.getLogger(__name__)


class TaskManager:
    """Repository with lookup, filter and search over tasks."""

    def __init__(self):
        self._tasks: dict[TaskId, Task] = {}

    def add_task(self, task: Task) -> TaskId:
        self._tasks[task.id] = task
        logger.debug("Task added", extra={"task_id": str(task.id)})
        return task.id

    def get_task(self, task_id: TaskId) -> Task | None:
        return self._tasks.get(task_id)

    def require_task(self, task_id: TaskId) -> Task:
        """Like get_task, but raises TaskNotFoundError."""
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def remove_task(self, task_id: TaskId) -> Task:
        task = self._tasks.pop(task_id, None)
        if task is None:
            raise TaskNotFoundError(task_id)
        logger.debug("Task removed", extra={"task_id": str(task_id)})
        return task

    def complete_task(
        self, task_id: TaskId, duration: timedelta, now: datetime | None = None,
    ) -> Task:
        task = self.require_task(task_id)
        task.complete(duration, now)
        return task

    def get_all_tasks(self) -> list[Task]:
        return list(self._tasks.values())

    def get_tasks_by_status(self, status: TaskStatus) -> list[Task]:
        return [t for t in self._tasks.values() if t.status == status]

    def get_tasks_by_category(self, category_id: CategoryId) -> list[Task]:
        return [t for t in self._tasks.values() if t.category_id == category_id]

    def search_tasks(self, query: str) -> list[Task]:
        """Case-insensitive substring match over name, description or any tag."""
        needle = query.lower()
        return [t for t in self._tasks.values() if _matches(t, needle)]

    def get_task_count(self) -> int:
        return len(self._tasks)

    def clear(self) -> None:
        self._tasks.clear()
        logger.debug("All tasks cleared")


def _matches(task: Task, needle: str) -> bool:
    if needle in task.name.lower():
        return True
    if task.description and needle in task.description.lower():
        return True
    return any(needle in tag.lower() for tag in task.tags)
