"""Task Schemas — input validation and response rendering for tasks.

Invariants:
    - TaskCreate.name: 1-200 chars after stripping
    - estimated_seconds, when given, is positive
    - TaskResponse mirrors Task; durations in seconds
"""

from datetime import date, datetime, timedelta
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from lifetracker.core.domain_types import Priority, TaskStatus
from lifetracker.core.task import Task


class TaskCreate(BaseModel):
    """Task creation — validates name and estimate."""
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    category_id: UUID | None = None
    priority: Priority = Priority.MEDIUM
    estimated_seconds: int | None = Field(None, gt=0)
    tags: list[str] = Field(default_factory=list)
    due_date: date | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: list[str]) -> list[str]:
        seen: list[str] = []
        for tag in (t.strip() for t in v):
            if tag and tag not in seen:
                seen.append(tag)
        return seen

    @property
    def estimated_duration(self) -> timedelta | None:
        if self.estimated_seconds is None:
            return None
        return timedelta(seconds=self.estimated_seconds)


class TaskResponse(BaseModel):
    """Task response — public-facing task data."""
    id: UUID
    name: str
    description: str | None
    category_id: UUID | None
    status: TaskStatus
    priority: Priority
    created_at: datetime
    started_at: datetime | None
    completed_at: datetime | None
    total_seconds: float
    estimated_seconds: float | None
    progress_percentage: float | None
    tags: list[str]
    due_date: date | None

    @classmethod
    def from_domain(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            name=task.name,
            description=task.description,
            category_id=task.category_id,
            status=task.status,
            priority=task.priority,
            created_at=task.created_at,
            started_at=task.started_at,
            completed_at=task.completed_at,
            total_seconds=task.total_duration.total_seconds(),
            estimated_seconds=(
                task.estimated_duration.total_seconds()
                if task.estimated_duration is not None else None
            ),
            progress_percentage=task.get_progress_percentage(),
            tags=list(task.tags),
            due_date=task.due_date,
        )
