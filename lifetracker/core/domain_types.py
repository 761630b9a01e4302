"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TaskId, CategoryId wrap UUIDs — never use bare strings as ids in domain logic
    - All valid states encoded as Enums — no raw string matching
    - Durations are datetime.timedelta everywhere inside core/

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", UUID)
CategoryId = NewType("CategoryId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Task lifecycle — Completed and Cancelled are terminal."""
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskStatus.COMPLETED, TaskStatus.CANCELLED)


class Priority(str, Enum):
    """Task priority — rank gives the sort order (low → urgent)."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK: dict[Priority, int] = {
    Priority.LOW: 0,
    Priority.MEDIUM: 1,
    Priority.HIGH: 2,
    Priority.URGENT: 3,
}


class TimerStatus(str, Enum):
    """Coarse timer status — the payload lives on the Timer state objects."""
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_DAILY_TARGET_HOURS: float = 8.0
SECONDS_PER_HOUR: int = 3600
