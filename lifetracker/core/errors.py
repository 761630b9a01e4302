"""Error Hierarchy — typed, categorized exceptions for all LifeTracker failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - StateError, NotFoundError and ValidationError are the only errors the core raises
    - to_response() produces the envelope a presentation layer renders
    - The core never retries; multi-step operations are not rolled back

Design Decisions:
    - Single hierarchy with LifeTrackerError base: callers catch one type or a precise subclass
    - ErrorContext as dataclass: carries task/category ids without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    STATE = "state"
    RESOURCE_NOT_FOUND = "resource_not_found"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    task_id: UUID | None = None
    category_id: UUID | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class LifeTrackerError(Exception):
    """Base exception for all LifeTracker errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to the standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "task_id": _str_or_none(self.context.task_id),
                    "category_id": _str_or_none(self.context.category_id),
                    "operation": self.context.operation,
                },
            }
        }


def _str_or_none(value: UUID | None) -> str | None:
    return str(value) if value is not None else None


# ─── State Errors ───────────────────────────────────────────────

class StateError(LifeTrackerError):
    """Transition not allowed from the current Timer / Task / AppCore state."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_STATE", ErrorCategory.STATE,
            ErrorSeverity.WARNING, context,
        )


# ─── Lookup Errors ──────────────────────────────────────────────

class NotFoundError(LifeTrackerError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: object, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class TaskNotFoundError(NotFoundError):
    """No task with the given id."""
    def __init__(self, task_id: UUID, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.task_id = task_id
        super().__init__("Task", task_id, ctx)


class CategoryNotFoundError(NotFoundError):
    """No category with the given id."""
    def __init__(self, category_id: UUID, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.category_id = category_id
        super().__init__("Category", category_id, ctx)


# ─── Validation Errors ──────────────────────────────────────────

class ValidationError(LifeTrackerError):
    """Input rejected by a domain rule (duplicate name, bad range, cycle...)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field
