"""Category — hierarchical tag with color, icon and time targets.

Invariants:
    - CategoryColor is a sum type: a PresetColor member OR a CustomColor(hex)
    - Preset ⇄ hex goes through one mapping table (_PRESET_HEX) in both directions
    - CustomColor.hex is always '#RRGGBB'
    - parent_id is a weak reference; acyclicity is enforced by CategoryManager

Design Decisions:
    - str Enum for presets + frozen dataclass for custom: JSON-friendly, hashable
    - Parent assignment lives on CategoryManager, which can walk the forest
"""

import logging
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Union

from lifetracker.core.domain_types import CategoryId
from lifetracker.core.errors import ValidationError

logger = logging.getLogger(__name__)

_HEX_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


# ─── Colors ──────────────────────────────────────────────────────

class PresetColor(str, Enum):
    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"
    PINK = "pink"
    CYAN = "cyan"
    GRAY = "gray"

    def to_hex(self) -> str:
        return _PRESET_HEX[self]


_PRESET_HEX: dict[PresetColor, str] = {
    PresetColor.RED: "#F44336",
    PresetColor.ORANGE: "#FF9800",
    PresetColor.YELLOW: "#FFEB3B",
    PresetColor.GREEN: "#4CAF50",
    PresetColor.BLUE: "#2196F3",
    PresetColor.PURPLE: "#9C27B0",
    PresetColor.PINK: "#E91E63",
    PresetColor.CYAN: "#00BCD4",
    PresetColor.GRAY: "#9E9E9E",
}
_HEX_PRESET: dict[str, PresetColor] = {v: k for k, v in _PRESET_HEX.items()}


@dataclass(frozen=True)
class CustomColor:
    hex: str

    def __post_init__(self):
        if not is_valid_hex(self.hex):
            raise ValidationError(f"Invalid hex color '{self.hex}'", "color")

    def to_hex(self) -> str:
        return self.hex


CategoryColor = Union[PresetColor, CustomColor]
DEFAULT_COLOR: PresetColor = PresetColor.BLUE


def is_valid_hex(value: str) -> bool:
    return bool(_HEX_PATTERN.fullmatch(value))


def color_from_hex(value: str) -> CategoryColor:
    """Known preset hex → preset member (case-insensitive); anything else → CustomColor."""
    preset = _HEX_PRESET.get(value.upper())
    if preset is not None:
        return preset
    return CustomColor(value)


# ─── Icons ───────────────────────────────────────────────────────

class CategoryIcon(str, Enum):
    WORK = "work"
    STUDY = "study"
    PERSONAL = "personal"
    EXERCISE = "exercise"
    ENTERTAINMENT = "entertainment"
    HOUSEHOLD = "household"
    SOCIAL = "social"
    SHOPPING = "shopping"
    TRAVEL = "travel"
    HEALTH = "health"
    CREATIVE = "creative"
    FOOD = "food"
    MEETING = "meeting"
    PROJECT = "project"
    RESEARCH = "research"
    WRITING = "writing"
    DESIGN = "design"
    DEVELOPMENT = "development"
    OTHER = "other"

    @property
    def emoji(self) -> str:
        return _ICON_EMOJI[self]


_ICON_EMOJI: dict[CategoryIcon, str] = {
    CategoryIcon.WORK: "💼",
    CategoryIcon.STUDY: "📚",
    CategoryIcon.PERSONAL: "👤",
    CategoryIcon.EXERCISE: "🏃",
    CategoryIcon.ENTERTAINMENT: "🎮",
    CategoryIcon.HOUSEHOLD: "🏠",
    CategoryIcon.SOCIAL: "👥",
    CategoryIcon.SHOPPING: "🛒",
    CategoryIcon.TRAVEL: "✈️",
    CategoryIcon.HEALTH: "🏥",
    CategoryIcon.CREATIVE: "🎨",
    CategoryIcon.FOOD: "🍽️",
    CategoryIcon.MEETING: "👥",
    CategoryIcon.PROJECT: "📋",
    CategoryIcon.RESEARCH: "🔬",
    CategoryIcon.WRITING: "✍️",
    CategoryIcon.DESIGN: "🎨",
    CategoryIcon.DEVELOPMENT: "💻",
    CategoryIcon.OTHER: "📁",
}


# ─── Category ────────────────────────────────────────────────────

@dataclass
class Category:
    """Tag with optional parent — pure dataclass, no IO."""

    name: str
    description: str | None = None
    color: CategoryColor = DEFAULT_COLOR
    icon: CategoryIcon = CategoryIcon.OTHER
    id: CategoryId = field(default_factory=lambda: CategoryId(uuid.uuid4()))

    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    daily_target: timedelta | None = None
    weekly_target: timedelta | None = None
    target_duration: timedelta | None = None

    is_active: bool = True
    sort_order: int = 0
    parent_id: CategoryId | None = None

    def update(
        self,
        name: str | None = None,
        description: str | None = None,
        color: CategoryColor | None = None,
        icon: CategoryIcon | None = None,
        now: datetime | None = None,
    ) -> None:
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if color is not None:
            self.color = color
        if icon is not None:
            self.icon = icon
        self._touch(now)
        logger.debug("Category updated", extra={"category_id": str(self.id)})

    def set_daily_target(self, target: timedelta, now: datetime | None = None) -> None:
        self.daily_target = _positive(target, "daily_target")
        self._touch(now)

    def set_weekly_target(self, target: timedelta, now: datetime | None = None) -> None:
        self.weekly_target = _positive(target, "weekly_target")
        self._touch(now)

    def set_target_duration(self, target: timedelta, now: datetime | None = None) -> None:
        self.target_duration = _positive(target, "target_duration")
        self._touch(now)

    def set_active(self, active: bool, now: datetime | None = None) -> None:
        self.is_active = active
        self._touch(now)

    def set_sort_order(self, order: int, now: datetime | None = None) -> None:
        self.sort_order = order
        self._touch(now)

    def set_parent(
        self, parent_id: CategoryId | None, now: datetime | None = None,
    ) -> None:
        """Assign parent_id as-is. Use CategoryManager.set_parent for cycle checks."""
        self.parent_id = parent_id
        self._touch(now)

    def is_root(self) -> bool:
        return self.parent_id is None

    def is_child(self) -> bool:
        return self.parent_id is not None

    def _touch(self, now: datetime | None = None) -> None:
        self.updated_at = now or datetime.now()


def _positive(target: timedelta, field_name: str) -> timedelta:
    if target <= timedelta(0):
        raise ValidationError(f"{field_name} must be positive", field_name)
    return target
