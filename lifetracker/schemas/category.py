"""Category Schemas — input validation and response rendering for categories.

Invariants:
    - CategoryCreate.color is '#RRGGBB' when given; preset hexes map back to presets
    - CategoryResponse always carries the hex plus the preset name (None for custom colors)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from lifetracker.core.category import (
    Category,
    CategoryColor,
    CategoryIcon,
    PresetColor,
    color_from_hex,
)


class CategoryCreate(BaseModel):
    """Category creation — validates name and color."""
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(None, max_length=1000)
    color: str | None = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    icon: CategoryIcon | None = None
    parent_id: UUID | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    def to_color(self) -> CategoryColor | None:
        if self.color is None:
            return None
        return color_from_hex(self.color)


class CategoryResponse(BaseModel):
    """Category response — public-facing category data."""
    id: UUID
    name: str
    description: str | None
    color_hex: str
    color_preset: PresetColor | None
    icon: CategoryIcon
    emoji: str
    is_active: bool
    sort_order: int
    parent_id: UUID | None
    daily_target_seconds: float | None
    weekly_target_seconds: float | None
    session_target_seconds: float | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, category: Category) -> "CategoryResponse":
        color = category.color
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
            color_hex=color.to_hex(),
            color_preset=color if isinstance(color, PresetColor) else None,
            icon=category.icon,
            emoji=category.icon.emoji,
            is_active=category.is_active,
            sort_order=category.sort_order,
            parent_id=category.parent_id,
            daily_target_seconds=(
                category.daily_target.total_seconds()
                if category.daily_target is not None else None
            ),
            weekly_target_seconds=(
                category.weekly_target.total_seconds()
                if category.weekly_target is not None else None
            ),
            session_target_seconds=(
                category.target_duration.total_seconds()
                if category.target_duration is not None else None
            ),
            created_at=category.created_at,
            updated_at=category.updated_at,
        )
