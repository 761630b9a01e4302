"""Category Manager — arena of Categories keyed by id, forming a forest via parent_id.

Invariants:
    - Category names are unique (exact match)
    - Parent links never form a cycle: every parent assignment walks to the root first
    - The default category cannot be removed
    - Removal never cascades: tasks and children keep their (now dangling) references
    - Root/child listings include active categories only, sorted by sort_order

Design Decisions:
    - Arena + id references instead of object links: stable ids, no ownership cycles
    - Five seeded defaults (Work first, so Work is the implicit default)
"""

import logging
from datetime import datetime, timedelta

from lifetracker.core.category import (
    Category,
    CategoryColor,
    CategoryIcon,
    PresetColor,
)
from lifetracker.core.domain_types import CategoryId
from lifetracker.core.errors import (
    CategoryNotFoundError,
    ErrorContext,
    ValidationError,
)
from lifetracker.core.timer import Clock

logger = logging.getLogger(__name__)


DEFAULT_CATEGORIES: tuple[tuple[str, str, PresetColor, CategoryIcon], ...] = (
    ("Work", "Work-related tasks", PresetColor.ORANGE, CategoryIcon.WORK),
    ("Study", "Learning and growth", PresetColor.YELLOW, CategoryIcon.STUDY),
    ("Exercise", "Fitness and sport", PresetColor.GREEN, CategoryIcon.EXERCISE),
    ("Entertainment", "Leisure and fun", PresetColor.PURPLE, CategoryIcon.ENTERTAINMENT),
    ("Other", "Miscellaneous tasks", PresetColor.GRAY, CategoryIcon.OTHER),
)


class CategoryManager:
    """Repository with hierarchy queries over categories."""

    def __init__(self, seed_defaults: bool = True, clock: Clock | None = None):
        self._clock: Clock = clock or datetime.now
        self._categories: dict[CategoryId, Category] = {}
        self._default_category_id: CategoryId | None = None
        if seed_defaults:
            self._create_default_categories()

    def _create_default_categories(self) -> None:
        for order, (name, description, color, icon) in enumerate(DEFAULT_CATEGORIES):
            now = self._clock()
            category = Category(
                name=name, description=description, color=color, icon=icon,
                sort_order=order, created_at=now, updated_at=now,
            )
            if order == 0:
                self._default_category_id = category.id
            self._categories[category.id] = category
        logger.debug("Seeded %d default categories", len(DEFAULT_CATEGORIES))

    # --- Creation / removal ----------------------------------------------------

    def add_category(self, category: Category) -> CategoryId:
        """Insert a pre-built category (hydration path). Dangling parents are tolerated."""
        if category.parent_id is not None:
            self._check_no_cycle(category.id, category.parent_id)
        self._categories[category.id] = category
        logger.debug("Category added", extra={"category_id": str(category.id)})
        return category.id

    def create_category(
        self,
        name: str,
        description: str | None = None,
        color: CategoryColor | None = None,
        icon: CategoryIcon | None = None,
        parent_id: CategoryId | None = None,
    ) -> CategoryId:
        self._check_name_free(name)
        if parent_id is not None:
            self.require_category(parent_id)
        now = self._clock()
        category = Category(
            name=name, description=description, parent_id=parent_id,
            created_at=now, updated_at=now,
        )
        if color is not None:
            category.color = color
        if icon is not None:
            category.icon = icon
        return self.add_category(category)

    def remove_category(self, category_id: CategoryId) -> Category:
        if category_id == self._default_category_id:
            raise ValidationError(
                "The default category cannot be removed", "category_id",
                ErrorContext(category_id=category_id, operation="remove_category"),
            )
        category = self._categories.pop(category_id, None)
        if category is None:
            raise CategoryNotFoundError(category_id)
        logger.info("Category removed", extra={"category_id": str(category_id)})
        return category

    # --- Lookup ----------------------------------------------------------------

    def get_category(self, category_id: CategoryId) -> Category | None:
        return self._categories.get(category_id)

    def require_category(self, category_id: CategoryId) -> Category:
        category = self._categories.get(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    def get_all_categories(self) -> list[Category]:
        return _sorted(self._categories.values())

    def get_active_categories(self) -> list[Category]:
        return _sorted(c for c in self._categories.values() if c.is_active)

    def get_root_categories(self) -> list[Category]:
        return _sorted(
            c for c in self._categories.values() if c.is_root() and c.is_active
        )

    def get_child_categories(self, parent_id: CategoryId) -> list[Category]:
        return _sorted(
            c for c in self._categories.values()
            if c.parent_id == parent_id and c.is_active
        )

    def search_categories(self, query: str) -> list[Category]:
        needle = query.lower()
        return [
            c for c in self._categories.values()
            if needle in c.name.lower()
            or (c.description is not None and needle in c.description.lower())
        ]

    def get_category_count(self) -> int:
        return len(self._categories)

    # --- Default ---------------------------------------------------------------

    @property
    def default_category_id(self) -> CategoryId | None:
        return self._default_category_id

    def get_default_category(self) -> Category | None:
        if self._default_category_id is None:
            return None
        return self._categories.get(self._default_category_id)

    def set_default_category(self, category_id: CategoryId) -> None:
        self.require_category(category_id)
        self._default_category_id = category_id

    # --- Mutation --------------------------------------------------------------

    def update_category(
        self,
        category_id: CategoryId,
        name: str | None = None,
        description: str | None = None,
        color: CategoryColor | None = None,
        icon: CategoryIcon | None = None,
    ) -> None:
        category = self.require_category(category_id)
        if name is not None and name != category.name:
            self._check_name_free(name)
        category.update(name, description, color, icon, now=self._clock())

    def set_parent(
        self, category_id: CategoryId, parent_id: CategoryId | None,
    ) -> None:
        """Re-parent a category. None makes it a root."""
        category = self.require_category(category_id)
        if parent_id is not None:
            self.require_category(parent_id)
            self._check_no_cycle(category_id, parent_id)
        category.set_parent(parent_id, now=self._clock())

    def set_targets(
        self,
        category_id: CategoryId,
        daily: timedelta | None = None,
        weekly: timedelta | None = None,
        session: timedelta | None = None,
    ) -> None:
        """Set any of the daily, weekly or per-session targets. None leaves one unchanged."""
        category = self.require_category(category_id)
        now = self._clock()
        if daily is not None:
            category.set_daily_target(daily, now)
        if weekly is not None:
            category.set_weekly_target(weekly, now)
        if session is not None:
            category.set_target_duration(session, now)

    def reorder_categories(self, orders: list[tuple[CategoryId, int]]) -> None:
        """Apply (id, sort_order) pairs. Unknown ids are skipped."""
        for category_id, order in orders:
            category = self._categories.get(category_id)
            if category is None:
                logger.debug(
                    "Skipping reorder of unknown category",
                    extra={"category_id": str(category_id)},
                )
                continue
            category.set_sort_order(order, now=self._clock())

    def get_ancestors(self, category_id: CategoryId) -> list[Category]:
        """Parent chain from nearest to root. Stops at a dangling reference."""
        ancestors: list[Category] = []
        current = self.require_category(category_id).parent_id
        seen: set[CategoryId] = {category_id}
        while current is not None and current not in seen:
            parent = self._categories.get(current)
            if parent is None:
                break
            ancestors.append(parent)
            seen.add(current)
            current = parent.parent_id
        return ancestors

    # --- Rules -----------------------------------------------------------------

    def _check_name_free(self, name: str) -> None:
        if any(c.name == name for c in self._categories.values()):
            raise ValidationError(
                f"Category name '{name}' already exists", "name",
                ErrorContext(operation="create_category"),
            )

    def _check_no_cycle(self, category_id: CategoryId, parent_id: CategoryId) -> None:
        """Walk from parent_id to the root; meeting category_id means a cycle."""
        current: CategoryId | None = parent_id
        seen: set[CategoryId] = set()
        while current is not None and current not in seen:
            if current == category_id:
                raise ValidationError(
                    "Parent assignment would create a cycle", "parent_id",
                    ErrorContext(category_id=category_id, operation="set_parent"),
                )
            seen.add(current)
            parent = self._categories.get(current)
            current = parent.parent_id if parent is not None else None


def _sorted(categories) -> list[Category]:
    return sorted(categories, key=lambda c: c.sort_order)
