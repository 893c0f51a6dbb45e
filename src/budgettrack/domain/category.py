"""Sub-category domain service."""

import uuid
from typing import Optional

from budgettrack.store.base import LedgerStore
from budgettrack.domain.entities import Category, SubCategory
from budgettrack.domain.errors import (
    NotFoundError,
    ValidationError,
    sub_category_not_found,
)

UNCATEGORIZED = "Uncategorized"


def parse_category(value: Category | str) -> Category:
    """Parse a category tag, accepting any letter case.

    Raises:
        ValidationError: If value is not one of the fixed categories
    """
    if isinstance(value, Category):
        return value
    for category in Category:
        if category.value.lower() == str(value).strip().lower():
            return category
    choices = ", ".join(c.value for c in Category)
    raise ValidationError(f"Unknown category '{value}'. Choose one of: {choices}")


class SubCategoryService:
    """Service for managing sub-categories."""

    def __init__(self, store: LedgerStore):
        """Initialize sub-category service.

        Args:
            store: Ledger store instance
        """
        self.store = store

    def create_sub_category(self, name: str, parent: Category | str) -> SubCategory:
        """Create a sub-category under one of the fixed categories.

        Args:
            name: Sub-category name
            parent: Parent category tag (never another sub-category)

        Returns:
            The created sub-category

        Raises:
            ValidationError: If name is blank or parent is not a category
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Sub-category name must not be empty")

        sub_category = SubCategory(
            id=str(uuid.uuid4()), name=name, parent_id=parse_category(parent)
        )
        sub_categories = self.store.snapshot().sub_categories + (sub_category,)
        self.store.update(sub_categories=sub_categories)
        return sub_category

    def delete_sub_category(self, sub_category_id: str) -> None:
        """Delete a sub-category.

        Transactions referencing it keep the dangling ID.

        Raises:
            NotFoundError: If sub-category doesn't exist
        """
        sub_categories = self.store.snapshot().sub_categories
        remaining = tuple(s for s in sub_categories if s.id != sub_category_id)
        if len(remaining) == len(sub_categories):
            raise NotFoundError(sub_category_not_found(sub_category_id))
        self.store.update(sub_categories=remaining)

    def get_sub_category(self, sub_category_id: str) -> Optional[SubCategory]:
        """Get sub-category by ID, or None if not found."""
        for sub_category in self.store.snapshot().sub_categories:
            if sub_category.id == sub_category_id:
                return sub_category
        return None

    def list_sub_categories(self, parent: Optional[Category] = None) -> list[SubCategory]:
        """List sub-categories in collection order, optionally for one category."""
        return [
            s
            for s in self.store.snapshot().sub_categories
            if parent is None or s.parent_id == parent
        ]

    def first_sub_category(self, parent: Category) -> Optional[SubCategory]:
        """Return the first sub-category under a category."""
        for sub_category in self.store.snapshot().sub_categories:
            if sub_category.parent_id == parent:
                return sub_category
        return None

    def find_sub_category(self, name: str, parent: Category) -> Optional[SubCategory]:
        """Find a sub-category by exact name under a category."""
        for sub_category in self.store.snapshot().sub_categories:
            if sub_category.name == name and sub_category.parent_id == parent:
                return sub_category
        return None

    def resolve_sub_category(self, value: str, parent: Category) -> SubCategory:
        """Resolve a sub-category by ID or by name under a category.

        Raises:
            NotFoundError: If nothing matches
        """
        sub_category = self.get_sub_category(value)
        if sub_category is None:
            sub_category = self.find_sub_category(value, parent)
        if sub_category is None:
            raise NotFoundError(sub_category_not_found(value))
        return sub_category

    def resolve_name(self, sub_category_id: str) -> str:
        """Return the sub-category name, or "Uncategorized" for unknown IDs."""
        sub_category = self.get_sub_category(sub_category_id)
        return sub_category.name if sub_category is not None else UNCATEGORIZED

    def get_category_tree(self) -> dict[Category, list[SubCategory]]:
        """Group sub-categories under every category, in category order."""
        tree: dict[Category, list[SubCategory]] = {c: [] for c in Category}
        for sub_category in self.store.snapshot().sub_categories:
            tree[sub_category.parent_id].append(sub_category)
        return tree
