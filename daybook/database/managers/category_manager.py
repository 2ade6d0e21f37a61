#!/usr/bin/env python3
"""
category_manager.py
--------------------
Manages the ordered list of entry categories.

Categories are a small reference list shown in a user-defined order.
An entry points to at most one category; removing a category leaves
its entries in place, uncategorized.

Key Features:
    - CRUD operations with duplicate-name checks
    - Append-at-end default ordering
    - Bulk reordering from an ordered id list

Usage:
    category_mgr = CategoryManager(session, logger)

    travel = category_mgr.create({"name": "Travel", "color": "#EC4899"})
    category_mgr.reorder([travel.id, "default-personal"])
"""
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import func, select

from daybook.core.config import DEFAULT_CATEGORY_COLOR
from daybook.core.exceptions import DuplicateError, ValidationError
from daybook.core.validators import DataValidator
from daybook.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from daybook.database.models import Category
from .base_manager import BaseManager


class CategoryManager(BaseManager):
    """Manages Category table operations."""

    entity_label = "Category"

    @handle_db_errors
    @log_database_operation("get_all_categories")
    def get_all(self) -> List[Category]:
        """Retrieve all categories in display order (sort_order, then name)."""
        stmt = select(Category).order_by(Category.sort_order, Category.name)
        return list(self.session.scalars(stmt))

    @handle_db_errors
    @log_database_operation("get_category_by_id")
    def get_by_id(self, category_id: str) -> Optional[Category]:
        return self.session.get(Category, category_id)

    @handle_db_errors
    @log_database_operation("get_category_by_name")
    def get_by_name(self, name: str) -> Optional[Category]:
        """
        Retrieve a category by name, ignoring case and surrounding whitespace.

        Args:
            name: Category name

        Returns:
            Category object if found, None otherwise
        """
        normalized = DataValidator.normalize_string(name)
        if not normalized:
            return None
        return self.session.scalars(
            select(Category).where(func.lower(Category.name) == normalized.lower())
        ).first()

    @handle_db_errors
    @log_database_operation("create_category")
    @validate_metadata(["name"])
    def create(self, metadata: Dict[str, Any]) -> Category:
        """
        Create a new category.

        Args:
            metadata: Dictionary with keys:
                - name: Display name (required)
                - icon: Icon identifier (optional)
                - color: Display color (optional)
                - sort_order: Position (optional, defaults to the end of the list)

        Returns:
            Created Category object

        Raises:
            ValidationError: If name is missing or empty
            DuplicateError: If a category with the same name exists
        """
        name = self._normalized_name(metadata["name"])
        self._ensure_unique(name)

        sort_order = DataValidator.normalize_int(metadata.get("sort_order"))
        if sort_order is None:
            sort_order = self._next_sort_order()

        category = Category(
            name=name,
            icon=DataValidator.normalize_string(metadata.get("icon")),
            color=metadata.get("color") or DEFAULT_CATEGORY_COLOR,
            sort_order=sort_order,
        )
        self.session.add(category)
        self.session.flush()

        if self.logger:
            self.logger.log_debug(
                f"Created category: {name}",
                {"category_id": category.id, "sort_order": sort_order},
            )

        return category

    @handle_db_errors
    @log_database_operation("update_category")
    def update(self, category_id: str, metadata: Dict[str, Any]) -> Category:
        """
        Update a category. Only the supplied keys change.

        Args:
            category_id: The category ID
            metadata: Optional keys 'name', 'icon', 'color', 'sort_order'.
                'icon': None clears the icon.

        Raises:
            NotFoundError: If the category does not exist
            DuplicateError: If another category already has the new name
        """
        category = self._require(Category, category_id)

        if "name" in metadata:
            name = self._normalized_name(metadata["name"])
            self._ensure_unique(name, exclude_id=category.id)
            category.name = name

        self._update_scalar_fields(
            category,
            metadata,
            [
                ("icon", DataValidator.normalize_string, True),
                ("color", DataValidator.normalize_string),
                ("sort_order", DataValidator.normalize_int),
            ],
        )
        self.session.flush()
        return category

    @handle_db_errors
    @log_database_operation("delete_category")
    def delete(self, category_id: str) -> None:
        """
        Delete a category, leaving its entries uncategorized.

        Raises:
            NotFoundError: If the category does not exist
        """
        category = self._require(Category, category_id)

        orphaned = list(category.entries)
        for entry in orphaned:
            entry.category = None
        self.session.flush()

        self.session.delete(category)
        self.session.flush()

        if self.logger:
            self.logger.log_debug(
                f"Deleted category: {category.name}",
                {"category_id": category_id, "entries_uncategorized": len(orphaned)},
            )

    @handle_db_errors
    @log_database_operation("reorder_categories")
    def reorder(self, ordered_ids: Sequence[str]) -> None:
        """
        Rewrite sort_order so categories follow the given id order.

        Args:
            ordered_ids: Category ids, first shown first

        Raises:
            NotFoundError: If an id does not resolve
        """
        for position, category_id in enumerate(ordered_ids):
            self._require(Category, category_id).sort_order = position
        self.session.flush()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _next_sort_order(self) -> int:
        current_max = self.session.scalar(select(func.max(Category.sort_order)))
        return 0 if current_max is None else current_max + 1

    @staticmethod
    def _normalized_name(raw: Any) -> str:
        name = DataValidator.normalize_string(raw)
        if not name:
            raise ValidationError("Category name cannot be empty")
        return name

    def _ensure_unique(self, name: str, exclude_id: Optional[str] = None) -> None:
        existing = self.get_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateError(f"A category with this name already exists: {name}")
