#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common query helpers.
All entity managers inherit from this class.

Key Features:
    - Session and logger wiring
    - Lookups that raise NotFoundError with a readable message
    - Soft-delete aware counting
    - Optional-field patching driven by (field, normalizer) tables

Usage:
    class TagManager(BaseManager):
        def create(self, metadata: Dict[str, Any]) -> Tag:
            DataValidator.validate_required_fields(metadata, ["name"])
            ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC
from typing import Any, Dict, List, Optional, Type, TypeVar

# --- Third party imports ---
from sqlalchemy import func, select
from sqlalchemy.orm import Session

# --- Local imports ---
from daybook.core.exceptions import NotFoundError
from daybook.core.logging_manager import JournalLogger

T = TypeVar("T")


class BaseManager(ABC):
    """
    Abstract base manager for the Daybook repositories.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    entity_label: str = "Record"

    def __init__(self, session: Session, logger: Optional[JournalLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Core Helper Methods
    # -------------------------------------------------------------------------

    def _require(self, model_class: Type[T], entity_id: str) -> T:
        """
        Get an entity by primary key or raise.

        Soft deleted rows are returned: callers decide whether the trash
        is a legal target.

        Raises:
            NotFoundError: If no row has this id
        """
        entity = self.session.get(model_class, entity_id)
        if entity is None:
            raise NotFoundError(f"{self.entity_label} not found: {entity_id}")
        return entity

    def _count(
        self,
        model_class: Type[T],
        include_deleted: bool = False,
    ) -> int:
        """
        Count entities, skipping soft-deleted rows unless asked.

        Args:
            model_class: ORM model class
            include_deleted: Include soft-deleted entities

        Returns:
            Count of matching entities
        """
        stmt = select(func.count()).select_from(model_class)
        if not include_deleted and hasattr(model_class, "deleted_at"):
            stmt = stmt.where(model_class.deleted_at.is_(None))  # type: ignore[attr-defined]
        return self.session.scalar(stmt) or 0

    # -------------------------------------------------------------------------
    # Scalar Field Update Helpers
    # -------------------------------------------------------------------------

    def _update_scalar_fields(
        self,
        entity: Any,
        metadata: Dict[str, Any],
        field_configs: List[tuple],
    ) -> None:
        """
        Update multiple scalar fields from metadata using normalizers.

        Args:
            entity: Entity to update
            metadata: Dictionary containing field values
            field_configs: List of tuples:
                - (field_name, normalizer) for required fields
                - (field_name, normalizer, allow_none) for optional fields

        Example:
            self._update_scalar_fields(category, metadata, [
                ("name", DataValidator.normalize_string),
                ("icon", DataValidator.normalize_string, True),
            ])
        """
        for config in field_configs:
            field_name = config[0]
            normalizer = config[1]
            allow_none = config[2] if len(config) > 2 else False

            if field_name not in metadata:
                continue

            value = normalizer(metadata[field_name])
            if value is not None or allow_none:
                setattr(entity, field_name, value)
