"""
Base Classes and Mixins
------------------------

Foundational ORM classes for the Daybook database.

Classes:
    - Base: Declarative base for all SQLAlchemy models
    - SoftDeleteMixin: Mixin providing the trash lifecycle

Timestamps are stored as naive UTC (see daybook.utils.dates).
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import Optional

# --- Third party ---
from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# --- Local imports ---
from daybook.utils.dates import utc_now


# --- Base ORM class ---
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Serves as the declarative base for SQLAlchemy models and provides
    access to the metadata object for table creation and migrations.
    """

    pass


# --- Soft Delete ---
class SoftDeleteMixin:
    """
    Mixin providing soft delete functionality for models.

    A soft deleted record stays in its table with deleted_at set. It is
    hidden from normal queries and can be restored until purged.

    Attributes:
        deleted_at: Timestamp when the record was moved to the trash
    """

    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime, nullable=True, doc="Timestamp of soft deletion"
    )

    @property
    def is_deleted(self) -> bool:
        """Check if the record is soft deleted."""
        return self.deleted_at is not None

    def soft_delete(self, when: Optional[datetime] = None) -> None:
        """Mark record as soft deleted."""
        self.deleted_at = when or utc_now()

    def restore(self) -> None:
        """Restore a soft deleted record."""
        self.deleted_at = None
