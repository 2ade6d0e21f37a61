"""
Entity Models
--------------

Reference entities attached to journal entries.

Models:
    - Tag: Free-form label, many-to-many with entries
    - Category: Ordered reference list, one per entry at most
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

# --- Third party imports ---
from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from daybook.utils.dates import utc_now
from .associations import entry_tags
from .base import Base
from .core import new_id

if TYPE_CHECKING:
    from .core import Entry


class Tag(Base):
    """
    Keyword tags for entries.

    Names are stored trimmed and lowercased, which makes the unique
    constraint case-insensitive in practice.

    Attributes:
        id: Primary key (uuid4 string)
        name: Normalized tag text (unique)
        color: Display color, opaque to the database
        created_at: Creation timestamp

    Relationships:
        entries: Many-to-many with Entry (trash included)
    """

    __tablename__ = "tags"
    __table_args__ = (CheckConstraint("name != ''", name="ck_non_empty_tag"),)

    # ---- Primary fields ----
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    color: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)

    # ---- Relationships ----
    entries: Mapped[List["Entry"]] = relationship(
        "Entry", secondary=entry_tags, back_populates="tags"
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "created_at": self.created_at.isoformat(),
        }

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"

    def __str__(self) -> str:
        return f"#{self.name}"


class Category(Base):
    """
    Ordered categories for grouping entries.

    Attributes:
        id: Primary key (uuid4 string, or a well-known id for seeded rows)
        name: Display name (unique)
        icon: Optional icon identifier
        color: Display color
        sort_order: Position in the category list
        created_at: Creation timestamp

    Relationships:
        entries: One-to-many with Entry. Deleting a category leaves its
            entries uncategorized.
    """

    __tablename__ = "categories"
    __table_args__ = (CheckConstraint("name != ''", name="ck_non_empty_category"),)

    # ---- Primary fields ----
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    icon: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    color: Mapped[str] = mapped_column(String(32), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)

    # ---- Relationships ----
    entries: Mapped[List["Entry"]] = relationship(
        "Entry", back_populates="category", passive_deletes=True
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "color": self.color,
            "sort_order": self.sort_order,
            "created_at": self.created_at.isoformat(),
        }

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"

    def __str__(self) -> str:
        return f"Category '{self.name}'"
