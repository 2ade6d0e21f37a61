"""
Core Models
------------

Central model for the Daybook database.

Models:
    - Entry: A single journal record (the primary model)

The Entry model carries the text, the optional mood and category, its
tag set, and the bookkeeping needed for the trash lifecycle and for a
future replication layer (sync_status, sync_version).
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from daybook.utils.dates import utc_now
from .associations import entry_tags
from .base import Base, SoftDeleteMixin
from .enums import Mood, SyncStatus

if TYPE_CHECKING:
    from .entities import Category, Tag


def new_id() -> str:
    """Generate an opaque identifier for a new row."""
    return str(uuid.uuid4())


# ----- Entry Model -----
class Entry(Base, SoftDeleteMixin):
    """
    Central model representing a journal entry.

    Soft Delete Support:
        Entries are moved to the trash by setting deleted_at
        (SoftDeleteMixin) and are hidden from every normal query.
        Only trash queries and lookups by id see them.

    Attributes:
        id: Primary key (uuid4 string, immutable)
        title: Entry title (derived from content when left blank)
        content: Entry body (may be empty)
        mood: Optional Mood
        category_id: Optional FK to Category (nulled when the category goes)
        created_at: When the entry was written (set once)
        updated_at: Refreshed on every mutating write
        deleted_at: When the entry was moved to the trash
        sync_status: Replication bookkeeping, PENDING after local edits
        sync_version: Incremented on every mutating write

    Relationships:
        tags: Many-to-many with Tag
        category: Many-to-one with Category (optional)
    """

    __tablename__ = "entries"
    __table_args__ = (
        CheckConstraint("sync_version >= 0", name="ck_entry_positive_sync_version"),
    )

    # ---- Primary fields ----
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    mood: Mapped[Optional[Mood]] = mapped_column(
        SQLEnum(Mood, values_callable=lambda x: [e.value for e in x]),
        nullable=True,
    )
    category_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )

    # ---- Timestamps ----
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)

    # ---- Sync bookkeeping ----
    sync_status: Mapped[SyncStatus] = mapped_column(
        SQLEnum(SyncStatus, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=SyncStatus.PENDING,
        server_default=SyncStatus.PENDING.value,
    )
    sync_version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )

    # ---- Relationships ----
    tags: Mapped[List["Tag"]] = relationship(
        "Tag", secondary=entry_tags, back_populates="entries", order_by="Tag.name"
    )
    category: Mapped[Optional["Category"]] = relationship(
        "Category", back_populates="entries"
    )

    # ---- Computed properties ----
    @property
    def tag_ids(self) -> List[str]:
        """Ids of the attached tags."""
        return [tag.id for tag in self.tags]

    def touch(self) -> None:
        """Record a local mutation: bump updated_at and the sync counters."""
        self.updated_at = utc_now()
        self.sync_status = SyncStatus.PENDING
        self.sync_version = (self.sync_version or 0) + 1

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation with ISO-8601 timestamps."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "mood": self.mood.value if self.mood else None,
            "category_id": self.category_id,
            "category": self.category.to_dict() if self.category else None,
            "tags": [tag.to_dict() for tag in self.tags],
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "deleted_at": self.deleted_at.isoformat() if self.deleted_at else None,
            "sync_status": self.sync_status.value,
            "sync_version": self.sync_version,
        }

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, title='{self.title}')>"

    def __str__(self) -> str:
        state = " (deleted)" if self.is_deleted else ""
        return f"Entry '{self.title}'{state}"
