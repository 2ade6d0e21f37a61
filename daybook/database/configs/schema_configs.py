#!/usr/bin/env python3
"""
schema_configs.py
-----------------

Declarative schema setup data used by JournalDB.initialize().

- DEFAULT_CATEGORIES: starter categories seeded into an empty database
- ADDITIVE_COLUMNS: columns added to databases created by older versions
- SECONDARY_INDEXES: lookup indexes created if missing
"""
from dataclasses import dataclass
from typing import Callable, List, Optional

from sqlalchemy import Column, Integer, String


@dataclass(frozen=True)
class DefaultCategory:
    """
    Seed row for the categories table.

    Attributes:
        id: Well-known id, so seeding twice never duplicates a row
        name: Display name
        icon: Icon identifier
        color: Display color
        sort_order: Initial position
    """

    id: str
    name: str
    icon: Optional[str]
    color: str
    sort_order: int


@dataclass(frozen=True)
class AdditiveColumn:
    """
    Nullable column added to an existing table when it is missing.

    Attributes:
        table_name: Table to alter
        column_factory: Builds a fresh Column for each ALTER
        description: What the column is for
    """

    table_name: str
    column_factory: Callable[[], Column]
    description: str

    @property
    def column_name(self) -> str:
        return self.column_factory().name


DEFAULT_CATEGORIES: List[DefaultCategory] = [
    DefaultCategory("default-personal", "Personal", "journal-outline", "#6366F1", 0),
    DefaultCategory("default-work", "Work", "briefcase-outline", "#F59E0B", 1),
    DefaultCategory("default-book", "Book Notes", "book-outline", "#10B981", 2),
    DefaultCategory("default-travel", "Travel", "airplane-outline", "#EC4899", 3),
    DefaultCategory("default-gratitude", "Gratitude", "heart-outline", "#EF4444", 4),
]


# Alembic adds these columns without constraints, so a migrated
# category_id has no foreign key. CategoryManager.delete() nulls it.
ADDITIVE_COLUMNS: List[AdditiveColumn] = [
    AdditiveColumn(
        "entries",
        lambda: Column("category_id", String(36), nullable=True),
        "Optional category of an entry",
    ),
    AdditiveColumn(
        "entries",
        lambda: Column("sync_status", String(8), nullable=True, server_default="pending"),
        "Replication bookkeeping state",
    ),
    AdditiveColumn(
        "entries",
        lambda: Column("sync_version", Integer, nullable=True, server_default="0"),
        "Replication bookkeeping counter",
    ),
]


SECONDARY_INDEXES: List[str] = [
    "CREATE INDEX IF NOT EXISTS idx_entries_created_at ON entries(created_at DESC)",
    "CREATE INDEX IF NOT EXISTS idx_entries_deleted_at ON entries(deleted_at)",
    "CREATE INDEX IF NOT EXISTS idx_entries_category ON entries(category_id)",
    "CREATE INDEX IF NOT EXISTS idx_entries_sync_status ON entries(sync_status)",
]
