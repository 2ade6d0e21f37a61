"""
Database Models Package
------------------------

SQLAlchemy ORM models for the Daybook journal database.

- base: Base class and SoftDeleteMixin
- associations: entry_tags junction table
- enums: Mood, SyncStatus, dominant_mood
- core: Entry
- entities: Tag, Category

Usage:
    from daybook.database.models import Entry, Tag, Category, Mood
"""
# Base classes
from .base import Base, SoftDeleteMixin

# Enumerations
from .enums import Mood, SyncStatus, dominant_mood

# Association tables
from .associations import entry_tags

# Core models
from .core import Entry, new_id

# Entity models
from .entities import Category, Tag

__all__ = [
    # Base
    "Base",
    "SoftDeleteMixin",
    # Enums
    "Mood",
    "SyncStatus",
    "dominant_mood",
    # Associations
    "entry_tags",
    # Models
    "Entry",
    "Tag",
    "Category",
    "new_id",
]
