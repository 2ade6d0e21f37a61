#!/usr/bin/env python3
"""
managers package
--------------------
Entity managers for the Daybook database.

Each manager handles operations for one entity type on a single
session and inherits from BaseManager.

Available Managers:
    BaseManager: Abstract base class with common utilities
    EntryManager: Entries, trash lifecycle and filtered listings
    TagManager: Tags and entry-tag links
    CategoryManager: Ordered categories

Usage:
    from daybook.database.managers import EntryManager, EntryPatch

    entry_mgr = EntryManager(session, logger)
    entry_mgr.update(entry_id, EntryPatch(title="Morning pages"))
"""
from .base_manager import BaseManager
from .tag_manager import TagManager
from .category_manager import CategoryManager
from .entry_manager import UNSET, EntryManager, EntryPatch

__all__ = [
    "BaseManager",
    "TagManager",
    "CategoryManager",
    "EntryManager",
    "EntryPatch",
    "UNSET",
]
