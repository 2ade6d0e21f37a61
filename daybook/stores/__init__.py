"""
Application stores: cached query results over a JournalDB.

Every store is built with an initialized JournalDB (no module-level
singletons). load() always refetches; mutations reload after success.

Usage:
    from daybook.stores import EntryStore

    entries = EntryStore(db)
    entries.load()
"""
from .base_store import BaseStore, store_mutation
from .category_store import CategoryStore
from .entry_store import EntryStore
from .search_store import SearchStore
from .tag_store import TagStore

__all__ = [
    "BaseStore",
    "store_mutation",
    "CategoryStore",
    "EntryStore",
    "SearchStore",
    "TagStore",
]
