#!/usr/bin/env python3
"""
entry_store.py
--------------
Cached entries, trash and list filters.

Usage:
    store = EntryStore(db)
    store.load()
    entry = store.create({"title": "", "content": "Rain all day"})
    store.select_mood("okay")
    visible = store.filtered_entries
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from daybook.core.config import TRASH_RETENTION_DAYS
from daybook.core.validators import DataValidator
from daybook.database.managers import EntryPatch
from daybook.database.models import Entry, Mood
from .base_store import BaseStore, store_mutation


class EntryStore(BaseStore):
    """
    Entry cache with selectable tag/mood/category filters.

    Attributes:
        entries: Non-deleted entries, newest first
        deleted_entries: Entries in the trash, most recently deleted first
        selected_tag_id, selected_mood, selected_category_id: Active filters
    """

    def __init__(self, db, logger=None):
        super().__init__(db, logger)
        self.entries: List[Entry] = []
        self.deleted_entries: List[Entry] = []
        self.selected_tag_id: Optional[str] = None
        self.selected_mood: Optional[Mood] = None
        self.selected_category_id: Optional[str] = None

    # ---- Loading ----
    def load(self) -> List[Entry]:
        """Refetch non-deleted entries."""
        entries = self._fetch("entries", lambda: self.db.entries.get_all())
        if entries is not None:
            self.entries = entries
        return self.entries

    def load_deleted(self) -> List[Entry]:
        """Refetch the trash."""
        deleted = self._fetch("deleted_entries", lambda: self.db.entries.get_deleted())
        if deleted is not None:
            self.deleted_entries = deleted
        return self.deleted_entries

    def refresh(self) -> None:
        self.load()
        self.load_deleted()

    # ---- Mutations ----
    @store_mutation("create_entry")
    def create(self, metadata: Dict[str, Any]) -> Entry:
        return self.db.entries.create(metadata)

    @store_mutation("update_entry")
    def update(self, entry_id: str, patch: Union[EntryPatch, Dict[str, Any]]) -> Entry:
        return self.db.entries.update(entry_id, patch)

    @store_mutation("delete_entry")
    def delete(self, entry_id: str) -> Entry:
        """Move an entry to the trash."""
        return self.db.entries.soft_delete(entry_id)

    @store_mutation("restore_entry")
    def restore(self, entry_id: str) -> Entry:
        return self.db.entries.restore(entry_id)

    @store_mutation("permanently_delete_entry")
    def permanently_delete(self, entry_id: str) -> None:
        self.db.entries.permanent_delete(entry_id)

    @store_mutation("purge_old_deleted")
    def purge_old_deleted(self, days: int = TRASH_RETENTION_DAYS) -> int:
        return self.db.entries.purge_old_deleted(days=days)

    # ---- Cache access ----
    def get_cached(self, entry_id: str) -> Optional[Entry]:
        """Find an entry in the cache (trash included) without querying."""
        for entry in (*self.entries, *self.deleted_entries):
            if entry.id == entry_id:
                return entry
        return None

    # ---- Filters ----
    def select_tag(self, tag_id: Optional[str]) -> None:
        self.selected_tag_id = tag_id

    def select_mood(self, mood: Union[Mood, str, None]) -> None:
        self.selected_mood = DataValidator.normalize_mood(mood)

    def select_category(self, category_id: Optional[str]) -> None:
        self.selected_category_id = category_id

    def clear_filters(self) -> None:
        self.selected_tag_id = None
        self.selected_mood = None
        self.selected_category_id = None

    @property
    def filtered_entries(self) -> List[Entry]:
        """Cached entries matching every selected filter."""
        return [
            entry
            for entry in self.entries
            if (self.selected_tag_id is None or self.selected_tag_id in entry.tag_ids)
            and (self.selected_mood is None or entry.mood == self.selected_mood)
            and (
                self.selected_category_id is None
                or entry.category_id == self.selected_category_id
            )
        ]
