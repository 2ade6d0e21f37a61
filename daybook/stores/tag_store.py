#!/usr/bin/env python3
"""
tag_store.py
------------
Cached tag list and entry-tag link actions.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from daybook.database.models import Tag
from .base_store import BaseStore, store_mutation


class TagStore(BaseStore):
    """Tag cache, alphabetical."""

    def __init__(self, db, logger=None):
        super().__init__(db, logger)
        self.tags: List[Tag] = []

    def load(self) -> List[Tag]:
        tags = self._fetch("tags", lambda: self.db.tags.get_all())
        if tags is not None:
            self.tags = tags
        return self.tags

    def refresh(self) -> None:
        self.load()

    @store_mutation("create_tag")
    def create(self, metadata: Dict[str, Any]) -> Tag:
        return self.db.tags.create(metadata)

    @store_mutation("update_tag")
    def update(self, tag_id: str, metadata: Dict[str, Any]) -> Tag:
        return self.db.tags.update(tag_id, metadata)

    @store_mutation("delete_tag")
    def delete(self, tag_id: str) -> None:
        self.db.tags.delete(tag_id)

    def get_cached(self, tag_id: str) -> Optional[Tag]:
        return next((tag for tag in self.tags if tag.id == tag_id), None)

    @store_mutation("add_tag_to_entry")
    def add_tag_to_entry(self, entry_id: str, tag_id: str) -> None:
        self.db.tags.add_tag_to_entry(entry_id, tag_id)

    @store_mutation("remove_tag_from_entry")
    def remove_tag_from_entry(self, entry_id: str, tag_id: str) -> bool:
        return self.db.tags.remove_tag_from_entry(entry_id, tag_id)

    @store_mutation("set_tags_for_entry")
    def set_tags_for_entry(self, entry_id: str, tag_ids: Iterable[str]) -> List[Tag]:
        return self.db.tags.set_tags_for_entry(entry_id, list(tag_ids))
