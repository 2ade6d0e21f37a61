#!/usr/bin/env python3
"""
category_store.py
-----------------
Cached category list in display order.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from daybook.database.models import Category
from .base_store import BaseStore, store_mutation


class CategoryStore(BaseStore):
    def __init__(self, db, logger=None):
        super().__init__(db, logger)
        self.categories: List[Category] = []

    def load(self) -> List[Category]:
        categories = self._fetch("categories", lambda: self.db.categories.get_all())
        if categories is not None:
            self.categories = categories
        return self.categories

    def refresh(self) -> None:
        self.load()

    @store_mutation("create_category")
    def create(self, metadata: Dict[str, Any]) -> Category:
        return self.db.categories.create(metadata)

    @store_mutation("update_category")
    def update(self, category_id: str, metadata: Dict[str, Any]) -> Category:
        return self.db.categories.update(category_id, metadata)

    @store_mutation("delete_category")
    def delete(self, category_id: str) -> None:
        self.db.categories.delete(category_id)

    @store_mutation("reorder_categories")
    def reorder(self, ordered_ids: Sequence[str]) -> None:
        self.db.categories.reorder(ordered_ids)

    def get_cached(self, category_id: str) -> Optional[Category]:
        return next((c for c in self.categories if c.id == category_id), None)
