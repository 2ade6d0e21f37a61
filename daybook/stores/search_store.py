#!/usr/bin/env python3
"""
search_store.py
---------------
Search state: the current query, filters, results and recent searches.

run() picks the search flavour:
    - no filters: FTS search with highlighted snippets
    - filters set: search_with_filters, results built from entry previews
    - blank query and no filters: results cleared

Queries shorter than MIN_SEARCH_LENGTH only run when a filter is set.
Recent searches are per store, most recent first, without
case-insensitive duplicates.

Usage:
    store = SearchStore(db)
    store.set_query("sunrise")
    store.run()
    for result in store.results:
        print(result.title, result.snippet)
"""
from __future__ import annotations

from dataclasses import replace
from typing import List

from daybook.core.config import (
    DEFAULT_SEARCH_LIMIT,
    FALLBACK_PREVIEW_CHARS,
    MAX_RECENT_SEARCHES,
    MIN_SEARCH_LENGTH,
)
from daybook.core.logging_manager import safe_logger
from daybook.database.models import Entry
from daybook.search.search_engine import SearchFilters, SearchResult
from daybook.utils.text import truncate
from .base_store import STORE_ERRORS, BaseStore


class SearchStore(BaseStore):
    """
    Attributes:
        query: Current search text
        filters: Current SearchFilters
        results: SearchResult list for display
        entries: Full entries behind the results
        recent_searches: Up to MAX_RECENT_SEARCHES past queries
    """

    def __init__(self, db, logger=None, limit: int = DEFAULT_SEARCH_LIMIT):
        super().__init__(db, logger)
        self.limit = limit
        self.query = ""
        self.filters = SearchFilters()
        self.results: List[SearchResult] = []
        self.entries: List[Entry] = []
        self.recent_searches: List[str] = []

    # ---- State ----
    def set_query(self, query: str) -> None:
        self.query = query or ""

    def set_filters(self, filters: SearchFilters) -> None:
        self.filters = replace(filters, tag_ids=list(filters.tag_ids))

    def clear_filters(self) -> None:
        self.filters = SearchFilters()

    @property
    def has_active_filters(self) -> bool:
        return not self.filters.is_empty()

    # ---- Recent searches ----
    def add_to_recent_searches(self, query: str) -> None:
        trimmed = (query or "").strip()
        if not trimmed:
            return
        others = [s for s in self.recent_searches if s.lower() != trimmed.lower()]
        self.recent_searches = [trimmed, *others][:MAX_RECENT_SEARCHES]

    def clear_recent_searches(self) -> None:
        self.recent_searches = []

    # ---- Searching ----
    def refresh(self) -> None:
        self.run()

    def run(self) -> List[SearchResult]:
        """
        Execute the current query and filters.

        Failures are kept in self.error; previous results are cleared.

        Returns:
            The new results
        """
        raw = self.query.strip()
        filtered = self.has_active_filters

        if not filtered and len(raw) < MIN_SEARCH_LENGTH:
            self.results, self.entries = [], []
            return self.results

        self.is_loading = True
        self.error = None
        try:
            with self.db.session_scope():
                if filtered:
                    self.entries = self.db.search.search_with_filters(
                        raw, self.filters, limit=self.limit
                    )
                    self.results = [
                        SearchResult.from_entry(
                            entry, truncate(entry.content, FALLBACK_PREVIEW_CHARS)
                        )
                        for entry in self.entries
                    ]
                else:
                    self.results = self.db.search.search_with_snippets(raw, limit=self.limit)
                    self.entries = self.db.search.search(raw, limit=self.limit)
        except STORE_ERRORS as e:
            self.error = str(e) or "Search failed"
            self.results, self.entries = [], []
            safe_logger(self.logger).log_error(e, {"operation": "search", "query": raw})
            return self.results
        finally:
            self.is_loading = False

        if len(raw) >= MIN_SEARCH_LENGTH:
            self.add_to_recent_searches(raw)
        return self.results
