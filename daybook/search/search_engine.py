#!/usr/bin/env python3
"""
search_engine.py
----------------
Full-text search with structured filtering and calendar aggregates.

Combines the SQLite FTS5 index (see search_index.py) for text search
with ORM filters for tags, mood and date ranges. When FTS5 cannot answer
a query (nothing left after sanitizing, malformed expression, missing or
corrupt index) the engine falls back to a substring scan instead of
raising.

Query handling:
    "sunrise"           -> "sunrise"*            (prefix match)
    "sun walk"          -> "sun"* "walk"*        (implicit AND)
    "title:(x) ^y"      -> "title"* "x"* "y"*    (syntax characters removed)
    "***"               -> nothing to match      (substring fallback)

Usage:
    engine = SearchEngine(session, logger)
    entries = engine.search("sunrise")
    results = engine.search_with_snippets("sunrise")
    filtered = engine.search_with_filters("", SearchFilters(tag_ids=[tag.id], mood="good"))
    days = engine.get_dates_with_entries(2024, 11)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Set, Union

# --- Third party imports ---
from sqlalchemy import column, func, literal_column, or_, select, table
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session, joinedload, selectinload

# --- Local imports ---
from daybook.core.config import (
    DEFAULT_SEARCH_LIMIT,
    SNIPPET_CLOSE_MARK,
    SNIPPET_ELLIPSIS,
    SNIPPET_OPEN_MARK,
    SNIPPET_TOKENS,
)
from daybook.core.logging_manager import JournalLogger, safe_logger
from daybook.core.validators import DataValidator
from daybook.database.models import Entry, Mood, Tag, entry_tags
from daybook.utils.dates import local_day_bounds, local_month_bounds, storage_bound, to_local
from daybook.utils.text import generate_snippet

# Characters with meaning in the FTS5 query grammar
_FTS_SPECIAL = re.compile(r"[\"'(){}\[\]^~*:]")
_WHITESPACE = re.compile(r"\s+")

entries_fts = table("entries_fts", column("rowid"), column("rank"))
_ENTRY_ROWID = literal_column("entries.rowid")


@dataclass
class SearchFilters:
    """
    Structured predicates for search_with_filters().

    All supplied predicates must hold. tag_ids matches entries carrying
    at least one of the tags. Dates follow storage_bound(): plain dates
    are local days and end_date covers its whole day.
    """

    tag_ids: List[str] = field(default_factory=list)
    mood: Optional[Union[Mood, str]] = None
    start_date: Optional[Union[date, datetime, str]] = None
    end_date: Optional[Union[date, datetime, str]] = None

    def is_empty(self) -> bool:
        return not (self.tag_ids or self.mood or self.start_date or self.end_date)


@dataclass
class SearchResult:
    """Lightweight search hit used for result lists."""

    id: str
    title: str
    created_at: datetime
    snippet: str
    tags: List[Tag] = field(default_factory=list)
    mood: Optional[Mood] = None

    @classmethod
    def from_entry(cls, entry: Entry, snippet: str) -> "SearchResult":
        return cls(
            id=entry.id,
            title=entry.title,
            created_at=entry.created_at,
            snippet=snippet,
            tags=list(entry.tags),
            mood=entry.mood,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "created_at": self.created_at.isoformat(),
            "snippet": self.snippet,
            "tags": [tag.to_dict() for tag in self.tags],
            "mood": self.mood.value if self.mood else None,
        }


class SearchEngine:
    """Execute searches against the journal with FTS and filters."""

    def __init__(self, session: Session, logger: Optional[JournalLogger] = None):
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Query preparation
    # -------------------------------------------------------------------------

    @staticmethod
    def sanitize_query(query: Optional[str]) -> str:
        """Replace FTS5 syntax characters with spaces and collapse whitespace."""
        cleaned = _FTS_SPECIAL.sub(" ", query or "")
        return _WHITESPACE.sub(" ", cleaned).strip()

    @staticmethod
    def build_match_expression(query: Optional[str]) -> Optional[str]:
        """
        Build an FTS5 MATCH expression with a prefix match per token.

        Returns:
            Expression such as '"sun"* "walk"*', or None if nothing is left
        """
        tokens = SearchEngine.sanitize_query(query).split(" ")
        terms = [f'"{token}"*' for token in tokens if token]
        return " ".join(terms) if terms else None

    # -------------------------------------------------------------------------
    # Text search
    # -------------------------------------------------------------------------

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[Entry]:
        """
        Ranked full-text search over non-deleted entries.

        Args:
            query: Free text; every word is matched as a prefix
            limit: Maximum number of entries

        Returns:
            Entries with tags and category loaded, best match first.
            Empty for a blank query.
        """
        raw = (query or "").strip()
        if not raw:
            return []

        expression = self.build_match_expression(raw)
        if expression is not None:
            try:
                stmt = self._fts_entries(expression).limit(limit)
                return list(self.session.scalars(stmt))
            except DBAPIError as e:
                self._log_fallback(raw, e)
        return self._fallback_entries(raw, limit=limit)

    def search_with_snippets(
        self, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> List[SearchResult]:
        """
        Full-text search returning SearchResult records with highlighted snippets.

        Snippets come from FTS5 (matches wrapped in << >>). On fallback
        they are cut around the first occurrence of the raw query.
        """
        raw = (query or "").strip()
        if not raw:
            return []

        expression = self.build_match_expression(raw)
        if expression is not None:
            try:
                return self._fts_snippets(expression, limit)
            except DBAPIError as e:
                self._log_fallback(raw, e)

        return [
            SearchResult.from_entry(entry, generate_snippet(entry.content, raw))
            for entry in self._fallback_entries(raw, limit=limit)
        ]

    def search_with_filters(
        self,
        query: str,
        filters: Optional[SearchFilters] = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> List[Entry]:
        """
        Combine an optional text query with structured filters.

        Args:
            query: Free text; blank means structured filtering only
            filters: Tag/mood/date predicates (AND across kinds)
            limit: Maximum number of entries

        Returns:
            Entries ranked by relevance when a query is given,
            newest first otherwise
        """
        criteria = self._filter_criteria(filters or SearchFilters())
        raw = (query or "").strip()

        if not raw:
            stmt = self._hydrated().where(Entry.deleted_at.is_(None), *criteria)
            stmt = stmt.order_by(Entry.created_at.desc(), _ENTRY_ROWID.desc()).limit(limit)
            return list(self.session.scalars(stmt))

        expression = self.build_match_expression(raw)
        if expression is not None:
            try:
                stmt = self._fts_entries(expression).where(*criteria).limit(limit)
                return list(self.session.scalars(stmt))
            except DBAPIError as e:
                self._log_fallback(raw, e)
        return self._fallback_entries(raw, *criteria, limit=limit)

    # -------------------------------------------------------------------------
    # Calendar aggregates
    # -------------------------------------------------------------------------

    def get_entries_by_date(self, day: Union[date, datetime, str]) -> List[Entry]:
        """Non-deleted entries written on a local calendar day, newest first."""
        start, end = local_day_bounds(day)
        stmt = (
            self._hydrated()
            .where(
                Entry.deleted_at.is_(None),
                Entry.created_at >= start,
                Entry.created_at < end,
            )
            .order_by(Entry.created_at.desc(), _ENTRY_ROWID.desc())
        )
        return list(self.session.scalars(stmt))

    def get_dates_with_entries(self, year: int, month: int) -> Set[int]:
        """
        Days of a month (1-12) that have at least one non-deleted entry.

        Returns:
            Set of local day-of-month numbers
        """
        start, end = local_month_bounds(year, month)
        stmt = select(Entry.created_at).where(
            Entry.deleted_at.is_(None),
            Entry.created_at >= start,
            Entry.created_at < end,
        )
        return {to_local(created_at).day for created_at in self.session.scalars(stmt)}

    def get_moods_by_date(self, year: int, month: int) -> Dict[int, List[Mood]]:
        """
        Moods recorded per local day of a month, in creation order.

        Entries without a mood contribute nothing. Feed a day's list to
        dominant_mood() to pick the mood shown for that day.
        """
        start, end = local_month_bounds(year, month)
        stmt = (
            select(Entry.created_at, Entry.mood)
            .where(
                Entry.deleted_at.is_(None),
                Entry.mood.is_not(None),
                Entry.created_at >= start,
                Entry.created_at < end,
            )
            .order_by(Entry.created_at.asc(), _ENTRY_ROWID.asc())
        )
        moods: Dict[int, List[Mood]] = OrderedDict()
        for created_at, mood in self.session.execute(stmt):
            moods.setdefault(to_local(created_at).day, []).append(mood)
        return moods

    # -------------------------------------------------------------------------
    # Statement builders
    # -------------------------------------------------------------------------

    @staticmethod
    def _hydrated():
        return select(Entry).options(selectinload(Entry.tags), joinedload(Entry.category))

    def _fts_entries(self, expression: str):
        return (
            self._hydrated()
            .join(entries_fts, entries_fts.c.rowid == _ENTRY_ROWID)
            .where(literal_column("entries_fts").match(expression))
            .where(Entry.deleted_at.is_(None))
            .order_by(entries_fts.c.rank, Entry.created_at.desc())
        )

    def _fts_snippets(self, expression: str, limit: int) -> List[SearchResult]:
        snippet = func.snippet(
            literal_column("entries_fts"),
            1,
            SNIPPET_OPEN_MARK,
            SNIPPET_CLOSE_MARK,
            SNIPPET_ELLIPSIS,
            SNIPPET_TOKENS,
        )
        stmt = (
            select(Entry, snippet.label("snippet"))
            .options(selectinload(Entry.tags))
            .join(entries_fts, entries_fts.c.rowid == _ENTRY_ROWID)
            .where(literal_column("entries_fts").match(expression))
            .where(Entry.deleted_at.is_(None))
            .order_by(entries_fts.c.rank, Entry.created_at.desc())
            .limit(limit)
        )
        return [
            SearchResult.from_entry(entry, text or "")
            for entry, text in self.session.execute(stmt)
        ]

    def _fallback_entries(self, raw: str, *criteria, limit: int) -> List[Entry]:
        """Case-insensitive substring scan over title and content."""
        needle = raw.lower()
        stmt = (
            self._hydrated()
            .where(
                Entry.deleted_at.is_(None),
                or_(
                    func.lower(Entry.title).contains(needle, autoescape=True),
                    func.lower(Entry.content).contains(needle, autoescape=True),
                ),
                *criteria,
            )
            .order_by(Entry.created_at.desc(), _ENTRY_ROWID.desc())
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    @staticmethod
    def _filter_criteria(filters: SearchFilters) -> list:
        criteria = []
        if filters.tag_ids:
            tagged = select(entry_tags.c.entry_id).where(
                entry_tags.c.tag_id.in_(list(filters.tag_ids))
            )
            criteria.append(Entry.id.in_(tagged))
        if filters.mood:
            criteria.append(Entry.mood == DataValidator.normalize_mood(filters.mood))
        start = storage_bound(filters.start_date)
        if start is not None:
            criteria.append(Entry.created_at >= start)
        end = storage_bound(filters.end_date, end_of_day=True)
        if end is not None:
            criteria.append(Entry.created_at <= end)
        return criteria

    def _log_fallback(self, query: str, error: Exception) -> None:
        safe_logger(self.logger).log_warning(
            "Full-text search failed, using substring fallback",
            {"query": query, "error": str(getattr(error, "orig", error))},
        )
