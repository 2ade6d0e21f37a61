#!/usr/bin/env python3
"""
entry_manager.py
--------------------
Manager for Entry CRUD operations and the trash lifecycle.

Entry is the central entity: it carries a mood, at most one category
and any number of tags. Every mutating call records itself in the sync
bookkeeping (updated_at, sync_status, sync_version).

Key Features:
    - Entry creation with derived titles and tag attachment
    - Partial updates through EntryPatch (only supplied fields change)
    - Soft delete, restore, permanent delete and retention purge
    - Filtered listings (date range, tag, mood, category), newest first

Usage:
    entry_mgr = EntryManager(session, logger)
    entry = entry_mgr.create({"title": "", "content": "Had coffee with Sam"})
    entry_mgr.update(entry.id, EntryPatch(mood="good", tag_ids=[]))
    entry_mgr.soft_delete(entry.id)
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import literal_column, select
from sqlalchemy.orm import Session, joinedload, selectinload

from daybook.core.config import TRASH_RETENTION_DAYS
from daybook.core.logging_manager import JournalLogger
from daybook.core.validators import DataValidator
from daybook.database.decorators import handle_db_errors, log_database_operation
from daybook.database.models import Category, Entry, Mood, SyncStatus, entry_tags
from daybook.utils.dates import storage_bound, utc_now
from daybook.utils.text import generate_title_from_content
from .base_manager import BaseManager
from .tag_manager import TagManager


class _Unset:
    """Marker for patch fields that were not supplied."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass
class EntryPatch:
    """
    Partial update for an entry.

    Fields left as UNSET are not touched. Passing None to mood or
    category_id clears the field; passing [] to tag_ids removes all tags.
    """

    title: Any = UNSET
    content: Any = UNSET
    mood: Any = UNSET
    category_id: Any = UNSET
    tag_ids: Any = UNSET

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EntryPatch":
        """Build a patch from the keys present in a dictionary."""
        allowed = {"title", "content", "mood", "category_id", "tag_ids"}
        return cls(**{k: v for k, v in data.items() if k in allowed})

    def is_empty(self) -> bool:
        return all(
            value is UNSET
            for value in (self.title, self.content, self.mood, self.category_id, self.tag_ids)
        )


DateLike = Union[str, date, datetime]


class EntryManager(BaseManager):
    """
    Manager for Entry CRUD operations and the soft-delete lifecycle.

    Normal listings exclude entries in the trash. get_by_id() and
    get_deleted() are the only ways to see them.
    """

    entity_label = "Entry"

    def __init__(self, session: Session, logger: Optional[JournalLogger] = None):
        """
        Initialize EntryManager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        super().__init__(session, logger)
        self._tag_mgr = TagManager(session, logger)

    # -------------------------------------------------------------------------
    # Query helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _hydrated():
        """Base statement loading tags and category with each entry."""
        return select(Entry).options(
            selectinload(Entry.tags), joinedload(Entry.category)
        )

    @staticmethod
    def _newest_first(stmt):
        return stmt.order_by(
            Entry.created_at.desc(), literal_column("entries.rowid").desc()
        )

    def _active(self, *criteria) -> List[Entry]:
        stmt = self._hydrated().where(Entry.deleted_at.is_(None), *criteria)
        return list(self.session.scalars(self._newest_first(stmt)))

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("get_all_entries")
    def get_all(self) -> List[Entry]:
        """All non-deleted entries, newest first."""
        return self._active()

    @handle_db_errors
    @log_database_operation("get_entry_by_id")
    def get_by_id(self, entry_id: str) -> Optional[Entry]:
        """
        Retrieve a single entry, in the trash or not.

        Args:
            entry_id: The entry ID

        Returns:
            Entry if found, None otherwise
        """
        stmt = self._hydrated().where(Entry.id == entry_id)
        return self.session.scalars(stmt).first()

    @handle_db_errors
    @log_database_operation("get_deleted_entries")
    def get_deleted(self) -> List[Entry]:
        """Entries in the trash, most recently deleted first."""
        stmt = (
            self._hydrated()
            .where(Entry.deleted_at.is_not(None))
            .order_by(Entry.deleted_at.desc(), literal_column("entries.rowid").desc())
        )
        return list(self.session.scalars(stmt))

    @handle_db_errors
    @log_database_operation("get_entries_by_date_range")
    def get_by_date_range(self, start: DateLike, end: DateLike) -> List[Entry]:
        """
        Non-deleted entries created between two bounds, inclusive.

        Args:
            start: Lower bound. Dates are local days; naive datetimes are UTC.
            end: Upper bound. A date covers that whole local day.

        Returns:
            Matching entries, newest first
        """
        lower = storage_bound(start)
        upper = storage_bound(end, end_of_day=True)
        return self._active(Entry.created_at >= lower, Entry.created_at <= upper)

    @handle_db_errors
    @log_database_operation("get_entries_by_tag")
    def get_by_tag(self, tag_id: str) -> List[Entry]:
        """Non-deleted entries carrying a tag, newest first."""
        tagged = select(entry_tags.c.entry_id).where(entry_tags.c.tag_id == tag_id)
        return self._active(Entry.id.in_(tagged))

    @handle_db_errors
    @log_database_operation("get_entries_by_mood")
    def get_by_mood(self, mood: Union[str, Mood]) -> List[Entry]:
        """Non-deleted entries with the given mood, newest first."""
        return self._active(Entry.mood == DataValidator.normalize_mood(mood))

    @handle_db_errors
    @log_database_operation("get_entries_by_category")
    def get_by_category(self, category_id: str) -> List[Entry]:
        """Non-deleted entries in a category, newest first."""
        return self._active(Entry.category_id == category_id)

    @handle_db_errors
    @log_database_operation("count_entries")
    def count(self, include_deleted: bool = False) -> int:
        return self._count(Entry, include_deleted=include_deleted)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("create_entry")
    def create(self, metadata: Dict[str, Any]) -> Entry:
        """
        Create a new journal entry.

        Args:
            metadata: Dictionary with keys:
                - title: Entry title (blank titles are derived from content)
                - content: Entry body (optional, defaults to "")
                - mood: Mood or mood string (optional)
                - category_id: Category ID (optional)
                - tag_ids: Tag IDs to attach (optional, duplicates ignored)

        Returns:
            The created entry with its tags and category loaded

        Raises:
            ValidationError: If the mood is not recognised
            NotFoundError: If the category or a tag does not exist
        """
        content = metadata.get("content") or ""
        title = DataValidator.normalize_string(metadata.get("title"))
        if not title:
            title = generate_title_from_content(content)

        category_id = DataValidator.normalize_string(metadata.get("category_id"))
        if category_id is not None:
            self._require(Category, category_id)

        now = utc_now()
        entry = Entry(
            title=title,
            content=content,
            mood=DataValidator.normalize_mood(metadata.get("mood")),
            category_id=category_id,
            created_at=now,
            updated_at=now,
            sync_status=SyncStatus.PENDING,
            sync_version=0,
        )
        self.session.add(entry)
        self.session.flush()

        tag_ids = metadata.get("tag_ids") or []
        if tag_ids:
            self._tag_mgr.set_tags_for_entry(entry.id, tag_ids)

        if self.logger:
            self.logger.log_debug(
                f"Created entry: {entry.title}",
                {"entry_id": entry.id, "tag_count": len(tag_ids)},
            )

        return self._reload(entry.id)

    @handle_db_errors
    @log_database_operation("update_entry")
    def update(self, entry_id: str, patch: Union[EntryPatch, Dict[str, Any]]) -> Entry:
        """
        Apply a partial update to an entry.

        Entries in the trash can be updated too. Every call bumps
        updated_at and sync_version and resets sync_status to pending,
        even when the patch is empty.

        Args:
            entry_id: The entry ID
            patch: EntryPatch (or a dict of the same keys)

        Returns:
            The updated entry with its tags and category loaded

        Raises:
            NotFoundError: If the entry, the category or a tag does not exist
            ValidationError: If the mood is not recognised
        """
        if isinstance(patch, dict):
            patch = EntryPatch.from_dict(patch)

        entry = self._require(Entry, entry_id)

        if patch.content is not UNSET:
            entry.content = patch.content or ""
        if patch.title is not UNSET:
            title = DataValidator.normalize_string(patch.title)
            entry.title = title or generate_title_from_content(entry.content)
        if patch.mood is not UNSET:
            entry.mood = DataValidator.normalize_mood(patch.mood)
        if patch.category_id is not UNSET:
            category_id = DataValidator.normalize_string(patch.category_id)
            if category_id is not None:
                self._require(Category, category_id)
            entry.category_id = category_id
        if patch.tag_ids is not UNSET:
            self._tag_mgr.set_tags_for_entry(entry.id, patch.tag_ids or [])

        entry.touch()
        self.session.flush()
        return self._reload(entry.id)

    @handle_db_errors
    @log_database_operation("soft_delete_entry")
    def soft_delete(self, entry_id: str) -> Entry:
        """
        Move an entry to the trash.

        Raises:
            NotFoundError: If the entry does not exist
        """
        entry = self._require(Entry, entry_id)
        entry.soft_delete()
        entry.touch()
        self.session.flush()
        return self._reload(entry.id)

    @handle_db_errors
    @log_database_operation("restore_entry")
    def restore(self, entry_id: str) -> Entry:
        """
        Take an entry out of the trash.

        Raises:
            NotFoundError: If the entry does not exist
        """
        entry = self._require(Entry, entry_id)
        entry.restore()
        entry.touch()
        self.session.flush()
        return self._reload(entry.id)

    @handle_db_errors
    @log_database_operation("permanent_delete_entry")
    def permanent_delete(self, entry_id: str) -> None:
        """
        Remove an entry and its tag links for good.

        Raises:
            NotFoundError: If the entry does not exist
        """
        entry = self._require(Entry, entry_id)
        entry.tags.clear()
        self.session.delete(entry)
        self.session.flush()

        if self.logger:
            self.logger.log_debug("Permanently deleted entry", {"entry_id": entry_id})

    @handle_db_errors
    @log_database_operation("purge_old_deleted_entries")
    def purge_old_deleted(self, days: int = TRASH_RETENTION_DAYS) -> int:
        """
        Permanently remove entries that have been in the trash too long.

        Args:
            days: Retention window; entries deleted before now - days go

        Returns:
            Number of entries removed
        """
        cutoff = utc_now() - timedelta(days=days)
        stmt = select(Entry).where(
            Entry.deleted_at.is_not(None), Entry.deleted_at < cutoff
        )
        expired = list(self.session.scalars(stmt))

        for entry in expired:
            entry.tags.clear()
            self.session.delete(entry)
        self.session.flush()

        if self.logger:
            self.logger.log_info(
                "Purged old deleted entries",
                {"count": len(expired), "retention_days": days},
            )
        return len(expired)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _reload(self, entry_id: str) -> Entry:
        """Re-select an entry with its relationships populated."""
        stmt = (
            self._hydrated()
            .where(Entry.id == entry_id)
            .execution_options(populate_existing=True)
        )
        return self.session.scalars(stmt).one()
