#!/usr/bin/env python3
"""
tag_manager.py
--------------------
Manages Tag entities and their links to journal entries.

Tag names are unique case-insensitively: every name is trimmed and
lowercased before it is compared or stored.

Key Features:
    - CRUD operations for tags with duplicate-name checks
    - Link/unlink tags to/from entries
    - Full replacement of an entry's tag set
    - Usage counts over non-deleted entries

Usage:
    tag_mgr = TagManager(session, logger)

    tag = tag_mgr.create({"name": "Focus", "color": "#0D9488"})
    tag_mgr.add_tag_to_entry(entry.id, tag.id)
    tag_mgr.set_tags_for_entry(entry.id, [])
"""
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func, select

from daybook.core.config import DEFAULT_TAG_COLOR
from daybook.core.exceptions import DuplicateError, NotFoundError, ValidationError
from daybook.core.validators import DataValidator
from daybook.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from daybook.database.models import Entry, Tag, entry_tags
from .base_manager import BaseManager


class TagManager(BaseManager):
    """
    Manages Tag table operations and entry associations.

    Tags are simple labels with a display color. Deleting a tag removes
    its associations and leaves the entries alone.
    """

    entity_label = "Tag"

    # -------------------------------------------------------------------------
    # Core CRUD Operations
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("get_all_tags")
    def get_all(self) -> List[Tag]:
        """Retrieve all tags, alphabetically."""
        return list(self.session.scalars(select(Tag).order_by(Tag.name)))

    @handle_db_errors
    @log_database_operation("get_tag_by_id")
    def get_by_id(self, tag_id: str) -> Optional[Tag]:
        """
        Retrieve a tag by ID.

        Args:
            tag_id: The tag ID

        Returns:
            Tag object if found, None otherwise
        """
        return self.session.get(Tag, tag_id)

    @handle_db_errors
    @log_database_operation("get_tag_by_name")
    def get_by_name(self, name: str) -> Optional[Tag]:
        """
        Retrieve a tag by name, ignoring case and surrounding whitespace.

        Args:
            name: The tag text

        Returns:
            Tag object if found, None otherwise
        """
        normalized = DataValidator.normalize_tag_name(name)
        if not normalized:
            return None
        return self.session.scalars(
            select(Tag).where(func.lower(Tag.name) == normalized)
        ).first()

    @handle_db_errors
    @log_database_operation("create_tag")
    @validate_metadata(["name"])
    def create(self, metadata: Dict[str, Any]) -> Tag:
        """
        Create a new tag.

        Args:
            metadata: Dictionary with keys:
                - name: The tag text (required)
                - color: Display color (optional)

        Returns:
            Created Tag object

        Raises:
            ValidationError: If name is missing or empty
            DuplicateError: If a tag with the same normalized name exists
        """
        name = self._normalized_name(metadata["name"])
        self._ensure_unique(name)

        tag = Tag(name=name, color=metadata.get("color") or DEFAULT_TAG_COLOR)
        self.session.add(tag)
        self.session.flush()

        if self.logger:
            self.logger.log_debug(f"Created tag: {name}", {"tag_id": tag.id})

        return tag

    @handle_db_errors
    @log_database_operation("update_tag")
    def update(self, tag_id: str, metadata: Dict[str, Any]) -> Tag:
        """
        Rename or recolor a tag.

        Args:
            tag_id: The tag ID
            metadata: Dictionary with optional keys 'name' and 'color'

        Returns:
            Updated Tag object

        Raises:
            NotFoundError: If the tag does not exist
            ValidationError: If the new name is empty
            DuplicateError: If another tag already has the new name
        """
        tag = self._require(Tag, tag_id)

        if "name" in metadata:
            name = self._normalized_name(metadata["name"])
            self._ensure_unique(name, exclude_id=tag.id)
            tag.name = name

        self._update_scalar_fields(tag, metadata, [("color", DataValidator.normalize_string)])
        self.session.flush()
        return tag

    @handle_db_errors
    @log_database_operation("delete_tag")
    def delete(self, tag_id: str) -> None:
        """
        Delete a tag and all of its entry associations.

        Raises:
            NotFoundError: If the tag does not exist
        """
        tag = self._require(Tag, tag_id)

        if self.logger:
            self.logger.log_debug(f"Deleting tag: {tag.name}", {"tag_id": tag.id})

        for entry in list(tag.entries):
            entry.tags.remove(tag)
        self.session.delete(tag)
        self.session.flush()

    # -------------------------------------------------------------------------
    # Relationship Management
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("get_entry_count_for_tag")
    def get_entry_count_for_tag(self, tag_id: str) -> int:
        """Count non-deleted entries carrying this tag."""
        stmt = (
            select(func.count())
            .select_from(entry_tags)
            .join(Entry, Entry.id == entry_tags.c.entry_id)
            .where(entry_tags.c.tag_id == tag_id, Entry.deleted_at.is_(None))
        )
        return self.session.scalar(stmt) or 0

    @handle_db_errors
    @log_database_operation("get_tags_for_entry")
    def get_tags_for_entry(self, entry_id: str) -> List[Tag]:
        """Tags attached to an entry, alphabetically."""
        stmt = (
            select(Tag)
            .join(entry_tags, entry_tags.c.tag_id == Tag.id)
            .where(entry_tags.c.entry_id == entry_id)
            .order_by(Tag.name)
        )
        return list(self.session.scalars(stmt))

    @handle_db_errors
    @log_database_operation("set_tags_for_entry")
    def set_tags_for_entry(self, entry_id: str, tag_ids: Iterable[str]) -> List[Tag]:
        """
        Replace the whole tag set of an entry.

        Args:
            entry_id: Entry to retag (trash included)
            tag_ids: New tag set; duplicates are ignored, [] clears all tags

        Returns:
            The entry's tags after the replacement

        Raises:
            NotFoundError: If the entry or one of the tags does not exist
        """
        entry = self._require_entry(entry_id)
        tags = self._resolve_tags(tag_ids)

        entry.tags.clear()
        self.session.flush()
        entry.tags.extend(tags)
        self.session.flush()

        if self.logger:
            self.logger.log_debug(
                "Replaced entry tags",
                {"entry_id": entry_id, "tag_count": len(tags)},
            )
        return list(entry.tags)

    @handle_db_errors
    @log_database_operation("add_tag_to_entry")
    def add_tag_to_entry(self, entry_id: str, tag_id: str) -> None:
        """
        Attach a tag to an entry. Attaching twice is a no-op.

        Raises:
            NotFoundError: If the entry or the tag does not exist
        """
        entry = self._require_entry(entry_id)
        tag = self._require(Tag, tag_id)

        if tag not in entry.tags:
            entry.tags.append(tag)
            self.session.flush()

    @handle_db_errors
    @log_database_operation("remove_tag_from_entry")
    def remove_tag_from_entry(self, entry_id: str, tag_id: str) -> bool:
        """
        Detach a tag from an entry.

        Returns:
            True if the tag was attached, False otherwise

        Raises:
            NotFoundError: If the entry does not exist
        """
        entry = self._require_entry(entry_id)
        tag = self.session.get(Tag, tag_id)
        if tag is None or tag not in entry.tags:
            return False

        entry.tags.remove(tag)
        self.session.flush()
        return True

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _normalized_name(raw: Any) -> str:
        name = DataValidator.normalize_tag_name(raw)
        if not name:
            raise ValidationError("Tag name cannot be empty")
        return name

    def _ensure_unique(self, name: str, exclude_id: Optional[str] = None) -> None:
        existing = self.get_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateError(f"A tag with this name already exists: {name}")

    def _require_entry(self, entry_id: str) -> Entry:
        entry = self.session.get(Entry, entry_id)
        if entry is None:
            raise NotFoundError(f"Entry not found: {entry_id}")
        return entry

    def _resolve_tags(self, tag_ids: Iterable[str]) -> List[Tag]:
        """Load tags by id, dropping repeated ids and keeping first-seen order."""
        tags: List[Tag] = []
        seen = set()
        for tag_id in tag_ids or []:
            if tag_id in seen:
                continue
            seen.add(tag_id)
            tags.append(self._require(Tag, tag_id))
        return tags
