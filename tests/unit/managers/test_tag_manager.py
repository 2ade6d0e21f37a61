"""
test_tag_manager.py
-------------------
Unit tests for TagManager CRUD and entry-tag links.
"""
import pytest

from daybook.core.config import DEFAULT_TAG_COLOR
from daybook.core.exceptions import DuplicateError, NotFoundError, ValidationError


class TestTagCreate:
    """Tests for TagManager.create()."""

    def test_name_normalized(self, tag_manager):
        """Names are trimmed and lowercased; color defaults."""
        tag = tag_manager.create({"name": "  Focus "})
        assert tag.name == "focus"
        assert tag.color == DEFAULT_TAG_COLOR

    def test_duplicate_case_insensitive(self, tag_manager):
        """'Focus' cannot be created after 'focus'."""
        tag_manager.create({"name": "focus"})
        with pytest.raises(DuplicateError, match="already exists"):
            tag_manager.create({"name": "Focus"})

    def test_empty_name_rejected(self, tag_manager):
        """Blank names raise ValidationError."""
        with pytest.raises(ValidationError):
            tag_manager.create({"name": "   "})
        with pytest.raises(ValidationError):
            tag_manager.create({"color": "#fff"})


class TestTagQueries:
    """Tests for tag lookups."""

    def test_get_all_alphabetical(self, tag_manager):
        """Tags are listed by name."""
        for name in ("zen", "art", "music"):
            tag_manager.create({"name": name})
        assert [t.name for t in tag_manager.get_all()] == ["art", "music", "zen"]

    def test_get_by_name_case_insensitive(self, tag_manager):
        """Lookups by name ignore case and whitespace."""
        tag = tag_manager.create({"name": "travel"})
        assert tag_manager.get_by_name(" TRAVEL ").id == tag.id
        assert tag_manager.get_by_name("") is None
        assert tag_manager.get_by_name("unknown") is None

    def test_get_by_id(self, tag_manager):
        """get_by_id returns None for unknown ids."""
        tag = tag_manager.create({"name": "x"})
        assert tag_manager.get_by_id(tag.id).name == "x"
        assert tag_manager.get_by_id("missing") is None


class TestTagUpdateDelete:
    """Tests for TagManager.update() and delete()."""

    def test_rename(self, tag_manager):
        """Renaming normalizes the new name."""
        tag = tag_manager.create({"name": "old"})
        assert tag_manager.update(tag.id, {"name": " New "}).name == "new"

    def test_rename_to_own_name(self, tag_manager):
        """Renaming a tag to its own name (other case) is allowed."""
        tag = tag_manager.create({"name": "same"})
        assert tag_manager.update(tag.id, {"name": "SAME"}).name == "same"

    def test_rename_collision(self, tag_manager):
        """Renaming onto another tag's name fails."""
        tag_manager.create({"name": "taken"})
        tag = tag_manager.create({"name": "free"})
        with pytest.raises(DuplicateError):
            tag_manager.update(tag.id, {"name": "Taken"})

    def test_recolor(self, tag_manager):
        """Color alone can change."""
        tag = tag_manager.create({"name": "c"})
        assert tag_manager.update(tag.id, {"color": "#000000"}).color == "#000000"

    def test_unknown_ids(self, tag_manager):
        """Updating or deleting a missing tag raises NotFoundError."""
        with pytest.raises(NotFoundError):
            tag_manager.update("missing", {"name": "x"})
        with pytest.raises(NotFoundError):
            tag_manager.delete("missing")

    def test_delete_keeps_entries(self, tag_manager, entry_manager):
        """Deleting a tag detaches it but keeps the entries."""
        tag = tag_manager.create({"name": "temp"})
        entry = entry_manager.create({"title": "t", "content": "", "tag_ids": [tag.id]})

        tag_manager.delete(tag.id)
        assert tag_manager.get_by_id(tag.id) is None
        reloaded = entry_manager.get_by_id(entry.id)
        assert reloaded is not None
        assert reloaded.tags == []


class TestEntryTagLinks:
    """Tests for entry-tag association helpers."""

    def test_count_excludes_trash(self, tag_manager, entry_manager):
        """Entry counts skip deleted entries."""
        tag = tag_manager.create({"name": "daily"})
        entry_manager.create({"title": "a", "content": "", "tag_ids": [tag.id]})
        trashed = entry_manager.create({"title": "b", "content": "", "tag_ids": [tag.id]})
        entry_manager.soft_delete(trashed.id)

        assert tag_manager.get_entry_count_for_tag(tag.id) == 1

    def test_add_is_idempotent(self, tag_manager, entry_manager):
        """Adding the same tag twice keeps one link."""
        tag = tag_manager.create({"name": "once"})
        entry = entry_manager.create({"title": "t", "content": ""})

        tag_manager.add_tag_to_entry(entry.id, tag.id)
        tag_manager.add_tag_to_entry(entry.id, tag.id)
        assert [t.id for t in tag_manager.get_tags_for_entry(entry.id)] == [tag.id]

    def test_remove(self, tag_manager, entry_manager):
        """remove_tag_from_entry reports whether a link was removed."""
        tag = tag_manager.create({"name": "bye"})
        entry = entry_manager.create({"title": "t", "content": "", "tag_ids": [tag.id]})

        assert tag_manager.remove_tag_from_entry(entry.id, tag.id) is True
        assert tag_manager.remove_tag_from_entry(entry.id, tag.id) is False
        assert tag_manager.get_tags_for_entry(entry.id) == []

    def test_remove_unknown_entry(self, tag_manager):
        """Unknown entries raise NotFoundError."""
        with pytest.raises(NotFoundError):
            tag_manager.remove_tag_from_entry("missing", "whatever")

    def test_set_full_replace(self, tag_manager, entry_manager):
        """set_tags_for_entry replaces the set and ignores repeats."""
        a = tag_manager.create({"name": "a"})
        b = tag_manager.create({"name": "b"})
        c = tag_manager.create({"name": "c"})
        entry = entry_manager.create({"title": "t", "content": "", "tag_ids": [a.id, b.id]})

        tags = tag_manager.set_tags_for_entry(entry.id, [c.id, b.id, c.id])
        assert sorted(t.name for t in tags) == ["b", "c"]
        assert [t.name for t in tag_manager.get_tags_for_entry(entry.id)] == ["b", "c"]

    def test_set_unknown_tag(self, tag_manager, entry_manager):
        """Unknown tag ids raise NotFoundError."""
        entry = entry_manager.create({"title": "t", "content": ""})
        with pytest.raises(NotFoundError):
            tag_manager.set_tags_for_entry(entry.id, ["missing"])
