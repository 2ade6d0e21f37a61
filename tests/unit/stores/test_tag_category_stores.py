"""
test_tag_category_stores.py
---------------------------
Tests for TagStore and CategoryStore.
"""
import pytest

from daybook.core.exceptions import DuplicateError
from daybook.stores import CategoryStore, EntryStore, TagStore


class TestTagStore:
    """Tests for TagStore."""

    def test_load_sorted(self, test_db):
        """Tags load alphabetically."""
        store = TagStore(test_db)
        store.create({"name": "b"})
        store.create({"name": "a"})
        assert [t.name for t in store.load()] == ["a", "b"]

    def test_update_and_delete(self, test_db):
        """Mutations are reflected in the cache."""
        store = TagStore(test_db)
        tag = store.create({"name": "draft"})

        store.update(tag.id, {"name": "final"})
        assert store.get_cached(tag.id).name == "final"

        store.delete(tag.id)
        assert store.tags == []
        assert store.get_cached(tag.id) is None

    def test_duplicate(self, test_db):
        """Duplicates raise and leave the cache as it was."""
        store = TagStore(test_db)
        store.create({"name": "same"})
        with pytest.raises(DuplicateError):
            store.create({"name": "SAME"})
        assert store.error
        assert [t.name for t in store.tags] == ["same"]

    def test_entry_links(self, test_db):
        """Link helpers change the tags of an entry."""
        tags = TagStore(test_db)
        entries = EntryStore(test_db)
        entry = entries.create({"title": "t", "content": ""})
        a = tags.create({"name": "a"})
        b = tags.create({"name": "b"})

        tags.add_tag_to_entry(entry.id, a.id)
        assert [t.name for t in tags.set_tags_for_entry(entry.id, [a.id, b.id])] == ["a", "b"]
        assert tags.remove_tag_from_entry(entry.id, a.id) is True
        assert tags.remove_tag_from_entry(entry.id, a.id) is False

        entries.load()
        assert [t.name for t in entries.get_cached(entry.id).tags] == ["b"]


class TestCategoryStore:
    """Tests for CategoryStore."""

    def test_load_defaults(self, test_db):
        """The seeded categories load in order."""
        store = CategoryStore(test_db)
        assert [c.name for c in store.load()] == [
            "Personal", "Work", "Book Notes", "Travel", "Gratitude"
        ]

    def test_create_update_delete(self, test_db):
        """Mutations reload the ordered list."""
        store = CategoryStore(test_db)
        category = store.create({"name": "Garden", "icon": "leaf-outline"})
        assert store.categories[-1].id == category.id

        store.update(category.id, {"color": "#00FF00"})
        assert store.get_cached(category.id).color == "#00FF00"

        store.delete(category.id)
        assert store.get_cached(category.id) is None

    def test_reorder(self, test_db):
        """reorder() applies the given order."""
        store = CategoryStore(test_db)
        ids = [c.id for c in store.load()]
        store.reorder(list(reversed(ids)))
        assert [c.id for c in store.categories] == list(reversed(ids))
