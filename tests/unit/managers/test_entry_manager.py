"""
test_entry_manager.py
---------------------
Unit tests for EntryManager: creation, partial updates, the trash
lifecycle and filtered listings.
"""
import pytest
from datetime import date, timedelta

from daybook.core.exceptions import NotFoundError, ValidationError
from daybook.database.managers import EntryPatch
from daybook.database.models import Mood, SyncStatus
from daybook.utils.dates import utc_now

from conftest import local_time, write_entry


class TestEntryCreate:
    """Tests for EntryManager.create()."""

    def test_create_sets_bookkeeping(self, entry_manager):
        """New entries start pending at version 0 with equal timestamps."""
        entry = entry_manager.create({"title": "First", "content": "Hello"})

        assert len(entry.id) == 36
        assert entry.sync_status is SyncStatus.PENDING
        assert entry.sync_version == 0
        assert entry.created_at == entry.updated_at
        assert entry.deleted_at is None

    def test_blank_title_derived_from_content(self, entry_manager):
        """A blank title is replaced by the first line of content."""
        entry = entry_manager.create({"title": "  ", "content": "Had coffee with Sam\nIt rained."})
        assert entry.title == "Had coffee with Sam"

    def test_blank_title_and_content(self, entry_manager):
        """Nothing to derive from gives 'Untitled'."""
        assert entry_manager.create({"title": "", "content": ""}).title == "Untitled"

    def test_duplicate_tag_ids_ignored(self, entry_manager, tag_manager):
        """Repeated tag ids attach the tag once."""
        tag = tag_manager.create({"name": "work"})
        entry = entry_manager.create({"title": "t", "content": "", "tag_ids": [tag.id, tag.id]})
        assert entry.tag_ids == [tag.id]

    def test_category_resolved(self, entry_manager):
        """The category relationship is loaded on the returned entry."""
        entry = entry_manager.create(
            {"title": "t", "content": "", "category_id": "default-work"}
        )
        assert entry.category.name == "Work"

    def test_unknown_category_rejected(self, entry_manager):
        """category_id must reference an existing category."""
        with pytest.raises(NotFoundError):
            entry_manager.create({"title": "t", "content": "", "category_id": "nope"})

    def test_invalid_mood_rejected(self, entry_manager):
        """Unknown moods raise ValidationError."""
        with pytest.raises(ValidationError):
            entry_manager.create({"title": "t", "content": "", "mood": "ecstatic"})


class TestEntryUpdate:
    """Tests for EntryManager.update()."""

    def test_only_supplied_fields_change(self, entry_manager):
        """Unset patch fields keep their values."""
        entry = entry_manager.create({"title": "Keep", "content": "old", "mood": "good"})
        updated = entry_manager.update(entry.id, EntryPatch(content="new"))

        assert updated.title == "Keep"
        assert updated.content == "new"
        assert updated.mood is Mood.GOOD

    def test_bumps_bookkeeping(self, entry_manager, db_session):
        """Every update bumps updated_at and sync_version and sets pending."""
        entry = entry_manager.create({"title": "t", "content": ""})
        entry.sync_status = SyncStatus.SYNCED
        entry.updated_at = entry.updated_at - timedelta(minutes=5)
        before = entry.updated_at
        db_session.flush()

        updated = entry_manager.update(entry.id, EntryPatch(title="t2"))
        assert updated.sync_version == 1
        assert updated.sync_status is SyncStatus.PENDING
        assert updated.updated_at > before

        again = entry_manager.update(entry.id, EntryPatch())
        assert again.sync_version == 2

    def test_none_clears_mood_and_category(self, entry_manager):
        """Explicit None clears optional fields."""
        entry = entry_manager.create(
            {"title": "t", "content": "", "mood": "bad", "category_id": "default-work"}
        )
        updated = entry_manager.update(entry.id, EntryPatch(mood=None, category_id=None))
        assert updated.mood is None
        assert updated.category_id is None
        assert updated.category is None

    def test_tag_ids_full_replace(self, entry_manager, tag_manager):
        """Supplying tag_ids replaces the whole tag set."""
        a = tag_manager.create({"name": "a"})
        b = tag_manager.create({"name": "b"})
        c = tag_manager.create({"name": "c"})
        entry = entry_manager.create({"title": "t", "content": "", "tag_ids": [a.id, b.id]})

        updated = entry_manager.update(entry.id, EntryPatch(tag_ids=[c.id]))
        assert updated.tag_ids == [c.id]

        cleared = entry_manager.update(entry.id, {"tag_ids": []})
        assert cleared.tags == []

    def test_dict_patch(self, entry_manager):
        """A dict is accepted in place of EntryPatch."""
        entry = entry_manager.create({"title": "t", "content": ""})
        assert entry_manager.update(entry.id, {"mood": "okay"}).mood is Mood.OKAY

    def test_unknown_id(self, entry_manager):
        """Updating a missing entry raises NotFoundError."""
        with pytest.raises(NotFoundError):
            entry_manager.update("missing", EntryPatch(title="x"))

    def test_update_in_trash_allowed(self, entry_manager):
        """Deleted entries can still be updated."""
        entry = entry_manager.create({"title": "t", "content": ""})
        entry_manager.soft_delete(entry.id)
        assert entry_manager.update(entry.id, EntryPatch(title="t2")).title == "t2"


class TestEntryTrash:
    """Tests for soft delete, restore and permanent removal."""

    def test_soft_delete_round_trip(self, entry_manager, tag_manager):
        """Delete then restore gives back the entry with new bookkeeping."""
        tag = tag_manager.create({"name": "home"})
        entry = entry_manager.create(
            {"title": "t", "content": "c", "mood": "good", "tag_ids": [tag.id]}
        )
        before = entry.to_dict()

        deleted = entry_manager.soft_delete(entry.id)
        assert deleted.deleted_at is not None
        assert entry.id not in [e.id for e in entry_manager.get_all()]
        assert entry.id in [e.id for e in entry_manager.get_deleted()]

        restored = entry_manager.restore(entry.id)
        after = restored.to_dict()
        assert after["deleted_at"] is None
        assert after["sync_version"] == before["sync_version"] + 2
        for key in ("title", "content", "mood", "tags", "created_at", "category_id"):
            assert after[key] == before[key]
        assert entry.id in [e.id for e in entry_manager.get_all()]
        assert entry_manager.get_deleted() == []

    def test_get_by_id_sees_trash(self, entry_manager):
        """get_by_id returns deleted entries too."""
        entry = entry_manager.create({"title": "t", "content": ""})
        entry_manager.soft_delete(entry.id)
        assert entry_manager.get_by_id(entry.id).is_deleted
        assert entry_manager.get_by_id("missing") is None

    def test_delete_and_restore_unknown(self, entry_manager):
        """Trash operations on unknown ids raise NotFoundError."""
        for operation in (
            entry_manager.soft_delete,
            entry_manager.restore,
            entry_manager.permanent_delete,
        ):
            with pytest.raises(NotFoundError):
                operation("missing")

    def test_permanent_delete_removes_links(self, entry_manager, tag_manager):
        """Permanent deletion removes the row and its tag links, not the tag."""
        tag = tag_manager.create({"name": "gone"})
        entry = entry_manager.create({"title": "t", "content": "", "tag_ids": [tag.id]})

        entry_manager.permanent_delete(entry.id)
        assert entry_manager.get_by_id(entry.id) is None
        assert tag_manager.get_by_id(tag.id) is not None
        assert tag_manager.get_entry_count_for_tag(tag.id) == 0

    def test_purge_respects_retention(self, entry_manager, db_session):
        """Entries one second past the window are purged, newer ones stay."""
        old = entry_manager.create({"title": "old", "content": ""})
        recent = entry_manager.create({"title": "recent", "content": ""})
        active = entry_manager.create({"title": "active", "content": ""})
        entry_manager.soft_delete(old.id)
        entry_manager.soft_delete(recent.id)

        entry_manager.get_by_id(old.id).deleted_at = utc_now() - timedelta(days=30, seconds=1)
        entry_manager.get_by_id(recent.id).deleted_at = utc_now() - timedelta(days=29, hours=23)
        db_session.flush()

        assert entry_manager.purge_old_deleted(days=30) == 1
        assert entry_manager.get_by_id(old.id) is None
        assert entry_manager.get_by_id(recent.id) is not None
        assert entry_manager.get_by_id(active.id) is not None

    def test_deleted_ordered_by_deletion(self, entry_manager, db_session):
        """get_deleted lists the most recently deleted first."""
        first = entry_manager.create({"title": "first", "content": ""})
        second = entry_manager.create({"title": "second", "content": ""})
        entry_manager.soft_delete(first.id)
        entry_manager.soft_delete(second.id)
        entry_manager.get_by_id(first.id).deleted_at = utc_now() - timedelta(days=1)
        db_session.flush()

        assert [e.title for e in entry_manager.get_deleted()] == ["second", "first"]


class TestEntryListings:
    """Tests for ordering and filtered listings."""

    def test_newest_first(self, entry_manager, db_session):
        """get_all orders by created_at descending."""
        write_entry(entry_manager, db_session, "a", created_at=local_time(2024, 1, 1))
        write_entry(entry_manager, db_session, "c", created_at=local_time(2024, 1, 3))
        write_entry(entry_manager, db_session, "b", created_at=local_time(2024, 1, 2))

        assert [e.title for e in entry_manager.get_all()] == ["c", "b", "a"]

    def test_same_timestamp_tie_break(self, entry_manager, db_session):
        """Equal created_at values list the later insert first."""
        stamp = local_time(2024, 1, 1)
        write_entry(entry_manager, db_session, "older", created_at=stamp)
        write_entry(entry_manager, db_session, "newer", created_at=stamp)

        assert [e.title for e in entry_manager.get_all()] == ["newer", "older"]

    def test_date_range_inclusive(self, entry_manager, db_session):
        """Date bounds cover whole local days on both ends."""
        write_entry(entry_manager, db_session, "before", created_at=local_time(2024, 2, 9, 23, 30))
        write_entry(entry_manager, db_session, "start", created_at=local_time(2024, 2, 10, 0, 5))
        write_entry(entry_manager, db_session, "end", created_at=local_time(2024, 2, 12, 23, 55))
        write_entry(entry_manager, db_session, "after", created_at=local_time(2024, 2, 13, 0, 5))

        found = entry_manager.get_by_date_range(date(2024, 2, 10), date(2024, 2, 12))
        assert [e.title for e in found] == ["end", "start"]

    def test_by_tag_mood_category(self, entry_manager, tag_manager):
        """Single-criterion listings exclude the trash."""
        tag = tag_manager.create({"name": "run"})
        kept = entry_manager.create(
            {
                "title": "kept",
                "content": "",
                "mood": "great",
                "category_id": "default-personal",
                "tag_ids": [tag.id],
            }
        )
        trashed = entry_manager.create(
            {
                "title": "trashed",
                "content": "",
                "mood": "great",
                "category_id": "default-personal",
                "tag_ids": [tag.id],
            }
        )
        entry_manager.create({"title": "other", "content": "", "mood": "bad"})
        entry_manager.soft_delete(trashed.id)

        assert [e.id for e in entry_manager.get_by_tag(tag.id)] == [kept.id]
        assert [e.id for e in entry_manager.get_by_mood("great")] == [kept.id]
        assert [e.id for e in entry_manager.get_by_category("default-personal")] == [kept.id]

    def test_count(self, entry_manager):
        """count() excludes the trash unless asked."""
        entry = entry_manager.create({"title": "a", "content": ""})
        entry_manager.create({"title": "b", "content": ""})
        entry_manager.soft_delete(entry.id)

        assert entry_manager.count() == 1
        assert entry_manager.count(include_deleted=True) == 2
