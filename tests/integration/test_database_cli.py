"""
test_database_cli.py
--------------------
End-to-end tests for the daybook-db command line.
"""
import re

import pytest
from click.testing import CliRunner

from daybook.database.cli import cli
from daybook.database.manager import JournalDB

CREATED = re.compile(r"Created entry ([0-9a-f]{8})")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_dir):
    """Run the CLI against a database and log directory under tmp_dir."""
    base = ["--db-path", str(tmp_dir / "cli.db"), "--log-dir", str(tmp_dir / "logs")]

    def _invoke(*args, **kwargs):
        return runner.invoke(cli, [*base, *args], obj={}, **kwargs)

    return _invoke


def _add(invoke, *args):
    result = invoke("entry", "add", *args)
    assert result.exit_code == 0, result.output
    return CREATED.search(result.output).group(1)


class TestSetupCommands:
    """Tests for init and status."""

    def test_init(self, invoke, tmp_dir):
        """init creates the database file."""
        result = invoke("init")
        assert result.exit_code == 0
        assert "Setup finished" in result.output
        assert (tmp_dir / "cli.db").exists()

    def test_status(self, invoke):
        """status reports the seeded categories and the index."""
        invoke("init")
        result = invoke("status")
        assert result.exit_code == 0
        assert "FTS index:   present" in result.output
        assert "Categories:  5" in result.output
        assert "Entries:     0" in result.output


class TestEntryCommands:
    """Tests for the entry command group."""

    def test_add_and_show(self, invoke):
        """An added entry can be shown by id prefix."""
        short_id = _add(
            invoke, "--content", "Walked along the river", "--mood", "good",
            "--category", "Personal", "--tag", "Outdoors",
        )

        result = invoke("entry", "show", short_id)
        assert result.exit_code == 0
        assert "Walked along the river" in result.output
        assert "Personal" in result.output
        assert "outdoors" in result.output

    def test_add_unknown_category(self, invoke):
        """Unknown categories fail with a clean message."""
        result = invoke("entry", "add", "--content", "x", "--category", "Nope")
        assert result.exit_code == 1
        assert "NotFoundError" in result.output

    def test_list_filters(self, invoke):
        """list honours tag and mood filters."""
        _add(invoke, "--content", "Tagged one", "--tag", "work")
        _add(invoke, "--content", "Happy one", "--mood", "great")

        result = invoke("entry", "list", "--tag", "work")
        assert "Tagged one" in result.output
        assert "Happy one" not in result.output

        result = invoke("entry", "list", "--mood", "great")
        assert "Happy one" in result.output
        assert "Tagged one" not in result.output

    def test_list_empty(self, invoke):
        """An empty journal says so."""
        result = invoke("entry", "list")
        assert result.exit_code == 0
        assert "No entries found." in result.output

    def test_edit(self, invoke):
        """edit applies a patch and bumps the version."""
        short_id = _add(invoke, "--content", "Draft")

        result = invoke("entry", "edit", short_id, "--content", "Final", "--mood", "okay")
        assert result.exit_code == 0
        assert "(version 1)" in result.output

        assert "Nothing to change." in invoke("entry", "edit", short_id).output

    def test_trash_lifecycle(self, invoke):
        """delete, trash, restore and remove work end to end."""
        short_id = _add(invoke, "--content", "Short lived")

        assert "Moved to trash" in invoke("entry", "delete", short_id).output
        assert "1 entries in trash" in invoke("entry", "trash").output
        assert "No entries found." in invoke("entry", "list").output

        assert "Restored" in invoke("entry", "restore", short_id).output
        assert "Trash is empty." in invoke("entry", "trash").output

        result = invoke("entry", "remove", short_id, "--yes")
        assert result.exit_code == 0
        assert "Removed entry" in result.output
        assert invoke("entry", "show", short_id).exit_code == 1

    def test_purge(self, invoke):
        """purge keeps entries deleted within the retention window."""
        short_id = _add(invoke, "--content", "Recent")
        invoke("entry", "delete", short_id)

        result = invoke("entry", "purge", "--yes")
        assert result.exit_code == 0
        assert "Purged 0 entries" in result.output

    def test_unknown_id(self, invoke):
        """Unknown ids exit with an error."""
        result = invoke("entry", "show", "ffffffff")
        assert result.exit_code == 1
        assert "Entry not found" in result.output


class TestTagAndCategoryCommands:
    """Tests for the tag and category groups."""

    def test_tag_lifecycle(self, invoke):
        """Tags can be added, renamed, listed and deleted."""
        assert "Created tag: music" in invoke("tag", "add", "Music").output
        assert invoke("tag", "add", "music").exit_code == 1

        assert "music → songs" in invoke("tag", "rename", "music", "songs").output
        assert "songs" in invoke("tag", "list").output

        assert "Deleted tag: songs" in invoke("tag", "delete", "songs").output
        assert "No tags yet." in invoke("tag", "list").output

    def test_category_lifecycle(self, invoke, tmp_dir):
        """Categories can be added, reordered and deleted."""
        result = invoke("category", "add", "Dreams", "--icon", "moon-outline")
        assert "Created category: Dreams (position 5)" in result.output

        assert invoke("category", "reorder", "Dreams", "Personal").exit_code == 0
        assert "Deleted category: Work" in invoke("category", "delete", "Work").output

        db = JournalDB(tmp_dir / "cli.db")
        db.initialize()
        with db.session_scope():
            categories = db.categories.get_all()
            assert categories[0].name == "Dreams"
            assert "Work" not in [c.name for c in categories]
        db.close()
