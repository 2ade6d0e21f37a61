"""
conftest.py
-----------
Shared pytest fixtures for Daybook tests.

Provides fixtures for:
- Temporary directories and database files
- An initialized JournalDB per test
- A session with the entity managers bound to it
- Test data factories
"""
import pytest
from datetime import datetime
from pathlib import Path
from tempfile import TemporaryDirectory

from daybook.database.manager import JournalDB
from daybook.utils.dates import to_utc_naive


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "journal.db"


# ----- Database Fixtures -----

@pytest.fixture
def test_db(test_db_path):
    """
    Create an initialized JournalDB on a temporary file.

    The engine is disposed after the test.
    """
    db = JournalDB(db_path=test_db_path)
    db.initialize()

    yield db

    db.close()


@pytest.fixture
def db_session(test_db):
    """
    Open a session scope for the test.

    Managers from the fixtures below share this session, so everything
    a test does is one transaction.
    """
    with test_db.session_scope() as session:
        yield session


@pytest.fixture
def entry_manager(db_session):
    """Create EntryManager instance for testing."""
    from daybook.database.managers.entry_manager import EntryManager
    return EntryManager(db_session)


@pytest.fixture
def tag_manager(db_session):
    """Create TagManager instance for testing."""
    from daybook.database.managers.tag_manager import TagManager
    return TagManager(db_session)


@pytest.fixture
def category_manager(db_session):
    """Create CategoryManager instance for testing."""
    from daybook.database.managers.category_manager import CategoryManager
    return CategoryManager(db_session)


@pytest.fixture
def search_engine(db_session):
    """Create SearchEngine instance for testing."""
    from daybook.search.search_engine import SearchEngine
    return SearchEngine(db_session)


# ----- Sample Data Factory Functions -----

def local_time(year, month, day, hour=12, minute=0):
    """Storage timestamp for a local wall-clock time."""
    return to_utc_naive(datetime(year, month, day, hour, minute))


def write_entry(entry_manager, session, content, created_at=None, **fields):
    """
    Create an entry, optionally backdating created_at.

    Returns:
        The created Entry
    """
    entry = entry_manager.create({"title": fields.pop("title", ""), "content": content, **fields})
    if created_at is not None:
        entry.created_at = created_at
        session.flush()
    return entry
