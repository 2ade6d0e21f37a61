#!/usr/bin/env python3
"""
search_index.py
---------------
Manages the full-text search index for journal entries using SQLite FTS5.

The index is an external-content FTS5 table over entries(title, content),
keyed by the entries rowid. Three triggers mirror every insert, delete
and title/content update into it, inside the same transaction as the
write itself.

Features:
- FTS5 virtual table over title and content
- Automatic triggers to keep index in sync
- Full rebuild from the entries table
- FTS5 integrity check

Usage:
    # Initialize index (idempotent)
    manager = SearchIndexManager(engine)
    manager.create_index()
    manager.setup_triggers()

    # Rebuild entire index
    manager.rebuild_index()
"""
# --- Standard library imports ---
from typing import Optional

# --- Third party imports ---
from sqlalchemy import Engine, text
from sqlalchemy.exc import DBAPIError

# --- Local imports ---
from daybook.core.exceptions import SearchIndexError
from daybook.core.logging_manager import JournalLogger, safe_logger

FTS_TABLE = "entries_fts"

_TRIGGERS = {
    "entries_ai": """
        CREATE TRIGGER IF NOT EXISTS entries_ai AFTER INSERT ON entries BEGIN
            INSERT INTO entries_fts(rowid, title, content)
            VALUES (new.rowid, new.title, new.content);
        END
    """,
    "entries_ad": """
        CREATE TRIGGER IF NOT EXISTS entries_ad AFTER DELETE ON entries BEGIN
            INSERT INTO entries_fts(entries_fts, rowid, title, content)
            VALUES ('delete', old.rowid, old.title, old.content);
        END
    """,
    "entries_au": """
        CREATE TRIGGER IF NOT EXISTS entries_au AFTER UPDATE OF title, content ON entries BEGIN
            INSERT INTO entries_fts(entries_fts, rowid, title, content)
            VALUES ('delete', old.rowid, old.title, old.content);
            INSERT INTO entries_fts(rowid, title, content)
            VALUES (new.rowid, new.title, new.content);
        END
    """,
}


class SearchIndexManager:
    """Manages FTS5 full-text search index."""

    def __init__(self, engine: Engine, logger: Optional[JournalLogger] = None):
        self.engine = engine
        self.logger = logger

    def create_index(self) -> None:
        """
        Create the FTS5 virtual table if it does not exist.

        The table indexes:
        - title: Entry title
        - content: Entry body

        Rows live in the entries table (content='entries'); the index
        only stores the tokens.
        """
        with self.engine.begin() as conn:
            conn.execute(text(f"""
                CREATE VIRTUAL TABLE IF NOT EXISTS {FTS_TABLE} USING fts5(
                    title,
                    content,
                    content='entries',
                    content_rowid='rowid'
                )
            """))

        safe_logger(self.logger).log_debug("Ensured FTS5 search index")

    def setup_triggers(self) -> None:
        """
        Set up database triggers to keep FTS index in sync.

        Triggers:
        - INSERT: Add new entry to index
        - UPDATE OF title, content: Replace the entry's tokens
        - DELETE: Remove entry from index
        """
        with self.engine.begin() as conn:
            for ddl in _TRIGGERS.values():
                conn.execute(text(ddl))

        safe_logger(self.logger).log_debug("Ensured FTS sync triggers")

    def index_exists(self) -> bool:
        """Check if FTS index exists."""
        with self.engine.connect() as conn:
            result = conn.execute(
                text("SELECT name FROM sqlite_master WHERE type='table' AND name=:name"),
                {"name": FTS_TABLE},
            )
            return result.fetchone() is not None

    def rebuild_index(self) -> int:
        """
        Rebuild entire search index from the entries table.

        Recreates the table and triggers when they are missing.

        Returns:
            Number of entries indexed

        Raises:
            SearchIndexError: If SQLite rejects the rebuild
        """
        safe_logger(self.logger).log_info("Rebuilding search index...")

        try:
            self.create_index()
            self.setup_triggers()
            with self.engine.begin() as conn:
                conn.execute(text(f"INSERT INTO {FTS_TABLE}({FTS_TABLE}) VALUES ('rebuild')"))
                count = conn.execute(text("SELECT COUNT(*) FROM entries")).scalar_one()
        except DBAPIError as e:
            safe_logger(self.logger).log_error(e, {"operation": "rebuild_index"})
            raise SearchIndexError(f"Search index rebuild failed: {e.orig}") from e

        safe_logger(self.logger).log_info(f"Index rebuild complete: {count} entries")
        return count

    def check_integrity(self) -> bool:
        """
        Run the FTS5 integrity check.

        Returns:
            True if the index matches the entries table, False otherwise
            (including when the index is missing)
        """
        if not self.index_exists():
            return False
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    text(f"INSERT INTO {FTS_TABLE}({FTS_TABLE}) VALUES ('integrity-check')")
                )
        except DBAPIError as e:
            safe_logger(self.logger).log_warning(
                "Search index integrity check failed", {"error": str(e.orig)}
            )
            return False
        return True
