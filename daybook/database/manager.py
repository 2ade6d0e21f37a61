#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the Daybook journal.

Provides the JournalDB class, the single entry point to the SQLite file.
Handles:
    - Initialization of the database engine and sessionmaker
    - Idempotent schema setup (tables, additive migrations, FTS index,
      secondary indexes, default categories)
    - Transactional sessions wiring the entity managers
    - Schema status reporting

Key Features:
    - Fail-fast access: sessions before initialize() raise NotInitializedError
    - initialize() runs once even with concurrent callers
    - Foreign keys enforced on every connection
    - Additive column migrations via Alembic operations

Usage:
    db = JournalDB("~/.daybook/journal.db", log_dir="~/.daybook/logs")
    db.initialize()

    with db.session_scope():
        entry = db.entries.create({"title": "", "content": "Had coffee with Sam"})
        db.tags.add_tag_to_entry(entry.id, tag.id)
        hits = db.search.search("coffee")

Notes
==============
- Timestamps are naive UTC (see daybook.utils.dates)
- One session_scope() is one transaction
- db.entries and friends are per thread and per scope
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

# --- Third party ---
from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlalchemy import Engine, create_engine, event, func, inspect, select, text
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# --- Local imports ---
from daybook.core.exceptions import DatabaseError, NotInitializedError
from daybook.core.logging_manager import JournalLogger, safe_logger
from daybook.search.search_engine import SearchEngine
from daybook.search.search_index import SearchIndexManager
from daybook.utils.dates import utc_now
from .configs import ADDITIVE_COLUMNS, DEFAULT_CATEGORIES, SECONDARY_INDEXES
from .managers import CategoryManager, EntryManager, TagManager
from .models import Base, Category, Tag

MEMORY_DB = ":memory:"


@dataclass(frozen=True)
class _SessionManagers:
    """Managers bound to one session_scope() session."""

    entries: EntryManager
    tags: TagManager
    categories: CategoryManager
    search: SearchEngine


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turn on SQLite foreign key enforcement for a new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ----- Main Database Manager -----
class JournalDB:
    """
    Main database manager for the Daybook journal.

    Attributes:
        - db_path (Path | str): Path to the SQLite file, or ':memory:'
        - engine (Engine): SQLAlchemy engine instance
        - SessionLocal (sessionmaker): SQLAlchemy session factory
        - search_index (SearchIndexManager): FTS5 index owner
        - logger (JournalLogger | None): Operation logger

    Usage:
        db = JournalDB("~/.daybook/journal.db")
        db.initialize()
        with db.session_scope():
            entries = db.entries.get_all()
    """

    # ---- Initialization ----
    def __init__(
        self,
        db_path: Union[str, Path],
        log_dir: Optional[Union[str, Path]] = None,
        echo: bool = False,
    ) -> None:
        """
        Initialize database engine and session factory.

        Nothing touches the schema until initialize() is called.

        Args:
            db_path (str | Path): Path to the SQLite file, or ':memory:'
            log_dir (str | Path): Directory for log files (optional)
            echo (bool): Echo emitted SQL (debugging)
        """
        self.in_memory = str(db_path) == MEMORY_DB
        self.db_path: Union[str, Path] = (
            MEMORY_DB if self.in_memory else Path(db_path).expanduser().resolve()
        )
        self.echo = echo

        # --- Logging ---
        if log_dir:
            self.log_dir = Path(log_dir).expanduser().resolve() / "system"
            self.logger: Optional[JournalLogger] = JournalLogger(
                self.log_dir, component_name="database"
            )
        else:
            self.logger = None

        self._init_lock = threading.Lock()
        self._initialized = False

        # Managers of the innermost active session_scope, per thread
        self._scope = threading.local()

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Initialize database engine and session factory."""
        try:
            if self.in_memory:
                self.engine: Engine = create_engine(
                    "sqlite://",
                    echo=self.echo,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                )
            else:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)  # type: ignore[union-attr]
                self.engine = create_engine(
                    f"sqlite:///{self.db_path}",
                    echo=self.echo,
                    pool_pre_ping=True,
                )
            event.listen(self.engine, "connect", _enable_foreign_keys)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )
            self.search_index = SearchIndexManager(self.engine, self.logger)

        except Exception as e:
            safe_logger(self.logger).log_error(e, {"operation": "database_engine_setup"})
            raise DatabaseError(f"Database engine setup failed: {e}") from e

    # ---- Schema setup ----
    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """
        Bring the schema up to date. Safe to call any number of times.

        Actions (first successful call only):
            creates missing tables from the ORM models
            adds missing columns to tables created by older versions
            creates the FTS5 index and its sync triggers, indexing
            existing rows when the index is new
            creates secondary indexes
            seeds the default categories into an empty categories table

        Raises:
            DatabaseError: If any step fails; the instance stays uninitialized
        """
        if self._initialized:
            return

        with self._init_lock:
            if self._initialized:
                return

            logger = safe_logger(self.logger)
            logger.log_operation("database_init_start", {"db_path": str(self.db_path)})
            try:
                Base.metadata.create_all(bind=self.engine)
                added = self._apply_additive_migrations()
                index_missing = not self.search_index.index_exists()
                self.search_index.create_index()
                self.search_index.setup_triggers()
                if index_missing:
                    # Rows written before the index existed
                    self.search_index.rebuild_index()
                self._create_secondary_indexes()
                seeded = self._seed_default_categories()
            except Exception as e:
                logger.log_error(e, {"operation": "database_init"})
                raise DatabaseError(f"Database initialization failed: {e}") from e

            self._initialized = True
            logger.log_operation(
                "database_init_complete",
                {"columns_added": added, "categories_seeded": seeded},
            )

    def _apply_additive_migrations(self) -> List[str]:
        """
        Add configured columns that the live schema lacks.

        Returns:
            'table.column' names that were added
        """
        added: List[str] = []
        with self.engine.begin() as conn:
            inspector = inspect(conn)
            tables = set(inspector.get_table_names())
            operations = Operations(MigrationContext.configure(conn))

            for addition in ADDITIVE_COLUMNS:
                if addition.table_name not in tables:
                    continue
                existing = {col["name"] for col in inspector.get_columns(addition.table_name)}
                if addition.column_name in existing:
                    continue
                operations.add_column(addition.table_name, addition.column_factory())
                added.append(f"{addition.table_name}.{addition.column_name}")
                safe_logger(self.logger).log_info(
                    "Added missing column",
                    {"table": addition.table_name, "column": addition.column_name},
                )
        return added

    def _create_secondary_indexes(self) -> None:
        with self.engine.begin() as conn:
            for ddl in SECONDARY_INDEXES:
                conn.execute(text(ddl))

    def _seed_default_categories(self) -> int:
        """
        Insert the starter categories when the categories table is empty.

        Returns:
            Number of categories inserted
        """
        with self.engine.begin() as conn:
            existing = conn.execute(select(func.count()).select_from(Category)).scalar_one()
            if existing:
                return 0

            now = utc_now()
            rows = [
                {
                    "id": category.id,
                    "name": category.name,
                    "icon": category.icon,
                    "color": category.color,
                    "sort_order": category.sort_order,
                    "created_at": now,
                }
                for category in DEFAULT_CATEGORIES
            ]
            conn.execute(sqlite_insert(Category).on_conflict_do_nothing(), rows)
        return len(DEFAULT_CATEGORIES)

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around operations with logging.

        Also wires the entity managers for this session, available via
        properties (db.entries, db.tags, db.categories, db.search).
        Scopes may nest; the managers of the innermost scope are active
        until it exits. Each thread only sees the scopes it opened.

        Usage:
            with db.session_scope() as session:
                entry = db.entries.create({"title": "Day one", "content": "..."})
                db.tags.set_tags_for_entry(entry.id, [tag.id])

        Raises:
            NotInitializedError: If initialize() has not completed
        """
        if not self._initialized:
            raise NotInitializedError("Database not initialized. Call initialize() first.")

        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

        outer = getattr(self._scope, "managers", None)
        self._scope.managers = _SessionManagers(
            entries=EntryManager(session, self.logger),
            tags=TagManager(session, self.logger),
            categories=CategoryManager(session, self.logger),
            search=SearchEngine(session, self.logger),
        )

        if self.logger:
            self.logger.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            if self.logger:
                self.logger.log_debug("session_commit", {"session_id": session_id})

        except Exception as e:
            session.rollback()
            if self.logger:
                self.logger.log_error(
                    e, {"operation": "session_rollback", "session_id": session_id}
                )
            raise
        finally:
            self._scope.managers = outer

            session.close()
            if self.logger:
                self.logger.log_debug("session_close", {"session_id": session_id})

    # -------------------------------------------------------------------------
    # Entity Manager Properties
    # -------------------------------------------------------------------------

    def _require_session(self, name: str) -> Any:
        managers = getattr(self._scope, "managers", None)
        if managers is None:
            raise DatabaseError(
                f"db.{name} requires an active session. "
                f"Use within session_scope: with db.session_scope(): db.{name}..."
            )
        return getattr(managers, name)

    @property
    def entries(self) -> EntryManager:
        """
        Access EntryManager for entry operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._require_session("entries")

    @property
    def tags(self) -> TagManager:
        """
        Access TagManager for tag operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._require_session("tags")

    @property
    def categories(self) -> CategoryManager:
        """
        Access CategoryManager for category operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._require_session("categories")

    @property
    def search(self) -> SearchEngine:
        """
        Access SearchEngine for search and calendar queries.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._require_session("search")

    # ---- Status ----
    def get_schema_status(self) -> Dict[str, Any]:
        """
        Summarize the schema and row counts.

        Returns:
            Dictionary with keys: tables, fts_index, entries,
            deleted_entries, tags, categories

        Raises:
            NotInitializedError: If initialize() has not completed
        """
        with self.session_scope() as session:
            tables = sorted(inspect(self.engine).get_table_names())
            return {
                "db_path": str(self.db_path),
                "tables": tables,
                "fts_index": self.search_index.index_exists(),
                "entries": self.entries.count(),
                "deleted_entries": self.entries.count(include_deleted=True)
                - self.entries.count(),
                "tags": session.scalar(select(func.count()).select_from(Tag)) or 0,
                "categories": session.scalar(select(func.count()).select_from(Category))
                or 0,
            }

    def close(self) -> None:
        """Dispose of the engine; initialize() must run again before reuse."""
        self.engine.dispose()
        self._initialized = False
        safe_logger(self.logger).log_debug("database_closed", {"db_path": str(self.db_path)})

    # ----- Context Manager Support -----
    def __enter__(self) -> "JournalDB":
        """Support for context manager usage."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Dispose of the engine on exit."""
        del exc_type, exc_val, exc_tb
        self.close()
