#!/usr/bin/env python3
"""
Daybook Database Package
------------------------
SQLite persistence for the journal.

Modules:
    - models: SQLAlchemy ORM models (Entry, Tag, Category)
    - managers: Per-entity managers bound to one session
    - manager: JournalDB, the schema owner and session factory
    - configs: Seed categories, additive migrations, indexes
    - cli: daybook-db command group

JournalDB is imported from its module so that the search package,
which depends on the models, can be loaded independently:

    from daybook.database.manager import JournalDB
"""
from daybook.core.exceptions import (
    DatabaseError,
    DuplicateError,
    NotFoundError,
    NotInitializedError,
    ValidationError,
)
from .decorators import handle_db_errors, log_database_operation, validate_metadata

__all__ = [
    # Exceptions
    "DatabaseError",
    "DuplicateError",
    "NotFoundError",
    "NotInitializedError",
    "ValidationError",
    # Decorators
    "handle_db_errors",
    "log_database_operation",
    "validate_metadata",
]
