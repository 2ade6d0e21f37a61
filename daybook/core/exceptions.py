#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Daybook project.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Base for all persistence errors
    │   ├── NotInitializedError - Database used before initialize()
    │   ├── NotFoundError - Operation targeted an unknown id
    │   ├── DuplicateError - Name uniqueness violation (tags, categories)
    │   └── SearchIndexError - Full-text index maintenance failures
    └── ValidationError - Invalid input data

Usage:
    from daybook.core.exceptions import NotFoundError, ValidationError

    try:
        db.entries.update(entry_id, patch)
    except NotFoundError as e:
        click.echo(f"Nothing to update: {e}")
"""


class DatabaseError(Exception):
    """
    Base exception for database-related errors.

    Raised when database operations fail due to connection issues,
    query errors, integrity violations, or other storage problems.
    Catch this to handle any persistence error, or catch the
    subclasses for more granular handling.

    Examples:
        >>> raise DatabaseError("Database operation failed: disk I/O error")
    """

    pass


class NotInitializedError(DatabaseError):
    """
    Exception for access to the database before schema setup completed.

    Consumers must call JournalDB.initialize() once at startup; every
    session request made before that fails fast with this error.

    Examples:
        >>> raise NotInitializedError("Database not initialized. Call initialize() first.")
    """

    pass


class NotFoundError(DatabaseError):
    """
    Exception for update/delete style calls against a nonexistent id.

    Examples:
        >>> raise NotFoundError("Entry not found: 6f1c...")
        >>> raise NotFoundError("Tag not found: 42")
    """

    pass


class DuplicateError(DatabaseError):
    """
    Exception for uniqueness violations detected before writing.

    Tag names are compared case-insensitively; category names are
    compared case-insensitively after trimming.

    Examples:
        >>> raise DuplicateError("A tag with this name already exists: focus")
    """

    pass


class SearchIndexError(DatabaseError):
    """
    Exception for full-text index maintenance failures.

    Raised by explicit index operations (rebuild, integrity check).
    Query-time index failures are never raised; the search engine
    falls back to substring search instead.
    """

    pass


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input data fails validation rules: missing required
    fields, empty names after normalization, unknown mood values.

    Examples:
        >>> raise ValidationError("Required field 'name' missing or empty")
        >>> raise ValidationError("Invalid mood: 'ecstatic'")
    """

    pass
