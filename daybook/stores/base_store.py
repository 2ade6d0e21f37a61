#!/usr/bin/env python3
"""
base_store.py
-------------
Shared plumbing for the application stores.

A store caches query results for a consumer (a UI, a script) on top of
a JournalDB. The contract is invalidate-and-reload: load() always
refetches, and every successful mutation is followed by a reload, so the
cache never has to be patched by hand.

Each store exposes:
    - is_loading: True while a load is running
    - error: message of the last failure, None after a successful call
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import wraps
from typing import TYPE_CHECKING, Callable, Optional, TypeVar

from daybook.core.exceptions import DatabaseError, ValidationError
from daybook.core.logging_manager import JournalLogger, safe_logger

if TYPE_CHECKING:
    from daybook.database.manager import JournalDB

T = TypeVar("T")

STORE_ERRORS = (DatabaseError, ValidationError)


def store_mutation(operation_name: str):
    """
    Decorator running a store method as one transaction.

    The wrapped method is called inside db.session_scope() and may use
    the session-bound managers (self.db.entries, ...). On success the
    store reloads and the method's result is returned. On failure the
    message is kept in self.error, logged, and the exception re-raised.

    Args:
        operation_name: Name used in log records
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            self.error = None
            try:
                with self.db.session_scope():
                    result = function(self, *args, **kwargs)
            except STORE_ERRORS as e:
                self.error = str(e) or f"{operation_name} failed"
                safe_logger(self.logger).log_error(e, {"operation": operation_name})
                raise

            safe_logger(self.logger).log_debug(f"Store {operation_name} complete")
            self.refresh()
            return result

        return wrapper

    return decorator


class BaseStore(ABC):
    """Common state and load handling for stores."""

    def __init__(self, db: "JournalDB", logger: Optional[JournalLogger] = None):
        """
        Args:
            db: Initialized database manager
            logger: Optional logger; defaults to the database's logger
        """
        self.db = db
        self.logger = logger if logger is not None else db.logger
        self.is_loading = False
        self.error: Optional[str] = None

    @abstractmethod
    def refresh(self) -> None:
        """Reload everything the store caches."""

    def _fetch(self, label: str, query: Callable[[], T]) -> Optional[T]:
        """
        Run a read query in its own session, tracking is_loading and error.

        Failures are recorded instead of raised; the caller keeps its
        previous cache when None comes back.
        """
        self.is_loading = True
        self.error = None
        try:
            with self.db.session_scope():
                return query()
        except STORE_ERRORS as e:
            self.error = str(e) or f"Failed to load {label}"
            safe_logger(self.logger).log_error(e, {"operation": f"load_{label}"})
            return None
        finally:
            self.is_loading = False
