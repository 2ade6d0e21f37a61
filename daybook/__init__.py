#!/usr/bin/env python3
"""
Daybook
-------
Local persistence and search core for a personal journal.

Subpackages:
    - core: exceptions, logging, validators, paths, configuration
    - database: ORM models, entity managers, JournalDB, database CLI
    - search: FTS5 index management, search engine, search CLI
    - stores: cached application state over JournalDB
    - utils: text and date helpers
"""

__version__ = "1.0.0"
