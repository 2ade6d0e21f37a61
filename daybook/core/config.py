#!/usr/bin/env python3
"""
config.py
-------------------
Application configuration constants.

Tunables shared by the repositories, the search engine, the stores and
the CLI. Values mirror the behaviour users see in the journal app.
"""

# ----- Trash -----
# Days a soft-deleted entry stays in the trash before purge_old_deleted removes it
TRASH_RETENTION_DAYS = 30

# ----- Search -----
DEFAULT_SEARCH_LIMIT = 50
SNIPPET_TOKENS = 32
SNIPPET_OPEN_MARK = "<<"
SNIPPET_CLOSE_MARK = ">>"
SNIPPET_ELLIPSIS = "..."
FALLBACK_CONTEXT_CHARS = 30
FALLBACK_PREVIEW_CHARS = 100
MIN_SEARCH_LENGTH = 2
MAX_RECENT_SEARCHES = 10

# ----- Text -----
PREVIEW_MAX_LENGTH = 150
TITLE_MAX_LENGTH = 50
UNTITLED = "Untitled"

# ----- Display -----
DEFAULT_TAG_COLOR = "#0D9488"
DEFAULT_CATEGORY_COLOR = "#6366F1"
