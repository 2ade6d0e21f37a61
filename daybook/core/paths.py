#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the Daybook journal.

All paths are Path objects rooted at the data directory, which defaults
to ~/.daybook and can be relocated with the DAYBOOK_HOME environment
variable.

The data directory structure:
    DATA_DIR/
    ├── journal.db     # SQLite database (entries, tags, categories, FTS index)
    └── logs/          # Rotating application logs
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path


def _get_data_dir() -> Path:
    """
    Determine the data directory.

    Returns:
        Path from $DAYBOOK_HOME if set, else ~/.daybook
    """
    override = os.environ.get("DAYBOOK_HOME")
    if override:
        return Path(override).expanduser().resolve()
    return Path.home() / ".daybook"


# ----- Data directory -----
DATA_DIR: Path = _get_data_dir()

# --- Database ---
DB_NAME = "journal.db"
DB_PATH = DATA_DIR / DB_NAME

# ---- Logs ----
LOG_DIR = DATA_DIR / "logs"
