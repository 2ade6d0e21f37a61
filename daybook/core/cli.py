#!/usr/bin/env python3
"""
cli.py
------
Shared CLI helpers for the Daybook command groups.

Functions:
    setup_logger: Initialize a JournalLogger for a CLI component
    echo_entry_line: One-line entry summary used by list-style commands
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import TYPE_CHECKING

# --- Third party imports ---
import click

# --- Local imports ---
from daybook.core.logging_manager import JournalLogger
from daybook.utils.dates import to_local

if TYPE_CHECKING:
    from daybook.database.models import Entry


def setup_logger(log_dir: Path, component_name: str) -> JournalLogger:
    """
    Setup logging for CLI operations.

    Args:
        log_dir: Base log directory (typically paths.LOG_DIR)
        component_name: Component identifier (e.g. 'database', 'search')

    Returns:
        Configured JournalLogger writing under log_dir/operations
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return JournalLogger(operations_log_dir, component_name=component_name)


def echo_entry_line(entry: "Entry") -> None:
    """Print a compact one-line summary of an entry."""
    stamp = to_local(entry.created_at).strftime("%Y-%m-%d %H:%M")
    mood = f" [{entry.mood.value}]" if entry.mood else ""
    tags = f"  #{' #'.join(t.name for t in entry.tags)}" if entry.tags else ""
    click.echo(f"{entry.id[:8]}  {stamp}  {entry.title}{mood}{tags}")
