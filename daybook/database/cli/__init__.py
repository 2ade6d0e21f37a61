#!/usr/bin/env python3
"""
Daybook Database Management CLI
-------------------------------

Modular command-line interface for the journal database.

This module provides the main CLI group and shared context setup
for all database commands.

Command Structure:
    - Setup & Status (init, status)
    - Entries (entry add|list|show|edit|delete|restore|trash|purge|remove)
    - Tags (tag add|list|rename|delete)
    - Categories (category add|list|delete|reorder)

Usage:
    # Get general help
    daybook-db --help

    # Get help for a specific command group
    daybook-db entry --help

    # Get help for a specific command
    daybook-db entry add --help
"""
import logging
from pathlib import Path

import click

from daybook.core.cli import setup_logger
from daybook.core.paths import DB_PATH, LOG_DIR
from daybook.database.manager import JournalDB


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    default=str(DB_PATH),
    help="Path to database file",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Path to log directory",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, db_path, log_dir, verbose):
    """Daybook Database Management CLI"""

    # Suppress Alembic INFO logging by default
    logging.getLogger("alembic").setLevel(logging.WARNING)

    ctx.ensure_object(dict)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "database_cli")


def get_db(ctx) -> JournalDB:
    """Get or create the initialized database instance from context."""
    if "db" not in ctx.obj:
        db = JournalDB(db_path=ctx.obj["db_path"], log_dir=ctx.obj["log_dir"])
        db.initialize()
        ctx.obj["db"] = db
    return ctx.obj["db"]


# Import and register command modules
# These imports must come after CLI group definition
from .setup import init, status  # noqa: E402
from .entries import entry  # noqa: E402
from .tags import tag  # noqa: E402
from .categories import category  # noqa: E402

# Register top-level commands
cli.add_command(init)
cli.add_command(status)

# Register command groups
cli.add_command(entry)
cli.add_command(tag)
cli.add_command(category)
