"""
Setup & Status Commands
-----------------------

Database initialization and status reporting.

Commands:
    - init: Create or migrate the schema and seed default categories
    - status: Show tables, index state and row counts
"""
import click

from daybook.core.exceptions import DatabaseError
from daybook.core.logging_manager import handle_cli_error
from . import get_db


@click.command()
@click.pass_context
def init(ctx):
    """Initialize the database (safe to run repeatedly)."""
    try:
        click.echo("🚀 Initializing Daybook database...")
        db = get_db(ctx)
        click.echo(f"🗄️  Database ready at {db.db_path}")
        click.echo("✅ Setup finished!")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "init", additional_context={"db_path": str(ctx.obj["db_path"])})


@click.command()
@click.pass_context
def status(ctx):
    """Show schema and content summary."""
    try:
        db = get_db(ctx)
        summary = db.get_schema_status()

        click.echo(f"\n🗄️  {summary['db_path']}\n")
        click.echo(f"  Tables:      {', '.join(summary['tables'])}")
        index_state = "present" if summary["fts_index"] else "missing"
        click.echo(f"  FTS index:   {index_state}")
        click.echo(f"  Entries:     {summary['entries']}")
        click.echo(f"  In trash:    {summary['deleted_entries']}")
        click.echo(f"  Tags:        {summary['tags']}")
        click.echo(f"  Categories:  {summary['categories']}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "status")
