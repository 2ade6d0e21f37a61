#!/usr/bin/env python3
"""
cli.py
------
Standalone CLI for full-text search, filtering and calendar views.

Commands:
    daybook-search query "search text" [--limit N]
    daybook-search filter [TEXT] --tag NAME --mood MOOD --since DAY --until DAY
    daybook-search calendar YEAR MONTH
    daybook-search day YYYY-MM-DD
    daybook-search index rebuild
    daybook-search index status

Examples:
    # Prefix search over titles and content
    daybook-search query "sunr walk"

    # Entries tagged 'family' OR 'travel' with a good mood in November
    daybook-search filter --tag family --tag travel --mood good \\
        --since 2024-11-01 --until 2024-11-30

    # Month overview with the dominant mood of each day
    daybook-search calendar 2024 11
"""
import calendar as calendar_module
from pathlib import Path
from typing import Optional

import click

from daybook.core.cli import echo_entry_line, setup_logger
from daybook.core.exceptions import DatabaseError, ValidationError
from daybook.core.logging_manager import JournalLogger, handle_cli_error
from daybook.core.paths import DB_PATH, LOG_DIR
from daybook.database.models import Mood
from daybook.utils.dates import to_local


def _open_db(ctx: click.Context):
    """Get or create the initialized database instance from context."""
    from daybook.database.manager import JournalDB

    if "db" not in ctx.obj:
        db = JournalDB(db_path=ctx.obj["db_path"], log_dir=ctx.obj["log_dir"])
        db.initialize()
        ctx.obj["db"] = db
    return ctx.obj["db"]


@click.group()
@click.option("--db-path", type=click.Path(), default=str(DB_PATH), help="Path to database file")
@click.option("--log-dir", type=click.Path(), default=str(LOG_DIR), help="Directory for log files")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed errors and tracebacks")
@click.pass_context
def cli(ctx: click.Context, db_path: str, log_dir: str, verbose: bool) -> None:
    """
    Full-text search and filtering of journal entries.

    Uses SQLite's FTS5 engine: every word is matched as a prefix and all
    words must appear. Search syntax characters are ignored. When the
    index cannot answer a query, a plain substring search is used.

    Examples:
        daybook-search query "coffee sam"
        daybook-search filter --mood great
        daybook-search index rebuild
    """
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "search")


@cli.command("query")
@click.argument("query", nargs=-1, required=True)
@click.option("--limit", type=int, default=50, show_default=True, help="Maximum results")
@click.pass_context
def search_query(ctx: click.Context, query: tuple, limit: int) -> None:
    """
    Search entry titles and content.

    Matches are shown with a highlighted snippet (matches wrapped
    in << >>), best match first.

    Examples:
        daybook-search query sunrise
        daybook-search query "morning run" --limit 10
    """
    logger: JournalLogger = ctx.obj["logger"]
    query_string = " ".join(query)

    try:
        db = _open_db(ctx)
        with db.session_scope():
            results = db.search.search_with_snippets(query_string, limit=limit)
    except DatabaseError as e:
        handle_cli_error(ctx, e, "search_query", additional_context={"query": query_string})
        return

    logger.log_operation("search_query", {"query": query_string, "results": len(results)})

    if not results:
        click.echo("No results found.")
        return

    click.echo(f"Found {len(results)} results:\n")
    for result in results:
        mood = f" {result.mood.emoji}" if result.mood else ""
        click.echo(f"📅 {to_local(result.created_at):%Y-%m-%d}  {result.title}{mood}  [{result.id[:8]}]")
        if result.snippet:
            click.echo(f"   {result.snippet.replace(chr(10), ' ').strip()}")
        if result.tags:
            click.echo(f"   #{' #'.join(t.name for t in result.tags)}")
        click.echo()

    if len(results) == limit:
        click.echo(f"(Showing first {limit} results. Use --limit to see more)")


@cli.command("filter")
@click.argument("query", nargs=-1)
@click.option("--tag", "tag_names", multiple=True, help="Tag name; several tags match any of them")
@click.option("--mood", type=click.Choice(Mood.choices()), help="Mood")
@click.option("--since", help="First day (YYYY-MM-DD)")
@click.option("--until", help="Last day (YYYY-MM-DD, inclusive)")
@click.option("--limit", type=int, default=50, show_default=True, help="Maximum results")
@click.pass_context
def search_filter(
    ctx: click.Context,
    query: tuple,
    tag_names: tuple,
    mood: Optional[str],
    since: Optional[str],
    until: Optional[str],
    limit: int,
) -> None:
    """
    Combine optional search text with tag, mood and date filters.

    All given filters must hold; repeated --tag options match entries
    carrying any of those tags.
    """
    from daybook.search.search_engine import SearchFilters

    query_string = " ".join(query)
    try:
        db = _open_db(ctx)
        with db.session_scope():
            tag_ids = []
            for name in tag_names:
                found = db.tags.get_by_name(name)
                if found is None:
                    click.echo(f"⚠️  Unknown tag ignored: {name}", err=True)
                    continue
                tag_ids.append(found.id)
            if tag_names and not tag_ids:
                click.echo("No results found.")
                return

            filters = SearchFilters(tag_ids=tag_ids, mood=mood, start_date=since, end_date=until)
            entries = db.search.search_with_filters(query_string, filters, limit=limit)

            if not entries:
                click.echo("No results found.")
                return

            click.echo(f"Found {len(entries)} entries:\n")
            for entry in entries:
                echo_entry_line(entry)

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "search_filter", additional_context={"query": query_string})


@cli.command("calendar")
@click.argument("year", type=int)
@click.argument("month", type=click.IntRange(1, 12))
@click.pass_context
def search_calendar(ctx: click.Context, year: int, month: int) -> None:
    """
    Show a month with the dominant mood of each day.

    Days with entries but no mood are marked with a dot.
    """
    from daybook.database.models import dominant_mood

    try:
        db = _open_db(ctx)
        with db.session_scope():
            days = db.search.get_dates_with_entries(year, month)
            moods = db.search.get_moods_by_date(year, month)
    except DatabaseError as e:
        handle_cli_error(ctx, e, "search_calendar", additional_context={"year": year, "month": month})
        return

    click.echo(f"\n{calendar_module.month_name[month]} {year}\n")
    click.echo("  ".join(f"{name[:2]:>3}" for name in calendar_module.day_abbr))
    for week in calendar_module.Calendar().monthdayscalendar(year, month):
        cells = []
        for day in week:
            if day == 0:
                cells.append("   ")
                continue
            mood = dominant_mood(moods.get(day, []))
            marker = mood.emoji if mood else ("•" if day in days else " ")
            cells.append(f"{day:2d}{marker}")
        click.echo("  ".join(cells))

    click.echo(f"\n{len(days)} days with entries")


@cli.command("day")
@click.argument("day")
@click.pass_context
def search_day(ctx: click.Context, day: str) -> None:
    """List entries written on a local calendar day (YYYY-MM-DD)."""
    try:
        db = _open_db(ctx)
        with db.session_scope():
            entries = db.search.get_entries_by_date(day)
            if not entries:
                click.echo(f"No entries on {day}.")
                return
            for entry in entries:
                echo_entry_line(entry)

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "search_day", additional_context={"day": day})


@cli.group("index")
@click.pass_context
def index_group(ctx: click.Context) -> None:
    """
    Manage the full-text search index.

    The index is created and kept in sync automatically. These commands
    repair it after manual edits of the database file.

    Commands:
        rebuild  - Repopulate the index from all entries
        status   - Check the index exists and is consistent
    """
    pass


@index_group.command("rebuild")
@click.pass_context
def index_rebuild(ctx: click.Context) -> None:
    """Rebuild the index from the entries table."""
    logger: JournalLogger = ctx.obj["logger"]
    try:
        db = _open_db(ctx)
        click.echo("🔄 Rebuilding search index...")
        count = db.search_index.rebuild_index()
        logger.log_operation("index_rebuild", {"entries": count})
        click.echo(f"✅ Indexed {count} entries")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "index_rebuild")


@index_group.command("status")
@click.pass_context
def index_status(ctx: click.Context) -> None:
    """Report whether the index exists and passes its integrity check."""
    try:
        db = _open_db(ctx)
        if not db.search_index.index_exists():
            click.echo("❌ Search index missing. Run: daybook-search index rebuild")
            return

        if db.search_index.check_integrity():
            click.echo("✅ Search index present and consistent")
        else:
            click.echo("⚠️  Search index inconsistent. Run: daybook-search index rebuild")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "index_status")
