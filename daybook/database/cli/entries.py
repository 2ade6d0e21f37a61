"""
Entry Commands
--------------

Create, browse, edit and delete journal entries.

Entries are addressed by id or by any unique id prefix (the 8-character
prefix shown by 'entry list' is enough). Tags and categories are
addressed by name.

Commands:
    - add: Write a new entry
    - list: List entries, optionally filtered
    - show: Display a single entry
    - edit: Change fields of an entry
    - delete: Move an entry to the trash
    - restore: Take an entry out of the trash
    - trash: List entries in the trash
    - purge: Permanently remove old trash
    - remove: Permanently remove one entry
"""
import sys
from typing import List, Optional

import click
from sqlalchemy import select

from daybook.core.config import TRASH_RETENTION_DAYS
from daybook.core.exceptions import DatabaseError, NotFoundError, ValidationError
from daybook.core.cli import echo_entry_line
from daybook.core.logging_manager import handle_cli_error
from daybook.database.managers import EntryPatch
from daybook.database.models import Entry, Mood
from daybook.utils.dates import group_entries_by_date, storage_bound, to_local
from daybook.utils.text import get_preview
from . import get_db


def resolve_entry_id(session, id_or_prefix: str) -> str:
    """
    Expand an id prefix to the full entry id.

    Raises:
        NotFoundError: If nothing or more than one entry matches
    """
    stmt = select(Entry.id).where(Entry.id.startswith(id_or_prefix, autoescape=True))
    matches = list(session.scalars(stmt.limit(2)))
    if len(matches) != 1:
        reason = "ambiguous id prefix" if matches else "Entry not found"
        raise NotFoundError(f"{reason}: {id_or_prefix}")
    return matches[0]


def _tag_ids_for_names(db, names) -> List[str]:
    """Look up tags by name, creating the missing ones."""
    ids = []
    for name in names:
        tag = db.tags.get_by_name(name) or db.tags.create({"name": name})
        ids.append(tag.id)
    return ids


def _category_id_for_name(db, name: str) -> str:
    category = db.categories.get_by_name(name)
    if category is None:
        raise NotFoundError(f"Category not found: {name}")
    return category.id


@click.group()
@click.pass_context
def entry(ctx: click.Context) -> None:
    """Create, browse and delete journal entries."""
    pass


@entry.command("add")
@click.option("--title", default="", help="Entry title (derived from content if omitted)")
@click.option("--content", help="Entry text (read from stdin if omitted)")
@click.option("--mood", type=click.Choice(Mood.choices()), help="Mood of the day")
@click.option("--category", "category_name", help="Category name")
@click.option("--tag", "tag_names", multiple=True, help="Tag name (repeatable, created if missing)")
@click.pass_context
def add(ctx, title, content, mood, category_name, tag_names):
    """Write a new entry."""
    if content is None:
        content = "" if sys.stdin.isatty() else sys.stdin.read()

    try:
        db = get_db(ctx)
        with db.session_scope():
            metadata = {
                "title": title,
                "content": content,
                "mood": mood,
                "tag_ids": _tag_ids_for_names(db, tag_names),
            }
            if category_name:
                metadata["category_id"] = _category_id_for_name(db, category_name)

            created = db.entries.create(metadata)
            click.echo(f"✅ Created entry {created.id[:8]}: {created.title}")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "entry_add")


@entry.command("list")
@click.option("--tag", "tag_name", help="Only entries with this tag")
@click.option("--mood", type=click.Choice(Mood.choices()), help="Only entries with this mood")
@click.option("--category", "category_name", help="Only entries in this category")
@click.option("--since", help="Earliest day (YYYY-MM-DD)")
@click.option("--until", help="Latest day (YYYY-MM-DD, inclusive)")
@click.option("--limit", type=int, default=None, help="Maximum entries to show")
@click.option("--preview", is_flag=True, help="Show the opening of each entry")
@click.pass_context
def list_entries(ctx, tag_name, mood, category_name, since, until, limit, preview):
    """List entries, newest first."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            entries = db.entries.get_all()

            lower = storage_bound(since)
            upper = storage_bound(until, end_of_day=True)
            if lower is not None:
                entries = [e for e in entries if e.created_at >= lower]
            if upper is not None:
                entries = [e for e in entries if e.created_at <= upper]

            if tag_name:
                tag = db.tags.get_by_name(tag_name)
                tag_id = tag.id if tag else None
                entries = [e for e in entries if tag_id in e.tag_ids]
            if mood:
                entries = [e for e in entries if e.mood == Mood(mood)]
            if category_name:
                category_id = _category_id_for_name(db, category_name)
                entries = [e for e in entries if e.category_id == category_id]

            if not entries:
                click.echo("No entries found.")
                return

            for day, items in group_entries_by_date(entries[:limit]).items():
                click.echo(f"\n📅 {day}")
                for item in items:
                    echo_entry_line(item)
                    if preview and item.content:
                        click.echo(f"          {get_preview(item.content)}")

            if limit and len(entries) > limit:
                click.echo(f"\n(Showing {limit} of {len(entries)} entries)")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "entry_list")


@entry.command("show")
@click.argument("entry_id")
@click.pass_context
def show(ctx, entry_id):
    """Display a single entry."""
    try:
        db = get_db(ctx)
        with db.session_scope() as session:
            item = db.entries.get_by_id(resolve_entry_id(session, entry_id))

            click.echo(f"\n📝 {item.title}")
            click.echo(f"🆔 {item.id}")
            click.echo(f"📅 {to_local(item.created_at).strftime('%Y-%m-%d %H:%M')}")
            if item.updated_at != item.created_at:
                click.echo(f"✏️  {to_local(item.updated_at).strftime('%Y-%m-%d %H:%M')}")
            if item.mood:
                click.echo(f"{item.mood.emoji} {item.mood.display_name}")
            if item.category:
                click.echo(f"📂 {item.category.name}")
            if item.tags:
                click.echo(f"🏷️  {', '.join(t.name for t in item.tags)}")
            if item.is_deleted:
                click.echo(f"🗑️  In trash since {to_local(item.deleted_at).strftime('%Y-%m-%d')}")
            click.echo(f"\n{item.content}\n")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "entry_show", additional_context={"entry_id": entry_id})


@entry.command("edit")
@click.argument("entry_id")
@click.option("--title", help="New title (empty derives one from content)")
@click.option("--content", help="New text")
@click.option("--mood", type=click.Choice(Mood.choices()), help="New mood")
@click.option("--clear-mood", is_flag=True, help="Remove the mood")
@click.option("--category", "category_name", help="New category name")
@click.option("--clear-category", is_flag=True, help="Remove the category")
@click.option("--tag", "tag_names", multiple=True, help="Replace tags (repeatable)")
@click.option("--clear-tags", is_flag=True, help="Remove all tags")
@click.pass_context
def edit(
    ctx,
    entry_id,
    title: Optional[str],
    content: Optional[str],
    mood: Optional[str],
    clear_mood: bool,
    category_name: Optional[str],
    clear_category: bool,
    tag_names,
    clear_tags: bool,
):
    """Change fields of an entry; unspecified fields are kept."""
    try:
        db = get_db(ctx)
        with db.session_scope() as session:
            patch = EntryPatch()
            if title is not None:
                patch.title = title
            if content is not None:
                patch.content = content
            if mood or clear_mood:
                patch.mood = None if clear_mood else mood
            if category_name or clear_category:
                patch.category_id = (
                    None if clear_category else _category_id_for_name(db, category_name)
                )
            if tag_names or clear_tags:
                patch.tag_ids = [] if clear_tags else _tag_ids_for_names(db, tag_names)

            if patch.is_empty():
                click.echo("Nothing to change.")
                return

            updated = db.entries.update(resolve_entry_id(session, entry_id), patch)
            click.echo(f"✅ Updated entry {updated.id[:8]} (version {updated.sync_version})")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "entry_edit", additional_context={"entry_id": entry_id})


@entry.command("delete")
@click.argument("entry_id")
@click.pass_context
def delete(ctx, entry_id):
    """Move an entry to the trash."""
    try:
        db = get_db(ctx)
        with db.session_scope() as session:
            deleted = db.entries.soft_delete(resolve_entry_id(session, entry_id))
            click.echo(f"🗑️  Moved to trash: {deleted.title}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "entry_delete", additional_context={"entry_id": entry_id})


@entry.command("restore")
@click.argument("entry_id")
@click.pass_context
def restore(ctx, entry_id):
    """Take an entry out of the trash."""
    try:
        db = get_db(ctx)
        with db.session_scope() as session:
            restored = db.entries.restore(resolve_entry_id(session, entry_id))
            click.echo(f"♻️  Restored: {restored.title}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "entry_restore", additional_context={"entry_id": entry_id})


@entry.command("trash")
@click.pass_context
def trash(ctx):
    """List entries in the trash, most recently deleted first."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            deleted = db.entries.get_deleted()
            if not deleted:
                click.echo("Trash is empty.")
                return
            for item in deleted:
                echo_entry_line(item)
            click.echo(f"\n{len(deleted)} entries in trash")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "entry_trash")


@entry.command("purge")
@click.option(
    "--days",
    type=int,
    default=TRASH_RETENTION_DAYS,
    show_default=True,
    help="Remove entries deleted more than this many days ago",
)
@click.confirmation_option(prompt="⚠️  Permanently remove old entries from the trash?")
@click.pass_context
def purge(ctx, days):
    """Permanently remove entries that stayed in the trash too long."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            removed = db.entries.purge_old_deleted(days=days)
        click.echo(f"✅ Purged {removed} entries")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "entry_purge", additional_context={"days": days})


@entry.command("remove")
@click.argument("entry_id")
@click.confirmation_option(prompt="⚠️  This will permanently delete the entry! Are you sure?")
@click.pass_context
def remove(ctx, entry_id):
    """Permanently delete one entry (DANGEROUS - cannot be undone)."""
    try:
        db = get_db(ctx)
        with db.session_scope() as session:
            full_id = resolve_entry_id(session, entry_id)
            db.entries.permanent_delete(full_id)
        click.echo(f"✅ Removed entry {full_id[:8]}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "entry_remove", additional_context={"entry_id": entry_id})
