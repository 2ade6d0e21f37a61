"""
Tag Commands
------------

Manage tags. Names are stored trimmed and lowercased, and must be
unique regardless of case.

Commands:
    - add: Create a tag
    - list: List tags with entry counts
    - rename: Rename a tag
    - delete: Delete a tag (entries keep existing)
"""
import click

from daybook.core.exceptions import DatabaseError, NotFoundError, ValidationError
from daybook.core.logging_manager import handle_cli_error
from . import get_db


def _require_tag(db, name: str):
    tag = db.tags.get_by_name(name)
    if tag is None:
        raise NotFoundError(f"Tag not found: {name}")
    return tag


@click.group()
@click.pass_context
def tag(ctx: click.Context) -> None:
    """Manage tags."""
    pass


@tag.command("add")
@click.argument("name")
@click.option("--color", help="Display color (e.g. #0D9488)")
@click.pass_context
def add(ctx, name, color):
    """Create a tag."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            created = db.tags.create({"name": name, "color": color})
            click.echo(f"✅ Created tag: {created.name}")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "tag_add", additional_context={"name": name})


@tag.command("list")
@click.pass_context
def list_tags(ctx):
    """List tags alphabetically with their entry counts."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            tags = db.tags.get_all()
            if not tags:
                click.echo("No tags yet.")
                return

            click.echo(f"\n🏷️  Tags ({len(tags)}):\n")
            for item in tags:
                count = db.tags.get_entry_count_for_tag(item.id)
                click.echo(f"  {item.name:<24} {count:4d} entries")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "tag_list")


@tag.command("rename")
@click.argument("old_name")
@click.argument("new_name")
@click.pass_context
def rename(ctx, old_name, new_name):
    """Rename a tag."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            updated = db.tags.update(_require_tag(db, old_name).id, {"name": new_name})
            click.echo(f"✅ Renamed tag: {old_name} → {updated.name}")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(
            ctx, e, "tag_rename", additional_context={"old_name": old_name, "new_name": new_name}
        )


@tag.command("delete")
@click.argument("name")
@click.pass_context
def delete(ctx, name):
    """Delete a tag; tagged entries are kept."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            db.tags.delete(_require_tag(db, name).id)
        click.echo(f"🗑️  Deleted tag: {name}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "tag_delete", additional_context={"name": name})
