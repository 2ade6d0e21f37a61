"""
Category Commands
-----------------

Manage categories. A fresh database starts with five defaults
(Personal, Work, Book Notes, Travel, Gratitude).

Commands:
    - add: Create a category
    - list: List categories in display order
    - delete: Delete a category (its entries become uncategorized)
    - reorder: Set the display order
"""
import click

from daybook.core.exceptions import DatabaseError, NotFoundError, ValidationError
from daybook.core.logging_manager import handle_cli_error
from . import get_db


def _require_category(db, name: str):
    category = db.categories.get_by_name(name)
    if category is None:
        raise NotFoundError(f"Category not found: {name}")
    return category


@click.group()
@click.pass_context
def category(ctx: click.Context) -> None:
    """Manage categories."""
    pass


@category.command("add")
@click.argument("name")
@click.option("--icon", help="Icon identifier")
@click.option("--color", help="Display color (e.g. #6366F1)")
@click.option("--position", type=int, help="Sort position (default: last)")
@click.pass_context
def add(ctx, name, icon, color, position):
    """Create a category."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            created = db.categories.create(
                {"name": name, "icon": icon, "color": color, "sort_order": position}
            )
            click.echo(f"✅ Created category: {created.name} (position {created.sort_order})")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "category_add", additional_context={"name": name})


@category.command("list")
@click.pass_context
def list_categories(ctx):
    """List categories in display order with their entry counts."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            categories = db.categories.get_all()
            if not categories:
                click.echo("No categories.")
                return

            click.echo(f"\n📂 Categories ({len(categories)}):\n")
            for item in categories:
                count = len(db.entries.get_by_category(item.id))
                click.echo(f"  {item.sort_order:2d}. {item.name:<20} {count:4d} entries")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "category_list")


@category.command("delete")
@click.argument("name")
@click.pass_context
def delete(ctx, name):
    """Delete a category; its entries become uncategorized."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            db.categories.delete(_require_category(db, name).id)
        click.echo(f"🗑️  Deleted category: {name}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "category_delete", additional_context={"name": name})


@category.command("reorder")
@click.argument("names", nargs=-1, required=True)
@click.pass_context
def reorder(ctx, names):
    """
    Set the display order by listing category names first to last.

    Categories not named keep their current positions.
    """
    try:
        db = get_db(ctx)
        with db.session_scope():
            ids = [_require_category(db, name).id for name in names]
            db.categories.reorder(ids)
        click.echo(f"✅ New order: {', '.join(names)}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "category_reorder", additional_context={"names": list(names)})
