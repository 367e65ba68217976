"""Source, unit and category management commands."""

import click

from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.reference import DEFAULT_COLOR, SOURCE_TYPES, ReferenceService


@click.group()
def source_group():
    """Manage sources (accounts and cards)."""
    pass


@source_group.command("add")
@click.argument("name")
@click.option("--type", "source_type", type=click.Choice(SOURCE_TYPES), default="bank", show_default=True)
@click.pass_context
def add_source(ctx, name: str, source_type: str):
    """Create a new source."""
    service = ReferenceService(ctx.obj["db"])
    try:
        source_id = service.create_source(name=name, source_type=source_type)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created source '{name}' (ID: {source_id})")


@source_group.command("list")
@click.pass_context
def list_sources(ctx):
    """List all sources."""
    service = ReferenceService(ctx.obj["db"])
    sources = service.list_sources()
    if not sources:
        click.echo("No sources found.")
        return

    click.echo("\nSources:")
    click.echo("-" * 60)
    for source in sources:
        click.echo(f"ID: {source.id:3d} | {source.name:20s} | Type: {source.type}")


@click.group()
def unit_group():
    """Manage units (budget buckets)."""
    pass


@unit_group.command("add")
@click.argument("name")
@click.option("--color", default=DEFAULT_COLOR, show_default=True)
@click.option("--description")
@click.pass_context
def add_unit(ctx, name: str, color: str, description: str | None):
    """Create a new unit."""
    service = ReferenceService(ctx.obj["db"])
    try:
        unit_id = service.create_unit(name=name, color=color, description=description)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created unit '{name}' (ID: {unit_id})")


@unit_group.command("list")
@click.pass_context
def list_units(ctx):
    """List all units."""
    service = ReferenceService(ctx.obj["db"])
    units = service.list_units()
    if not units:
        click.echo("No units found.")
        return

    click.echo("\nUnits:")
    click.echo("-" * 60)
    for unit in units:
        status = "" if unit.active else " (inactive)"
        click.echo(f"ID: {unit.id:3d} | {unit.name}{status}")


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("add")
@click.argument("name")
@click.option("--parent", "parent_id", type=int, help="Parent category ID")
@click.option("--color", default=DEFAULT_COLOR, show_default=True)
@click.pass_context
def add_category(ctx, name: str, parent_id: int | None, color: str):
    """Create a new category."""
    service = ReferenceService(ctx.obj["db"])
    try:
        category_id = service.create_category(name=name, color=color, parent_id=parent_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    parent_str = f" under category {parent_id}" if parent_id is not None else ""
    click.echo(f"Created category '{name}'{parent_str} (ID: {category_id})")


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    service = ReferenceService(ctx.obj["db"])
    categories = service.list_categories()
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    click.echo("-" * 60)
    for category in categories:
        parent = f" | Parent: {category.parent_id}" if category.parent_id is not None else ""
        click.echo(f"ID: {category.id:3d} | {category.name}{parent}")


def register_commands(cli):
    """Register source, unit and category commands with main CLI."""
    cli.add_command(source_group, name="source")
    cli.add_command(unit_group, name="unit")
    cli.add_command(category_group, name="category")
