"""Auto-categorization rule commands."""

import click

from fintrack.cli.error_handling import handle_domain_error
from fintrack.database.base import RULE_KINDS
from fintrack.domain.rule_service import RuleService
from fintrack.domain.rules import CATEGORY_RULE_TYPES, MATCH_TYPES, UNIT_RULE_TYPES

kind_option = click.option(
    "--kind",
    type=click.Choice(RULE_KINDS),
    default="category",
    show_default=True,
    help="Unit rules assign a unit, category rules assign a category",
)


@click.group()
def rule_group():
    """Manage auto-categorization rules."""
    pass


@rule_group.command("add")
@click.argument("pattern")
@click.argument("target_id", type=int)
@kind_option
@click.option(
    "--field",
    "rule_type",
    type=click.Choice(sorted(set(UNIT_RULE_TYPES + CATEGORY_RULE_TYPES))),
    default="description",
    show_default=True,
    help="Transaction field the pattern is tested against",
)
@click.option("--match", "match_type", type=click.Choice(MATCH_TYPES), default="contains", show_default=True)
@click.option("--priority", type=int, help="Lower runs first (default: after the last rule)")
@click.pass_context
def add_rule(
    ctx, pattern: str, target_id: int, kind: str, rule_type: str, match_type: str, priority: int | None
):
    """Create a rule assigning TARGET_ID when PATTERN matches.

    Examples:
        fintrack rule add WALMART 5
        fintrack rule add "^AMZN" 2 --match regex
        fintrack rule add Groceries 5 --field source_category --match exact
        fintrack rule add 3 1 --kind unit --field source --match exact
    """
    service = RuleService(ctx.obj["db"])
    try:
        rule_id = service.create_rule(
            kind=kind,
            rule_type=rule_type,
            pattern=pattern,
            match_type=match_type,
            target_id=target_id,
            priority=priority,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created {kind} rule {rule_id}: {rule_type} {match_type} '{pattern}' -> {target_id}")


@rule_group.command("list")
@kind_option
@click.pass_context
def list_rules(ctx, kind: str):
    """List rules in evaluation order."""
    service = RuleService(ctx.obj["db"])
    rules = service.list_rules(kind)
    if not rules:
        click.echo(f"No {kind} rules found.")
        return

    click.echo(f"\n{kind.capitalize()} rules:")
    click.echo("-" * 70)
    for rule in rules:
        status = "✓" if rule.active else "✗"
        click.echo(
            f"{status} [{rule.priority:3d}] ID: {rule.id:3d} | {rule.rule_type} "
            f"{rule.match_type} '{rule.pattern}' -> {rule.target_id}"
        )


@rule_group.command("toggle")
@click.argument("rule_id", type=int)
@kind_option
@click.pass_context
def toggle_rule(ctx, rule_id: int, kind: str):
    """Activate or deactivate a rule."""
    service = RuleService(ctx.obj["db"])
    try:
        active = service.toggle_rule(kind, rule_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"{kind.capitalize()} rule {rule_id} {'activated' if active else 'deactivated'}")


@rule_group.command("priority")
@click.argument("rule_id", type=int)
@click.argument("priority", type=int)
@kind_option
@click.pass_context
def set_priority(ctx, rule_id: int, priority: int, kind: str):
    """Change the evaluation order of a rule."""
    service = RuleService(ctx.obj["db"])
    try:
        service.set_priority(kind, rule_id, priority)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"{kind.capitalize()} rule {rule_id} priority set to {priority}")


@rule_group.command("delete")
@click.argument("rule_id", type=int)
@kind_option
@click.pass_context
def delete_rule(ctx, rule_id: int, kind: str):
    """Delete a rule."""
    service = RuleService(ctx.obj["db"])
    try:
        service.delete_rule(kind, rule_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted {kind} rule {rule_id}")


@rule_group.command("test")
@click.argument("description")
@click.option("--source-category", help="Bank-provided category")
@click.option("--source", "source_id", type=int, help="Source ID")
@click.pass_context
def test_rules(ctx, description: str, source_category: str | None, source_id: int | None):
    """Show which unit and category the active rules assign to a description."""
    service = RuleService(ctx.obj["db"])
    result = service.test_rules(description, source_category=source_category, source_id=source_id)
    unit = result.unit_id if result.unit_id is not None else "none"
    category = result.category_id if result.category_id is not None else "none"
    click.echo(f"Unit: {unit}")
    click.echo(f"Category: {category}")


def register_commands(cli):
    """Register rule commands with main CLI."""
    cli.add_command(rule_group, name="rule")
