"""CSV import, preview and duplicate lookup commands."""

from pathlib import Path

import click

from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.options import build_mapping, build_parser_options, csv_options
from fintrack.domain.csv_import import CSVImportService, read_csv_file
from fintrack.domain.errors import DomainError


def _describe_mapping(mapping) -> str:
    return ", ".join(f"{field}={index}" for field, index in mapping.to_dict().items() if index >= 0)


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--source", "source_id", required=True, type=int, help="Source ID")
@click.option("--apply-rules", is_flag=True, help="Assign units and categories from rules")
@csv_options
@click.pass_context
def import_csv(
    ctx,
    csv_file: str,
    source_id: int,
    apply_rules: bool,
    delimiter: str,
    no_header: bool,
    mappings: tuple[str, ...],
):
    """Import transactions from a CSV file.

    Examples:
        fintrack import export.csv --source 1
        fintrack import export.csv --source 1 --delimiter ";" --apply-rules
        fintrack import export.csv --source 1 --map date=0 --map description=3 --map amount=5
    """
    db = ctx.obj["db"]
    service = CSVImportService(db, options=build_parser_options(delimiter, no_header))
    mapping = build_mapping(mappings)

    try:
        content = read_csv_file(csv_file)
        result = service.import_csv(
            content,
            source_id=source_id,
            mapping=mapping,
            apply_rules=apply_rules,
            file_name=Path(csv_file).name,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result['imported']} transactions")
    click.echo(f"  Skipped: {result['skipped']} duplicates")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)
    if result["import_errors"]:
        click.echo(f"  Failed to store: {len(result['import_errors'])}")
        for failure in result["import_errors"]:
            click.echo(f"    {failure['description']}: {failure['error']}", err=True)


@click.command("preview")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@csv_options
@click.pass_context
def preview_csv(ctx, csv_file: str, delimiter: str, no_header: bool, mappings: tuple[str, ...]):
    """Preview how a CSV file would be imported, without storing anything."""
    db = ctx.obj["db"]
    service = CSVImportService(db, options=build_parser_options(delimiter, no_header))
    mapping = build_mapping(mappings)

    try:
        content = read_csv_file(csv_file)
        result = service.preview_csv(content, mapping=mapping)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    if result["headers"]:
        click.echo(f"Headers: {', '.join(result['headers'])}")
    click.echo(f"Mapping: {_describe_mapping(result['mapping'])}")
    if result["missing_fields"]:
        click.echo(f"Missing required fields: {', '.join(result['missing_fields'])}")
    click.echo(f"Rows in file: {result['total_rows']}")

    if result["preview"]:
        click.echo("\nPreview:")
        click.echo("-" * 80)
        for row in result["preview"]:
            suggestions = []
            if "suggested_unit_id" in row:
                suggestions.append(f"unit {row['suggested_unit_id']}")
            if "suggested_category_id" in row:
                suggestions.append(f"category {row['suggested_category_id']}")
            suffix = f" -> {', '.join(suggestions)}" if suggestions else ""
            click.echo(f"{row['date']} | {row['amount']:>12s} | {row['description']}{suffix}")

    if result["errors"]:
        click.echo(f"\nErrors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"  {error}")


@click.command("duplicates")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--source", "source_id", required=True, type=int, help="Source ID")
@csv_options
@click.pass_context
def list_duplicates(
    ctx, csv_file: str, source_id: int, delimiter: str, no_header: bool, mappings: tuple[str, ...]
):
    """List rows of a CSV file that were already imported for a source."""
    db = ctx.obj["db"]
    service = CSVImportService(db, options=build_parser_options(delimiter, no_header))
    mapping = build_mapping(mappings)

    try:
        content = read_csv_file(csv_file)
        duplicates, total = service.duplicate_rows(content, source_id=source_id, mapping=mapping)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    if not duplicates:
        click.echo(f"None of the {total} rows have been imported yet.")
        return

    click.echo(f"{len(duplicates)} of {total} rows already imported:")
    for row in duplicates:
        click.echo(f"{row.date} | {row.to_dict()['amount']:>12s} | {row.description}")


def register_commands(cli):
    """Register import, preview and duplicates commands with main CLI."""
    cli.add_command(import_csv)
    cli.add_command(preview_csv)
    cli.add_command(list_duplicates)
