"""CLI error handling helpers."""

import click

from fintrack.domain.errors import ColumnMappingError, DomainError, NoValidTransactionsError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure.

    Mapping errors also list the detected headers; "no valid transactions"
    errors also list the rejected rows.
    """
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, ColumnMappingError) and error.headers:
        click.echo("Detected headers:", err=True)
        for index, header in enumerate(error.headers):
            click.echo(f"  {index}: {header}", err=True)
        click.echo("Use --map FIELD=INDEX to map columns manually.", err=True)
    if isinstance(error, NoValidTransactionsError):
        for row_error in error.errors:
            click.echo(f"  {row_error}", err=True)
    ctx.exit(1)
