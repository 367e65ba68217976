"""Shared CLI options for commands that read CSV files."""

import functools

import click

from fintrack.domain.entities import ColumnMapping, ParserOptions

DELIMITERS = {",": ",", ";": ";", "tab": "\t", "|": "|"}
MAPPING_FIELDS = ("date", "description", "amount", "source_category", "notes", "debit", "credit")


def csv_options(func):
    """Add --delimiter, --no-header and --map to a command."""

    @click.option(
        "--delimiter",
        type=click.Choice(list(DELIMITERS)),
        default=",",
        show_default=True,
        help="Field delimiter",
    )
    @click.option("--no-header", is_flag=True, help="The file has no header row")
    @click.option(
        "--map",
        "mappings",
        multiple=True,
        metavar="FIELD=INDEX",
        help=f"Map a field to a 0-based column ({', '.join(MAPPING_FIELDS)}); repeatable",
    )
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper


def build_parser_options(delimiter: str, no_header: bool) -> ParserOptions:
    return ParserOptions(delimiter=DELIMITERS[delimiter], has_header=not no_header)


def build_mapping(mappings: tuple[str, ...]) -> ColumnMapping | None:
    """Turn repeated FIELD=INDEX options into a ColumnMapping (None if none given).

    Raises:
        click.BadParameter: If an entry is malformed or names an unknown field
    """
    if not mappings:
        return None

    values = {}
    for entry in mappings:
        field, sep, index = entry.partition("=")
        field = field.strip().lower()
        if not sep or field not in MAPPING_FIELDS:
            raise click.BadParameter(
                f"'{entry}' must be FIELD=INDEX with FIELD one of: {', '.join(MAPPING_FIELDS)}",
                param_hint="--map",
            )
        values[field] = index.strip()

    try:
        return ColumnMapping.from_dict(values)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--map")
