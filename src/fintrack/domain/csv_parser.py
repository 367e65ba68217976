"""CSV parsing for bank exports.

Turns raw CSV text into normalized transactions: splits lines, reads the
mapped cells, normalizes amounts and dates, merges debit/credit columns and
stamps each row with its duplicate-detection hash. Rows that fail are reported
as "Line N: ..." messages and the rest of the file is still processed.
"""

import logging
from decimal import Decimal
from typing import Optional, Sequence

from fintrack.domain import errors
from fintrack.domain.column_mapping import auto_detect_mapping
from fintrack.domain.entities import (
    ColumnMapping,
    ParsedTransaction,
    ParseResult,
    ParserOptions,
    UNMAPPED,
)
from fintrack.domain.errors import ValidationError
from fintrack.utils.amount_parser import parse_amount, consolidate_debit_credit
from fintrack.utils.date_parser import parse_date
from fintrack.utils.hashing import transaction_hash

logger = logging.getLogger(__name__)

QUOTE = '"'


def _split_lines(content: str) -> list[str]:
    stripped = content.strip()
    if not stripped:
        return []
    return stripped.split("\n")


def _cell(fields: Sequence[str], index: int) -> str:
    """Return the cell at index, or "" when unmapped or past the end of the row."""
    if index == UNMAPPED or index < 0 or index >= len(fields):
        return ""
    return fields[index].strip()


class CSVParser:
    """Parser for delimited bank exports."""

    def __init__(self, options: Optional[ParserOptions] = None):
        """Initialize CSV parser.

        Args:
            options: Delimiter and header configuration (defaults: ",", header row)

        Raises:
            ValidationError: If the delimiter is not a single character
        """
        self.options = options or ParserOptions()
        delimiter = self.options.delimiter
        if not isinstance(delimiter, str) or len(delimiter) != 1 or delimiter in (QUOTE, "\n"):
            raise ValidationError(f"Invalid delimiter {delimiter!r}: must be a single character")

    @property
    def delimiter(self) -> str:
        return self.options.delimiter

    @property
    def has_header(self) -> bool:
        return self.options.has_header

    def parse_headers(self, content: str) -> list[str]:
        """Return the fields of the first line, or [] for empty content."""
        lines = _split_lines(content)
        if not lines:
            return []
        return self.parse_line(lines[0])

    def parse_line(self, line: str) -> list[str]:
        """Split one line into trimmed fields.

        A quote toggles quoting, except that a doubled quote inside a quoted
        field is a literal quote. The delimiter only ends a field outside
        quotes.
        """
        result: list[str] = []
        current: list[str] = []
        in_quotes = False
        i = 0
        length = len(line)

        while i < length:
            char = line[i]
            if char == QUOTE:
                if in_quotes and i + 1 < length and line[i + 1] == QUOTE:
                    # Escaped quote
                    current.append(QUOTE)
                    i += 1
                else:
                    in_quotes = not in_quotes
            elif char == self.delimiter and not in_quotes:
                result.append("".join(current).strip())
                current = []
            else:
                current.append(char)
            i += 1

        result.append("".join(current).strip())
        return result

    def auto_detect_mapping(self, headers: Sequence[str]) -> ColumnMapping:
        """Guess the column mapping from parsed headers."""
        return auto_detect_mapping(headers)

    def count_data_rows(self, content: str) -> int:
        """Number of lines after the header (blank lines included)."""
        lines = _split_lines(content)
        if self.has_header:
            return max(len(lines) - 1, 0)
        return len(lines)

    def parse_transactions(
        self, content: str, mapping: ColumnMapping, source_id: int
    ) -> ParseResult:
        """Parse CSV content with a column mapping.

        Args:
            content: Full CSV text
            mapping: Column mapping to read cells with
            source_id: Source the rows belong to (salts the duplicate hash)

        Returns:
            ParseResult with the valid transactions and one error message per
            rejected row; blank lines are skipped without an error
        """
        lines = _split_lines(content)
        transactions: list[ParsedTransaction] = []
        row_errors: list[str] = []

        start = 1 if self.has_header else 0
        for index in range(start, len(lines)):
            line = lines[index].strip()
            if not line:
                continue

            line_number = index + 1
            result = self._parse_row(self.parse_line(line), mapping, source_id, line_number)
            if isinstance(result, ParsedTransaction):
                transactions.append(result)
            else:
                logger.debug("Rejected row: %s", result)
                row_errors.append(result)

        logger.info(
            "Parsed %d transactions with %d row errors (source %s)",
            len(transactions),
            len(row_errors),
            source_id,
        )
        return ParseResult(transactions=transactions, errors=row_errors)

    def _parse_row(
        self, fields: Sequence[str], mapping: ColumnMapping, source_id: int, line_number: int
    ) -> ParsedTransaction | str:
        """Return a ParsedTransaction, or the error message for this row."""
        date_str = _cell(fields, mapping.date)
        description = _cell(fields, mapping.description)

        amount: Optional[Decimal]
        if mapping.uses_debit_credit:
            debit_str = _cell(fields, mapping.debit)
            credit_str = _cell(fields, mapping.credit)
            if not date_str or not description or not (debit_str or credit_str):
                return errors.missing_required_fields(line_number)
            if debit_str and credit_str:
                return errors.ambiguous_debit_credit(line_number, debit_str, credit_str)
            try:
                amount = consolidate_debit_credit(debit_str, credit_str)
            except ValueError:
                return errors.invalid_amount(line_number, debit_str or credit_str)
        else:
            amount_str = _cell(fields, mapping.amount)
            if not date_str or not description or not amount_str:
                return errors.missing_required_fields(line_number)
            try:
                amount = parse_amount(amount_str)
            except ValueError:
                return errors.invalid_amount(line_number, amount_str)

        parsed_date = parse_date(date_str)
        if parsed_date is None:
            return errors.invalid_date(line_number, date_str)

        source_category = _cell(fields, mapping.source_category) or None
        notes = _cell(fields, mapping.notes) or None

        return ParsedTransaction(
            date=parsed_date,
            description=description,
            amount=amount,
            hash=transaction_hash(source_id, parsed_date, description, amount),
            source_category=source_category,
            notes=notes,
        )
