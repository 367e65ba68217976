"""CSV import domain service."""

import logging
from typing import Any, Iterable, Optional
from pathlib import Path

from fintrack.database.base import Database
from fintrack.domain import errors
from fintrack.domain.csv_parser import CSVParser
from fintrack.domain.entities import ColumnMapping, ParsedTransaction, ParseResult, ParserOptions
from fintrack.domain.errors import (
    ColumnMappingError,
    EmptyFileError,
    NoValidTransactionsError,
    ValidationError,
)
from fintrack.domain.reference import ReferenceService
from fintrack.domain.rule_service import RuleService

logger = logging.getLogger(__name__)

PREVIEW_SAMPLE_ROWS = 20
PREVIEW_LIMIT = 10
RETURNED_TRANSACTION_IDS = 10
PREVIEW_SOURCE_ID = 0


def read_csv_file(csv_file_path: str) -> str:
    """Read a CSV export as UTF-8 text (a leading BOM is dropped).

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the file is not valid UTF-8
    """
    csv_path = Path(csv_file_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_file_path}")
    try:
        with open(csv_path, "r", encoding="utf-8-sig") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise ValidationError(f"Could not read '{csv_path.name}': not a UTF-8 text file ({e.reason})")


class CSVImportService:
    """Service for previewing and importing CSV bank exports."""

    def __init__(self, db: Database, options: Optional[ParserOptions] = None):
        """Initialize CSV import service.

        Args:
            db: Database instance
            options: Parser configuration used for every file handled by this service
        """
        self.db = db
        self.options = options or ParserOptions()
        self.reference_service = ReferenceService(db)
        self.rule_service = RuleService(db)

    def _resolve_mapping(
        self, parser: CSVParser, content: str, mapping: Optional[ColumnMapping]
    ) -> tuple[list[str], ColumnMapping]:
        """Return (headers, mapping), auto-detecting when no mapping is given."""
        headers = parser.parse_headers(content) if parser.has_header else []
        if mapping is None:
            if not parser.has_header:
                raise ColumnMappingError(
                    "A column mapping is required for files without a header row",
                    headers=headers,
                    mapping=None,
                )
            mapping = parser.auto_detect_mapping(headers)
        return headers, mapping

    def _parse_for_source(
        self, content: str, source_id: int, mapping: Optional[ColumnMapping]
    ) -> tuple[ColumnMapping, ParseResult]:
        """Validate and parse a whole file for a stored source."""
        self.reference_service.require_source(source_id)

        if not content or not content.strip():
            raise EmptyFileError()

        parser = CSVParser(self.options)
        headers, mapping = self._resolve_mapping(parser, content, mapping)

        missing = mapping.missing_required_fields()
        if missing:
            raise ColumnMappingError(
                errors.unmapped_columns(missing), headers=headers, mapping=mapping
            )

        result = parser.parse_transactions(content, mapping, source_id)
        if not result.transactions:
            raise NoValidTransactionsError(result.errors)
        return mapping, result

    def import_csv(
        self,
        content: str,
        source_id: int,
        mapping: Optional[ColumnMapping] = None,
        apply_rules: bool = False,
        file_name: Optional[str] = None,
    ) -> dict[str, Any]:
        """Import transactions from CSV content.

        Args:
            content: Full CSV text
            source_id: Source the file was exported from
            mapping: Manual column mapping; auto-detected from headers if None
            apply_rules: Assign unit and category from the stored rules
            file_name: Original file name, recorded in the import log

        Returns:
            Dict with import statistics:
            - imported: number of transactions imported
            - skipped: number of transactions skipped (duplicates)
            - total: number of valid rows in the file
            - errors: list of row-level error messages
            - import_errors: list of {"hash", "description", "error"} for rows
              that parsed but could not be stored
            - import_log_id: ID of the import log entry
            - transaction_ids: IDs of the first imported transactions

        Raises:
            NotFoundError: If the source doesn't exist
            EmptyFileError: If the content is empty
            ColumnMappingError: If required columns can't be determined
            NoValidTransactionsError: If every row was rejected
        """
        mapping, result = self._parse_for_source(content, source_id, mapping)

        engine = self.rule_service.build_engine() if apply_rules else None

        imported = 0
        skipped = 0
        import_errors = []
        transaction_ids = []

        for parsed in result.transactions:
            if self.db.get_transaction_by_hash(parsed.hash) is not None:
                logger.debug("Skipping duplicate transaction with hash %s", parsed.hash)
                skipped += 1
                continue

            unit_id = None
            category_id = None
            if engine is not None:
                classification = engine.classify(
                    parsed.description,
                    source_category=parsed.source_category,
                    source_id=source_id,
                )
                unit_id = classification.unit_id
                category_id = classification.category_id

            try:
                transaction_id = self.db.create_transaction(
                    source_id=source_id,
                    date=parsed.date,
                    description=parsed.description,
                    amount=parsed.amount,
                    hash=parsed.hash,
                    unit_id=unit_id,
                    category_id=category_id,
                    source_category=parsed.source_category,
                    notes=parsed.notes,
                )
            except Exception as e:
                logger.exception("Error storing transaction %s", parsed.hash)
                import_errors.append(
                    {"hash": parsed.hash, "description": parsed.description, "error": str(e)}
                )
                continue

            imported += 1
            transaction_ids.append(transaction_id)

        import_log_id = self.db.create_import_log(
            source_id=source_id,
            file_name=file_name,
            transactions_added=imported,
            transactions_skipped=skipped,
            status="partial" if import_errors else "success",
            metadata={
                "total_in_file": len(result.transactions),
                "parse_errors": len(result.errors),
                "import_errors": len(import_errors),
                "mapping": mapping.to_dict(),
                "apply_rules": apply_rules,
            },
        )

        logger.info(
            "Imported %d, skipped %d duplicates, %d row errors (source %s)",
            imported,
            skipped,
            len(result.errors),
            source_id,
        )

        return {
            "imported": imported,
            "skipped": skipped,
            "total": len(result.transactions),
            "errors": result.errors,
            "import_errors": import_errors,
            "import_log_id": import_log_id,
            "transaction_ids": transaction_ids[:RETURNED_TRANSACTION_IDS],
        }

    def preview_csv(
        self, content: str, mapping: Optional[ColumnMapping] = None
    ) -> dict[str, Any]:
        """Dry-run the import on the first rows of a file.

        Nothing is stored. Rows are hashed with source ID 0.

        Returns:
            Dict with:
            - headers: parsed header row ([] without a header)
            - mapping: the mapping used (auto-detected if none given)
            - missing_fields: required fields the mapping lacks
            - total_rows: number of data lines in the file
            - preview: up to 10 parsed rows, each with suggested_unit_id /
              suggested_category_id when a rule matches
            - errors: row-level errors within the sampled rows

        Raises:
            EmptyFileError: If the content is empty
            ColumnMappingError: If there is no header row and no mapping
        """
        if not content or not content.strip():
            raise EmptyFileError()

        parser = CSVParser(self.options)
        headers, mapping = self._resolve_mapping(parser, content, mapping)

        lines = content.strip().split("\n")
        sample_size = PREVIEW_SAMPLE_ROWS + (1 if parser.has_header else 0)
        sample = "\n".join(lines[:sample_size])
        result = parser.parse_transactions(sample, mapping, PREVIEW_SOURCE_ID)

        engine = self.rule_service.build_engine()
        preview = []
        for parsed in result.transactions[:PREVIEW_LIMIT]:
            row = parsed.to_dict()
            classification = engine.classify(
                parsed.description,
                source_category=parsed.source_category,
                source_id=PREVIEW_SOURCE_ID,
            )
            if classification.unit_id is not None:
                row["suggested_unit_id"] = classification.unit_id
            if classification.category_id is not None:
                row["suggested_category_id"] = classification.category_id
            preview.append(row)

        return {
            "headers": headers,
            "mapping": mapping,
            "missing_fields": mapping.missing_required_fields(),
            "total_rows": parser.count_data_rows(content),
            "preview": preview,
            "errors": result.errors,
        }

    def find_duplicates(self, hashes: Iterable[str]) -> list[str]:
        """Return the hashes that already belong to a stored transaction."""
        return [h for h in hashes if self.db.get_transaction_by_hash(h) is not None]

    def duplicate_rows(
        self, content: str, source_id: int, mapping: Optional[ColumnMapping] = None
    ) -> tuple[list[ParsedTransaction], int]:
        """Parse a file for a source and report the rows already imported.

        Returns:
            (rows whose hash is already stored, number of valid rows in the file)

        Raises:
            The same errors as import_csv, before anything is stored
        """
        _, result = self._parse_for_source(content, source_id, mapping)
        stored = set(self.find_duplicates(parsed.hash for parsed in result.transactions))
        duplicates = [parsed for parsed in result.transactions if parsed.hash in stored]
        return duplicates, len(result.transactions)
