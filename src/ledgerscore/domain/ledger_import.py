"""Ledger CSV import domain service."""

import csv
import logging
from pathlib import Path

from ledgerscore.domain.entities import ImportResult, LedgerRow
from ledgerscore.domain.errors import ValidationError, missing_ledger_columns
from ledgerscore.utils.amount_parser import parse_amount

logger = logging.getLogger(__name__)

# Normalized header -> LedgerRow field
LEDGER_COLUMNS = {
    "date": "date",
    "duedate": "due_date",
    "number": "number",
    "customername": "customer_name",
    "salesrep": "sales_rep",
    "debit": "debit",
    "credit": "credit",
    "matching": "matching",
}

REQUIRED_COLUMNS = {
    "date": "DATE",
    "number": "NUMBER",
    "customername": "CUSTOMER NAME",
    "debit": "DEBIT",
    "credit": "CREDIT",
}


def normalize_header(header: str) -> str:
    """Lowercase a header and drop spaces, underscores and dashes."""
    return "".join(ch for ch in header.strip().lower() if ch not in " _-")


class LedgerImportService:
    """Service for reading ledger exports.

    Rows are returned to the caller and never stored; the engine recomputes
    everything from the full row set on every run.
    """

    def read_csv(self, csv_file_path: str) -> ImportResult:
        """Read ledger rows from a CSV file.

        Rows without a customer name are skipped silently. Rows whose DEBIT or
        CREDIT cannot be read, or is negative (including "(50.00)"), are left
        out entirely and reported in errors, so they count toward no total.

        Args:
            csv_file_path: Path to CSV file

        Returns:
            ImportResult with the parsed rows and per-row error messages

        Raises:
            ValidationError: If the file has no header or lacks required columns
            FileNotFoundError: If CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        rows: list[LedgerRow] = []
        errors: list[str] = []

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            # Try to detect delimiter
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)
            if reader.fieldnames is None:
                raise ValidationError("Ledger file has no columns")

            column_map = {}
            for column in reader.fieldnames:
                field = LEDGER_COLUMNS.get(normalize_header(column or ""))
                if field is not None and field not in column_map.values():
                    column_map[column] = field

            present = {normalize_header(column) for column in column_map}
            missing = [column for column in REQUIRED_COLUMNS if column not in present]
            if missing:
                raise ValidationError(missing_ledger_columns([REQUIRED_COLUMNS[c] for c in missing]))

            for row_num, record in enumerate(reader, start=2):  # header is row 1
                values = {
                    field: (record.get(column) or "").strip()
                    for column, field in column_map.items()
                }
                if not values.get("customer_name"):
                    continue

                try:
                    debit = parse_amount(values.get("debit"))
                    credit = parse_amount(values.get("credit"))
                except ValueError as e:
                    errors.append(f"Row {row_num}: {e}")
                    continue
                if debit < 0 or credit < 0:
                    errors.append(f"Row {row_num}: Debit and credit must not be negative")
                    continue

                rows.append(
                    LedgerRow(
                        customer_name=values["customer_name"],
                        date=values.get("date", ""),
                        number=values.get("number", ""),
                        debit=debit,
                        credit=credit,
                        due_date=values.get("due_date") or None,
                        matching=values.get("matching") or None,
                        sales_rep=values.get("sales_rep") or None,
                    )
                )

        undated = sum(1 for row in rows if row.parsed_date is None)
        if undated:
            logger.warning(
                "%d of %d rows in %s have no readable date", undated, len(rows), csv_path.name
            )
        if errors:
            logger.warning("Skipped %d rows in %s", len(errors), csv_path.name)
        logger.info("Read %d ledger rows from %s", len(rows), csv_path.name)

        return ImportResult(rows=tuple(rows), errors=tuple(errors))
