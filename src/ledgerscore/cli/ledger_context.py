"""CLI helpers for loading a ledger and resolving the reference date."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

import click

from ledgerscore.cli.error_handling import exit_with_error, handle_domain_error
from ledgerscore.domain.analysis import LedgerAnalysisService
from ledgerscore.domain.entities import (
    CustomerReport,
    LedgerAnalysis,
    LedgerRow,
    ReferenceLists,
)
from ledgerscore.domain.errors import DomainError, customer_not_found
from ledgerscore.domain.ledger_import import LedgerImportService
from ledgerscore.domain.reference_lists import ReferenceListService
from ledgerscore.utils.date_parser import parse_date


@dataclass(frozen=True)
class LoadedLedger:
    rows: tuple[LedgerRow, ...]
    reference_lists: ReferenceLists
    analysis: LedgerAnalysis

    def require_customer(self, ctx: click.Context, customer_name: str) -> CustomerReport:
        """Look up a customer report or exit with an error."""
        report = self.analysis.customer(customer_name)
        if report is None:
            exit_with_error(ctx, customer_not_found(customer_name))
        return report


def resolve_today(ctx: click.Context, today: Optional[str]) -> date:
    """Resolve the --today option, defaulting to the current date."""
    if not today:
        return date.today()
    try:
        return parse_date(today)
    except ValueError as e:
        exit_with_error(ctx, f"Invalid --today date: {e}")


def load_ledger(ctx: click.Context, ledger_csv: str, today: date) -> LoadedLedger:
    """Read a ledger export, load the reference lists and analyze every customer."""
    try:
        result = LedgerImportService().read_csv(ledger_csv)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except FileNotFoundError as e:
        exit_with_error(ctx, str(e))

    for error in result.errors:
        click.echo(f"Warning: {error}", err=True)

    reference_lists = ReferenceListService(ctx.obj["db"]).snapshot()
    analysis = LedgerAnalysisService().analyze(result.rows, reference_lists, today)
    return LoadedLedger(rows=result.rows, reference_lists=reference_lists, analysis=analysis)


def format_amount(value: Optional[Decimal]) -> str:
    """Render an amount with thousands separators and two decimals."""
    if value is None:
        return "-"
    return f"{value:,.2f}"


def format_date(value: Optional[date]) -> str:
    return value.isoformat() if value is not None else "-"
