"""Ledger analysis domain service."""

import logging
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Optional

from ledgerscore.domain.aggregate import CustomerAggregator, group_rows_by_customer
from ledgerscore.domain.entities import (
    CustomerReport,
    LedgerAnalysis,
    LedgerRow,
    Rating,
    ReferenceLists,
)
from ledgerscore.domain.rating import DebtRatingEngine

logger = logging.getLogger(__name__)


class LedgerAnalysisService:
    """Service for building per-customer reports from a full ledger."""

    def __init__(self, rating_engine: Optional[DebtRatingEngine] = None):
        """Initialize ledger analysis service.

        Args:
            rating_engine: Rating engine to use (a default one if omitted)
        """
        self.rating_engine = rating_engine or DebtRatingEngine()

    def analyze(
        self,
        rows: Iterable[LedgerRow],
        reference_lists: ReferenceLists,
        today: date,
    ) -> LedgerAnalysis:
        """Analyze every customer of a ledger.

        Args:
            rows: All ledger rows
            reference_lists: Closed/semi-closed/email/override lists
            today: Reference date for aging, windows and scores

        Returns:
            LedgerAnalysis with one report per customer, in first-seen order
        """
        aggregator = CustomerAggregator(reference_lists.override_pairs)
        reports = []
        for customer_name, customer_rows in group_rows_by_customer(rows).items():
            aggregate = aggregator.aggregate(customer_name, customer_rows, today)
            rating = self.rating_engine.rate(
                aggregate, reference_lists.closed_customers, today
            )
            reports.append(
                CustomerReport(
                    aggregate=aggregate,
                    rating=rating,
                    open_items=tuple(aggregator.resolver.open_items(customer_rows)),
                    net_only_rows=tuple(aggregator.resolver.net_only_rows(customer_rows)),
                )
            )

        logger.info("Analyzed %d customers as of %s", len(reports), today.isoformat())
        return LedgerAnalysis(today=today, reports=tuple(reports))

    def filter_customers(
        self,
        reports: Sequence[CustomerReport],
        reference_lists: ReferenceLists,
        search: Optional[str] = None,
        rating: Optional[Rating] = None,
        hide_closed: bool = False,
        semi_closed_only: bool = False,
        without_email: bool = False,
        open_matchings_only: bool = False,
    ) -> list[CustomerReport]:
        """Apply presentation filters and sort by net debt, largest first."""
        query = search.strip().lower() if search else ""
        result = []
        for report in reports:
            name = report.customer_name
            if query and query not in name.lower():
                continue
            if rating is not None and report.rating.rating is not rating:
                continue
            if hide_closed and report.rating.is_closed:
                continue
            if semi_closed_only and not reference_lists.is_semi_closed(name):
                continue
            if without_email and reference_lists.has_email(name):
                continue
            if open_matchings_only and not report.aggregate.has_open_matchings:
                continue
            result.append(report)

        return sorted(result, key=lambda report: report.aggregate.net_debt, reverse=True)
