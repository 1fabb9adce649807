"""Portfolio summaries by sales rep and by period."""

import re
from collections import defaultdict
from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Optional

from ledgerscore.domain.entities import (
    BALANCE_TOLERANCE,
    ZERO,
    CustomerReport,
    LedgerRow,
    PeriodSummary,
    Rating,
    RatingCounts,
    SalesRepSummary,
)

_YEAR_PATTERN = re.compile(r"\d{4}")


def collection_rate_percent(total_debit: Decimal, total_credit: Decimal) -> Decimal:
    """Credit as a percentage of debit, 0 when there is no debit."""
    if total_debit <= 0:
        return ZERO
    return total_credit / total_debit * 100


def count_ratings(reports: Iterable[CustomerReport]) -> RatingCounts:
    good = medium = bad = 0
    for report in reports:
        if report.rating.rating is Rating.GOOD:
            good += 1
        elif report.rating.rating is Rating.MEDIUM:
            medium += 1
        else:
            bad += 1
    return RatingCounts(good=good, medium=medium, bad=bad)


def period_key(row: LedgerRow, by_month: bool) -> Optional[str]:
    """YYYY or YYYY-MM of a row's date.

    Yearly grouping falls back to the first four-digit number in the raw
    date text when the date itself cannot be read.
    """
    row_date = row.parsed_date
    if row_date is not None:
        return row_date.strftime("%Y-%m" if by_month else "%Y")
    if by_month:
        return None
    match = _YEAR_PATTERN.search(row.date or "")
    return match.group(0) if match else None


class PortfolioService:
    """Service for building portfolio-level summaries."""

    def summarize_sales_reps(
        self, rows: Iterable[LedgerRow], reports: Sequence[CustomerReport]
    ) -> list[SalesRepSummary]:
        """Summarize the ledger per sales rep, largest net debt first.

        Totals cover the rows booked under each rep; rating counts cover every
        customer the rep has at least one row with.
        """
        report_by_name = {report.customer_name: report for report in reports}
        totals: dict[str, dict[str, Decimal]] = defaultdict(
            lambda: {"debit": ZERO, "credit": ZERO}
        )
        transaction_counts: dict[str, int] = defaultdict(int)
        customers: dict[str, list[str]] = defaultdict(list)

        for row in rows:
            rep = (row.sales_rep or "").strip()
            if not rep:
                continue
            totals[rep]["debit"] += row.debit
            totals[rep]["credit"] += row.credit
            transaction_counts[rep] += 1
            if row.customer_name not in customers[rep]:
                customers[rep].append(row.customer_name)

        summaries = []
        for rep, data in totals.items():
            rep_reports = [
                report_by_name[name] for name in customers[rep] if name in report_by_name
            ]
            summaries.append(
                SalesRepSummary(
                    sales_rep=rep,
                    total_debit=data["debit"],
                    total_credit=data["credit"],
                    net_debt=data["debit"] - data["credit"],
                    customer_count=len(customers[rep]),
                    transaction_count=transaction_counts[rep],
                    collection_rate=collection_rate_percent(data["debit"], data["credit"]),
                    ratings=count_ratings(rep_reports),
                )
            )

        return sorted(summaries, key=lambda summary: summary.net_debt, reverse=True)

    def summarize_periods(
        self,
        rows: Iterable[LedgerRow],
        reports: Sequence[CustomerReport],
        by_month: bool = False,
    ) -> list[PeriodSummary]:
        """Summarize debtor customers per year (or month), oldest first.

        Only customers whose net debt exceeds the balance tolerance take part.
        """
        debtors = {
            report.customer_name: report
            for report in reports
            if report.aggregate.net_debt > BALANCE_TOLERANCE
        }
        totals: dict[str, dict[str, Decimal]] = defaultdict(
            lambda: {"debit": ZERO, "credit": ZERO}
        )
        transaction_counts: dict[str, int] = defaultdict(int)
        customers: dict[str, set[str]] = defaultdict(set)

        for row in rows:
            if row.customer_name not in debtors:
                continue
            key = period_key(row, by_month)
            if key is None:
                continue
            totals[key]["debit"] += row.debit
            totals[key]["credit"] += row.credit
            transaction_counts[key] += 1
            customers[key].add(row.customer_name)

        return [
            PeriodSummary(
                period=key,
                total_debit=totals[key]["debit"],
                total_credit=totals[key]["credit"],
                net_debt=totals[key]["debit"] - totals[key]["credit"],
                transaction_count=transaction_counts[key],
                collection_rate=collection_rate_percent(
                    totals[key]["debit"], totals[key]["credit"]
                ),
                ratings=count_ratings(debtors[name] for name in sorted(customers[key])),
            )
            for key in sorted(totals)
        ]
