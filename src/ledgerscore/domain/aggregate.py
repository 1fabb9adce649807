"""Per-customer aggregation of ledger rows."""

import logging
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ledgerscore.domain.activity import ActivityWindowAggregator
from ledgerscore.domain.aging import AgingClassifier
from ledgerscore.domain.classifier import classify, payment_amount
from ledgerscore.domain.entities import (
    BALANCE_TOLERANCE,
    UNMATCHED,
    ZERO,
    CustomerAggregate,
    LedgerRow,
    MatchingGroup,
    MonthEntry,
    MonthlyBreakdown,
    OpenItem,
    OverridePair,
    TransactionKind,
)
from ledgerscore.domain.matching import MatchingResolver

logger = logging.getLogger(__name__)

NO_PAYMENT = "No Payment"
STILL_OPEN = "Still Open"
CLOSED = "Closed"


def group_rows_by_customer(rows: Iterable[LedgerRow]) -> dict[str, list[LedgerRow]]:
    """Split a ledger into per-customer row lists, in first-seen order."""
    grouped: dict[str, list[LedgerRow]] = {}
    for row in rows:
        grouped.setdefault(row.customer_name, []).append(row)
    return grouped


def monthly_breakdown(open_items: Sequence[OpenItem]) -> MonthlyBreakdown:
    """Sum open items per YYYY-MM of their row date.

    Items without a readable date are left out of both the months and the
    net total.
    """
    amounts: dict[str, Decimal] = {}
    counts: dict[str, int] = {}
    for item in open_items:
        item_date = item.row.parsed_date
        if item_date is None:
            continue
        month = item_date.strftime("%Y-%m")
        amounts[month] = amounts.get(month, ZERO) + item.amount
        counts[month] = counts.get(month, 0) + 1

    months = tuple(
        MonthEntry(month=month, amount=amounts[month], item_count=counts[month])
        for month in sorted(amounts)
    )
    return MonthlyBreakdown(
        months=months,
        net_total=sum((entry.amount for entry in months), ZERO),
    )


def closure_narrative(
    rows: Sequence[LedgerRow],
    groups: Sequence[MatchingGroup],
    matching: Optional[str],
) -> str:
    """Describe whether the last payment's matching group is settled.

    Args:
        rows: The customer's rows
        groups: Matching groups built from those rows
        matching: Key of the last qualifying payment, UNMATCHED, or None when
            the customer has no qualifying payment

    Returns:
        "No Payment", "Still Open", "Closed in Jan24, Mar24",
        "Closed via matching M1" or
        "Partially closed via matching M1; remaining 300.00"
    """
    if matching is None:
        return NO_PAYMENT
    if not matching or matching == UNMATCHED:
        return STILL_OPEN

    group = next((g for g in groups if g.key == matching), None)
    if group is None:
        return STILL_OPEN

    if not group.is_closed:
        remaining = group.net.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        return f"Partially closed via matching {matching}; remaining {remaining}"

    sale_rows = [
        rows[index]
        for index in group.row_indices
        if classify(rows[index]) is TransactionKind.SALE
    ]
    if not sale_rows:
        return f"Closed via matching {matching}"

    months = sorted(
        {row.parsed_date.replace(day=1) for row in sale_rows if row.parsed_date is not None}
    )
    if not months:
        return CLOSED
    return f"Closed in {', '.join(month.strftime('%b%y') for month in months)}"


class CustomerAggregator:
    """Folds the rows of a customer into a CustomerAggregate."""

    def __init__(self, override_pairs: Iterable[OverridePair] = ()):
        """Initialize customer aggregator.

        Args:
            override_pairs: Pairs forcing the residual holder of a group
        """
        self.resolver = MatchingResolver(override_pairs)
        self.aging_classifier = AgingClassifier()
        self.activity_aggregator = ActivityWindowAggregator()

    def aggregate(
        self, customer_name: str, rows: Sequence[LedgerRow], today: date
    ) -> CustomerAggregate:
        """Build the aggregate of one customer.

        Args:
            customer_name: Customer name as it appears in the ledger
            rows: All rows of that customer, in ledger order
            today: Reference date for aging and the 90-day window

        Returns:
            CustomerAggregate built from scratch
        """
        logger.debug("Aggregating %s (%d rows)", customer_name, len(rows))
        total_debit = ZERO
        total_credit = ZERO
        net_sales = ZERO
        credit_by_kind = {
            TransactionKind.PAYMENT: ZERO,
            TransactionKind.RETURN: ZERO,
            TransactionKind.DISCOUNT: ZERO,
        }
        sales_reps: list[str] = []

        last_payment_date: Optional[date] = None
        last_payment_amount: Optional[Decimal] = None
        last_payment_matching: Optional[str] = None
        last_sales_date: Optional[date] = None
        last_sales_amount: Optional[Decimal] = None
        last_transaction_date: Optional[date] = None

        for row in rows:
            total_debit += row.debit
            total_credit += row.credit
            kind = classify(row)

            if kind is TransactionKind.SALE:
                net_sales += row.debit
            elif kind is TransactionKind.RETURN:
                net_sales -= row.credit

            if kind in credit_by_kind and row.credit > 0:
                credit_by_kind[kind] += row.credit

            rep = (row.sales_rep or "").strip()
            if rep and rep not in sales_reps:
                sales_reps.append(rep)

            row_date = row.parsed_date
            if row_date is None:
                continue

            if last_transaction_date is None or row_date > last_transaction_date:
                last_transaction_date = row_date

            if kind is TransactionKind.PAYMENT and row.credit > BALANCE_TOLERANCE:
                if last_payment_date is None or row_date > last_payment_date:
                    last_payment_date = row_date
                    last_payment_amount = payment_amount(row)
                    last_payment_matching = row.matching_key or UNMATCHED
                elif row_date == last_payment_date:
                    last_payment_amount += payment_amount(row)

            if kind is TransactionKind.SALE and row.debit > 0:
                if last_sales_date is None or row_date > last_sales_date:
                    last_sales_date = row_date
                    last_sales_amount = row.debit
                elif row_date == last_sales_date:
                    last_sales_amount += row.debit

        groups = self.resolver.groups(rows)
        open_items = self.resolver.open_items(rows)
        aging = self.aging_classifier.classify(open_items, today)
        activity = self.activity_aggregator.aggregate(rows, today)

        return CustomerAggregate(
            customer_name=customer_name,
            total_debit=total_debit,
            total_credit=total_credit,
            net_debt=total_debit - total_credit,
            net_sales=net_sales,
            transaction_count=len(rows),
            sales_reps=tuple(sorted(sales_reps)),
            has_open_matchings=any(not group.is_closed for group in groups),
            last_payment_date=last_payment_date,
            last_payment_amount=last_payment_amount,
            last_payment_matching=last_payment_matching,
            last_payment_closure=closure_narrative(rows, groups, last_payment_matching),
            last_sales_date=last_sales_date,
            last_sales_amount=last_sales_amount,
            last_transaction_date=last_transaction_date,
            credit_payments=credit_by_kind[TransactionKind.PAYMENT],
            credit_returns=credit_by_kind[TransactionKind.RETURN],
            credit_discounts=credit_by_kind[TransactionKind.DISCOUNT],
            aging=aging.breakdown,
            overdue_amount=aging.overdue_amount,
            has_ob=aging.has_ob,
            open_ob_amount=aging.open_ob_amount,
            activity=activity,
            monthly_breakdown=monthly_breakdown(open_items),
        )
