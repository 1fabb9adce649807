"""Trailing 90-day activity window."""

from collections.abc import Sequence
from datetime import date, timedelta

from ledgerscore.domain.classifier import classify, payment_amount
from ledgerscore.domain.entities import (
    BALANCE_TOLERANCE,
    ZERO,
    ActivityWindow,
    LedgerRow,
    TransactionKind,
)

WINDOW_DAYS = 90


def in_window(row_date: date | None, today: date, days: int = WINDOW_DAYS) -> bool:
    """True when row_date lies in [today - days, today]."""
    if row_date is None:
        return False
    return today - timedelta(days=days) <= row_date <= today


class ActivityWindowAggregator:
    """Sums recent sales and payments of one customer."""

    def aggregate(self, rows: Sequence[LedgerRow], today: date) -> ActivityWindow:
        """Compute 90-day sales and payment figures.

        Each row is placed by its own date, never its matching group's.
        payments_count_3m nets credit lines against debit (reversal) lines
        and goes negative when reversals dominate.
        """
        sales = ZERO
        sales_count = 0
        payments = ZERO
        credit_lines = 0
        debit_lines = 0

        for row in rows:
            if not in_window(row.parsed_date, today):
                continue
            kind = classify(row)
            if kind is TransactionKind.SALE:
                sales += row.debit
                sales_count += 1
            elif kind is TransactionKind.RETURN:
                sales -= row.credit
            elif kind is TransactionKind.PAYMENT:
                payments += payment_amount(row)
                if row.credit > BALANCE_TOLERANCE:
                    credit_lines += 1
                if row.debit > BALANCE_TOLERANCE:
                    debit_lines += 1

        return ActivityWindow(
            sales_3m=sales,
            sales_count_3m=sales_count,
            payments_3m=payments,
            payments_count_3m=credit_lines - debit_lines,
        )
