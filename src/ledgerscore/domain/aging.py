"""Aging schedule of open items."""

from collections.abc import Sequence
from datetime import date
from typing import Optional

from ledgerscore.domain.entities import ZERO, AgingBreakdown, AgingResult, OpenItem

# Upper bound (inclusive) of days overdue for each bucket, in order
AGING_BUCKETS = (
    (0, "at_date"),
    (30, "one_to_thirty"),
    (60, "thirty_one_to_sixty"),
    (90, "sixty_one_to_ninety"),
    (120, "ninety_one_to_one_twenty"),
)
OLDER_BUCKET = "older"


def days_overdue(item: OpenItem, today: date) -> Optional[int]:
    """Whole days between the item's target date and today.

    Returns None when neither the due date nor the row date is readable.
    """
    target = item.target_date
    if target is None:
        return None
    return (today - target).days


def bucket_for(days: int) -> str:
    """Name of the AgingBreakdown field that a days-overdue value falls into."""
    for upper, name in AGING_BUCKETS:
        if days <= upper:
            return name
    return OLDER_BUCKET


class AgingClassifier:
    """Buckets open items by days overdue."""

    def classify(self, open_items: Sequence[OpenItem], today: date) -> AgingResult:
        """Build the aging schedule of a customer's open items.

        Amounts are signed, so credit items reduce their bucket. Items with no
        readable date stay out of the buckets but still count in the overdue
        amount and opening-balance totals.
        """
        buckets = {name: ZERO for _, name in AGING_BUCKETS}
        buckets[OLDER_BUCKET] = ZERO
        overdue_amount = ZERO
        open_ob_amount = ZERO
        has_ob = False

        for item in open_items:
            days = days_overdue(item, today)
            if days is not None:
                name = bucket_for(days)
                buckets[name] += item.amount
            overdue_amount += item.amount
            if item.row.normalized_number.startswith("OB"):
                has_ob = True
                open_ob_amount += item.amount

        return AgingResult(
            breakdown=AgingBreakdown(**buckets),
            overdue_amount=overdue_amount,
            has_ob=has_ob,
            open_ob_amount=open_ob_amount,
        )
