"""Debt rating of customers.

The rating is decided in a fixed order and stops at the first step that
applies:

1. Customers on the closed list are Bad.
2. Customers in credit (negative net debt) are Good.
3. Customers raising a risk flag are Bad.
4. Everyone else is rated on the sum of eight 0-2 point component scores.
"""

import logging
from collections.abc import Collection
from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerscore.domain.entities import (
    ComponentScores,
    CustomerAggregate,
    DebtRatingResult,
    Rating,
    RatingBreakdown,
    RatingInputs,
)
from ledgerscore.utils.names import normalize_customer_name

logger = logging.getLogger(__name__)

REASON_CLOSED = "Closed"
REASON_IN_CREDIT = "Account in Credit"
REASON_RISK_NEGATIVE_SALES = "Returns exceed sales with no payments in 90 days"
REASON_RISK_INACTIVE = "No sales or payments in 90 days with outstanding debt"

GOOD_MIN_SCORE = 11
MEDIUM_MIN_SCORE = 6
MAX_SCORE = 16

NET_DEBT_LOW = Decimal("5000")
NET_DEBT_HIGH = Decimal("20000")
COLLECTION_RATE_GOOD = Decimal("0.8")
COLLECTION_RATE_FAIR = Decimal("0.5")
RECENT_DAYS = 30
STALE_DAYS = 90
AMOUNT_HIGH = Decimal("10000")
AMOUNT_FAIR = Decimal("2000")


def _score_days(days: Optional[int]) -> int:
    if days is None:
        return 0
    if days <= RECENT_DAYS:
        return 2
    if days <= STALE_DAYS:
        return 1
    return 0


def _score_amount(amount: Decimal) -> int:
    if amount >= AMOUNT_HIGH:
        return 2
    if amount >= AMOUNT_FAIR:
        return 1
    return 0


def _score_count(count: int) -> int:
    if count >= 2:
        return 2
    if count == 1:
        return 1
    return 0


def score_components(inputs: RatingInputs) -> ComponentScores:
    """Score each rating input on the 0-2 scale."""
    if inputs.net_debt <= NET_DEBT_LOW:
        net_debt_score = 2
    elif inputs.net_debt <= NET_DEBT_HIGH:
        net_debt_score = 1
    else:
        net_debt_score = 0

    if inputs.collection_rate >= COLLECTION_RATE_GOOD:
        collection_score = 2
    elif inputs.collection_rate >= COLLECTION_RATE_FAIR:
        collection_score = 1
    else:
        collection_score = 0

    return ComponentScores(
        net_debt=net_debt_score,
        collection_rate=collection_score,
        days_since_last_payment=_score_days(inputs.days_since_last_payment),
        payments_count_3m=_score_count(inputs.payments_count_3m),
        days_since_last_sale=_score_days(inputs.days_since_last_sale),
        payments_3m=_score_amount(inputs.payments_3m),
        sales_3m=_score_amount(inputs.sales_3m),
        sales_count_3m=_score_count(inputs.sales_count_3m),
    )


def rating_for_score(total: int) -> Rating:
    if total >= GOOD_MIN_SCORE:
        return Rating.GOOD
    if total >= MEDIUM_MIN_SCORE:
        return Rating.MEDIUM
    return Rating.BAD


def _days_since(day: Optional[date], today: date) -> Optional[int]:
    if day is None:
        return None
    return (today - day).days


class DebtRatingEngine:
    """Rates customers from their aggregates."""

    def rating_inputs(self, aggregate: CustomerAggregate, today: date) -> RatingInputs:
        """Collect the raw figures a rating is computed from."""
        return RatingInputs(
            net_debt=aggregate.net_debt,
            collection_rate=aggregate.collection_rate,
            days_since_last_payment=_days_since(aggregate.last_payment_date, today),
            payments_count_3m=aggregate.payments_count_3m,
            days_since_last_sale=_days_since(aggregate.last_sales_date, today),
            payments_3m=aggregate.payments_3m,
            sales_3m=aggregate.sales_3m,
            sales_count_3m=aggregate.sales_count_3m,
        )

    def rate(
        self,
        aggregate: CustomerAggregate,
        closed_customers: Collection[str],
        today: date,
    ) -> DebtRatingResult:
        """Rate a customer.

        Args:
            aggregate: The customer's aggregate
            closed_customers: Normalized names of closed customers
            today: Reference date for the days-since scores

        Returns:
            DebtRatingResult with the breakdown up to the deciding step
        """
        if normalize_customer_name(aggregate.customer_name) in closed_customers:
            logger.debug("%s rated Bad: closed", aggregate.customer_name)
            return DebtRatingResult(rating=Rating.BAD, reason=REASON_CLOSED, is_closed=True)

        inputs = self.rating_inputs(aggregate, today)

        if inputs.net_debt < 0:
            return DebtRatingResult(
                rating=Rating.GOOD,
                reason=REASON_IN_CREDIT,
                is_closed=False,
                breakdown=RatingBreakdown(inputs=inputs),
            )

        risk_flag_1 = inputs.sales_3m < 0 and inputs.payments_count_3m == 0
        risk_flag_2 = (
            inputs.payments_count_3m == 0
            and inputs.sales_count_3m == 0
            and inputs.net_debt > 0
        )
        if risk_flag_1 or risk_flag_2:
            reason = REASON_RISK_NEGATIVE_SALES if risk_flag_1 else REASON_RISK_INACTIVE
            return DebtRatingResult(
                rating=Rating.BAD,
                reason=reason,
                is_closed=False,
                breakdown=RatingBreakdown(
                    inputs=inputs, risk_flag_1=risk_flag_1, risk_flag_2=risk_flag_2
                ),
            )

        scores = score_components(inputs)
        rating = rating_for_score(scores.total)
        logger.debug(
            "%s scored %d/%d: %s", aggregate.customer_name, scores.total, MAX_SCORE, rating.value
        )
        return DebtRatingResult(
            rating=rating,
            reason=f"Score {scores.total}/{MAX_SCORE}",
            is_closed=False,
            breakdown=RatingBreakdown(
                inputs=inputs,
                risk_flag_1=False,
                risk_flag_2=False,
                scores=scores,
            ),
        )
