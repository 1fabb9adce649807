"""Tests for the debt rating engine."""

import pytest
from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal

from conftest import make_row
from ledgerscore.domain.aggregate import CustomerAggregator
from ledgerscore.domain.entities import Rating, RatingInputs
from ledgerscore.domain.rating import (
    REASON_CLOSED,
    REASON_IN_CREDIT,
    REASON_RISK_INACTIVE,
    REASON_RISK_NEGATIVE_SALES,
    DebtRatingEngine,
    rating_for_score,
    score_components,
)

TODAY = date(2024, 6, 30)


def _inputs(**overrides) -> RatingInputs:
    values = dict(
        net_debt=Decimal("1000"),
        collection_rate=Decimal("0.9"),
        days_since_last_payment=10,
        payments_count_3m=2,
        days_since_last_sale=5,
        payments_3m=Decimal("5000"),
        sales_3m=Decimal("3000"),
        sales_count_3m=1,
    )
    values.update(overrides)
    return RatingInputs(**values)


def _days_ago(days: int) -> str:
    return (TODAY - timedelta(days=days)).isoformat()


def _rate(rows, closed=frozenset(), customer_name="Acme LLC"):
    aggregate = CustomerAggregator().aggregate(customer_name, rows, TODAY)
    return DebtRatingEngine().rate(aggregate, closed, TODAY)


class TestScoreComponents:
    """Tests for the component score table."""

    def test_reference_inputs(self):
        """Test the worked example totalling 13 points."""
        scores = score_components(_inputs())

        assert scores.as_tuple() == (2, 2, 2, 2, 2, 1, 1, 1)
        assert scores.total == 13
        assert rating_for_score(scores.total) is Rating.GOOD

    @pytest.mark.parametrize(
        "net_debt,expected",
        [("-100", 2), ("5000", 2), ("5000.01", 1), ("20000", 1), ("20000.01", 0)],
    )
    def test_net_debt(self, net_debt, expected):
        assert score_components(_inputs(net_debt=Decimal(net_debt))).net_debt == expected

    @pytest.mark.parametrize(
        "rate,expected", [("0.8", 2), ("0.79", 1), ("0.5", 1), ("0.49", 0), ("0", 0)]
    )
    def test_collection_rate(self, rate, expected):
        scores = score_components(_inputs(collection_rate=Decimal(rate)))
        assert scores.collection_rate == expected

    @pytest.mark.parametrize("days,expected", [(0, 2), (30, 2), (31, 1), (90, 1), (91, 0), (None, 0)])
    def test_days_since(self, days, expected):
        scores = score_components(
            _inputs(days_since_last_payment=days, days_since_last_sale=days)
        )
        assert scores.days_since_last_payment == expected
        assert scores.days_since_last_sale == expected

    @pytest.mark.parametrize("count,expected", [(3, 2), (2, 2), (1, 1), (0, 0), (-1, 0)])
    def test_counts(self, count, expected):
        scores = score_components(_inputs(payments_count_3m=count, sales_count_3m=count))
        assert scores.payments_count_3m == expected
        assert scores.sales_count_3m == expected

    @pytest.mark.parametrize(
        "amount,expected", [("10000", 2), ("9999.99", 1), ("2000", 1), ("1999.99", 0), ("-50", 0)]
    )
    def test_amounts(self, amount, expected):
        scores = score_components(_inputs(payments_3m=Decimal(amount), sales_3m=Decimal(amount)))
        assert scores.payments_3m == expected
        assert scores.sales_3m == expected

    @pytest.mark.parametrize(
        "total,expected",
        [(16, Rating.GOOD), (11, Rating.GOOD), (10, Rating.MEDIUM), (6, Rating.MEDIUM), (5, Rating.BAD)],
    )
    def test_rating_thresholds(self, total, expected):
        assert rating_for_score(total) is expected


class TestShortCircuits:
    """Tests for the decision order of the rating."""

    def test_closed_customer_is_bad(self):
        """Test that a listed customer is Bad whatever its figures."""
        rows = [make_row("BNK-1", credit="500", date=_days_ago(1))]
        result = _rate(rows, closed=frozenset({"acme llc"}), customer_name="  ACME   LLC ")

        assert result.rating is Rating.BAD
        assert result.reason == REASON_CLOSED
        assert result.is_closed
        assert result.breakdown is None

    def test_account_in_credit_is_good(self):
        """Test that negative net debt wins even with zero scores."""
        rows = [make_row("BNK-1", credit="100", date="2020-01-01")]
        result = _rate(rows)

        assert result.rating is Rating.GOOD
        assert result.reason == REASON_IN_CREDIT
        assert not result.is_closed
        assert result.breakdown.inputs.net_debt == Decimal("-100")
        assert result.breakdown.risk_flag_1 is None
        assert result.breakdown.scores is None
        assert result.breakdown.total_score is None

    def test_inactive_debtor_is_bad(self):
        rows = [make_row("SAL-1", debit="500", date="2023-01-01")]
        result = _rate(rows)

        assert result.rating is Rating.BAD
        assert result.reason == REASON_RISK_INACTIVE
        assert result.breakdown.risk_flag_1 is False
        assert result.breakdown.risk_flag_2 is True
        assert result.breakdown.scores is None

    def test_returns_exceeding_sales_is_bad(self):
        rows = [
            make_row("SAL-1", debit="5000", date="2024-01-01"),
            make_row("SAL-2", debit="100", date=_days_ago(10)),
            make_row("RSAL-1", credit="400", date=_days_ago(5)),
        ]
        result = _rate(rows)

        assert result.rating is Rating.BAD
        assert result.reason == REASON_RISK_NEGATIVE_SALES
        assert result.breakdown.risk_flag_1 is True
        assert result.breakdown.risk_flag_2 is False

    def test_settled_inactive_customer_is_scored(self):
        """Test that zero net debt does not raise the inactivity flag."""
        rows = [
            make_row("SAL-1", debit="500", date="2023-01-01"),
            make_row("BNK-1", credit="500", date="2023-02-01"),
        ]
        result = _rate(rows)

        assert result.breakdown.risk_flag_2 is False
        assert result.breakdown.scores is not None
        # net debt 2, collection rate 2, nothing else
        assert result.breakdown.total_score == 4
        assert result.rating is Rating.BAD
        assert result.reason == "Score 4/16"


class TestScoredRatings:
    """Tests for fully scored customers."""

    def test_active_customer_is_good(self):
        rows = [
            make_row("SAL-1", debit="6000", date=_days_ago(40)),
            make_row("SAL-2", debit="5000", date=_days_ago(15)),
            make_row("BNK-1", credit="6000", date=_days_ago(20)),
            make_row("BNK-2", credit="4000", date=_days_ago(10)),
        ]
        result = _rate(rows)

        assert result.rating is Rating.GOOD
        assert result.reason == "Score 16/16"
        assert result.breakdown.inputs.days_since_last_payment == 10
        assert result.breakdown.inputs.days_since_last_sale == 15

    def test_medium_customer(self):
        rows = [
            make_row("OB-1", debit="8000", date="2023-12-31"),
            make_row("BNK-1", credit="2000", date="2024-01-10"),
            make_row("SAL-1", debit="3000", date="2024-04-15", matching="M2"),
            make_row("BNK-2", credit="1000", date="2024-05-20", matching="M2"),
        ]
        result = _rate(rows)

        assert result.breakdown.scores.as_tuple() == (1, 0, 1, 1, 1, 0, 1, 1)
        assert result.rating is Rating.MEDIUM
        assert result.reason == "Score 6/16"

    def test_rating_inputs_from_aggregate(self):
        rows = [
            make_row("SAL-1", debit="1000", date=_days_ago(5)),
            make_row("BNK-1", credit="250", date=_days_ago(3)),
        ]
        aggregate = CustomerAggregator().aggregate("Acme LLC", rows, TODAY)
        inputs = DebtRatingEngine().rating_inputs(aggregate, TODAY)

        assert inputs == replace(
            _inputs(),
            net_debt=Decimal("750"),
            collection_rate=Decimal("0.25"),
            days_since_last_payment=3,
            payments_count_3m=1,
            payments_3m=Decimal("250"),
            sales_3m=Decimal("1000"),
        )
