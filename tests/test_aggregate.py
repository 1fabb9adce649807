"""Tests for per-customer aggregation."""

from datetime import date
from decimal import Decimal

from conftest import make_row
from ledgerscore.domain.aggregate import (
    CustomerAggregator,
    closure_narrative,
    group_rows_by_customer,
    monthly_breakdown,
)
from ledgerscore.domain.entities import UNMATCHED, OpenItem, OverridePair
from ledgerscore.domain.matching import MatchingResolver

TODAY = date(2024, 6, 30)


def _aggregate(rows, override_pairs=()):
    return CustomerAggregator(override_pairs).aggregate("Acme LLC", rows, TODAY)


class TestTotals:
    """Tests for totals and credit breakdown."""

    def test_totals_and_net_sales(self):
        rows = [
            make_row("SAL-1", debit="1000", sales_rep="Alice"),
            make_row("SAL-2", debit="500", sales_rep="Bob"),
            make_row("RSAL-1", credit="200", sales_rep="Alice"),
            make_row("BNK-1", credit="600"),
            make_row("JV-1", credit="50"),
            make_row("OB-1", debit="300"),
        ]
        aggregate = _aggregate(rows)

        assert aggregate.total_debit == Decimal("1800")
        assert aggregate.total_credit == Decimal("850")
        assert aggregate.net_debt == Decimal("950")
        assert aggregate.net_sales == Decimal("1300")
        assert aggregate.transaction_count == 6
        assert aggregate.sales_reps == ("Alice", "Bob")
        assert aggregate.credit_payments == Decimal("600")
        assert aggregate.credit_returns == Decimal("200")
        assert aggregate.credit_discounts == Decimal("50")

    def test_collection_rate(self):
        rows = [make_row("SAL-1", debit="1000"), make_row("BNK-1", credit="900")]
        assert _aggregate(rows).collection_rate == Decimal("0.9")

    def test_collection_rate_without_debit(self):
        rows = [make_row("BNK-1", credit="900")]
        assert _aggregate(rows).collection_rate == Decimal("0")

    def test_aggregation_is_idempotent(self):
        """Test that aggregating the same rows twice gives equal results."""
        rows = [
            make_row("SAL-1", debit="500", matching="M1", date="2024-05-01"),
            make_row("BNK-1", credit="200", matching="M1", date="2024-06-01"),
        ]
        aggregator = CustomerAggregator()
        assert aggregator.aggregate("Acme LLC", rows, TODAY) == aggregator.aggregate(
            "Acme LLC", rows, TODAY
        )


class TestLastActivity:
    """Tests for last payment and last sale tracking."""

    def test_same_day_payments_accumulate(self):
        rows = [
            make_row("BNK-1", credit="100", date="2024-06-01", matching="M1"),
            make_row("BNK-2", credit="300", date="2024-06-10", matching="M2"),
            make_row("BNK-3", credit="50", date="2024-06-10"),
        ]
        aggregate = _aggregate(rows)

        assert aggregate.last_payment_date == date(2024, 6, 10)
        assert aggregate.last_payment_amount == Decimal("350")
        assert aggregate.last_payment_matching == "M2"

    def test_reversals_do_not_qualify_as_last_payment(self):
        rows = [
            make_row("BNK-1", credit="100", date="2024-06-01"),
            make_row("BNK-2", debit="100", date="2024-06-20"),
        ]
        aggregate = _aggregate(rows)

        assert aggregate.last_payment_date == date(2024, 6, 1)
        assert aggregate.last_payment_matching == UNMATCHED

    def test_same_day_sales_accumulate(self):
        rows = [
            make_row("SAL-1", debit="100", date="2024-06-10"),
            make_row("SAL-2", debit="250", date="2024-06-10"),
            make_row("SAL-3", debit="900", date="2024-05-01"),
        ]
        aggregate = _aggregate(rows)

        assert aggregate.last_sales_date == date(2024, 6, 10)
        assert aggregate.last_sales_amount == Decimal("350")

    def test_undated_rows_are_skipped(self):
        rows = [make_row("BNK-1", credit="100", date="??"), make_row("SAL-1", debit="5", date="")]
        aggregate = _aggregate(rows)

        assert aggregate.last_payment_date is None
        assert aggregate.last_sales_date is None
        assert aggregate.last_transaction_date is None
        assert aggregate.last_payment_closure == "No Payment"

    def test_last_transaction_date(self):
        rows = [
            make_row("SAL-1", debit="100", date="2024-06-10"),
            make_row("INV-1", debit="5", date="2024-06-25"),
        ]
        assert _aggregate(rows).last_transaction_date == date(2024, 6, 25)


class TestClosureNarrative:
    """Tests for the last payment's closure text."""

    def test_no_payment(self):
        assert closure_narrative([], [], None) == "No Payment"

    def test_unmatched_payment_is_still_open(self):
        rows = [make_row("BNK-1", credit="100", date="2024-06-01")]
        assert _aggregate(rows).last_payment_closure == "Still Open"

    def test_closed_lists_sale_months(self):
        rows = [
            make_row("SAL-1", debit="100", date="2024-01-15", matching="M1"),
            make_row("SAL-2", debit="200", date="2024-03-02", matching="M1"),
            make_row("SAL-3", debit="50", date="2024-01-20", matching="M1"),
            make_row("BNK-1", credit="350", date="2024-04-01", matching="M1"),
        ]
        assert _aggregate(rows).last_payment_closure == "Closed in Jan24, Mar24"

    def test_closed_without_sales(self):
        rows = [
            make_row("INV-1", debit="100", date="2024-01-15", matching="M1"),
            make_row("BNK-1", credit="100", date="2024-04-01", matching="M1"),
        ]
        assert _aggregate(rows).last_payment_closure == "Closed via matching M1"

    def test_closed_with_undated_sales(self):
        rows = [
            make_row("SAL-1", debit="100", date="", matching="M1"),
            make_row("BNK-1", credit="100", date="2024-04-01", matching="M1"),
        ]
        assert _aggregate(rows).last_payment_closure == "Closed"

    def test_partially_closed(self):
        rows = [
            make_row("SAL-1", debit="500", date="2024-01-15", matching="M1"),
            make_row("BNK-1", credit="199.995", date="2024-04-01", matching="M1"),
        ]
        assert (
            _aggregate(rows).last_payment_closure
            == "Partially closed via matching M1; remaining 300.01"
        )

    def test_narrative_uses_resolver_groups(self):
        rows = [
            make_row("SAL-1", debit="500", matching="M1"),
            make_row("BNK-1", credit="500", matching="M1"),
        ]
        groups = MatchingResolver().groups(rows)
        assert closure_narrative(rows, groups, "M9") == "Still Open"
        assert closure_narrative(rows, groups, UNMATCHED) == "Still Open"


class TestOpenBalances:
    """Tests for open-balance figures on the aggregate."""

    def test_aging_uses_residual_holder(self):
        rows = [
            make_row("SAL-2", debit="500", date="2024-01-10", matching="M2"),
            make_row("BNK-2", credit="200", date="2024-06-01", matching="M2"),
        ]
        aggregate = _aggregate(rows)

        assert aggregate.has_open_matchings
        assert aggregate.aging.older == Decimal("300")
        assert aggregate.overdue_amount == Decimal("300")

    def test_override_moves_residual(self):
        rows = [
            make_row("SAL-1", debit="500", date="2024-01-10", matching="M2"),
            make_row("SAL-2", debit="100", date="2024-06-20", matching="M2"),
            make_row("BNK-2", credit="200", date="2024-06-01", matching="M2"),
        ]
        aggregate = _aggregate(rows, [OverridePair(number="SAL-2", matching="M2")])

        assert aggregate.aging.one_to_thirty == Decimal("400")
        assert aggregate.aging.older == Decimal("0")

    def test_opening_balance_flags(self):
        rows = [make_row("OB-1", debit="800", date="2023-12-31")]
        aggregate = _aggregate(rows)

        assert aggregate.has_ob
        assert aggregate.open_ob_amount == Decimal("800")

    def test_monthly_breakdown(self):
        rows = [
            make_row("SAL-1", debit="100", date="2024-05-03"),
            make_row("SAL-2", debit="200", date="2024-05-20"),
            make_row("BNK-1", credit="50", date="2024-04-01"),
            make_row("SAL-3", debit="70", date=""),
        ]
        breakdown = _aggregate(rows).monthly_breakdown

        assert [entry.month for entry in breakdown.months] == ["2024-04", "2024-05"]
        assert breakdown.months[1].amount == Decimal("300")
        assert breakdown.months[1].item_count == 2
        assert breakdown.net_total == Decimal("250")


def test_group_rows_by_customer_keeps_first_seen_order():
    rows = [
        make_row("SAL-1", customer_name="Beta"),
        make_row("SAL-2", customer_name="Acme"),
        make_row("SAL-3", customer_name="Beta"),
    ]
    grouped = group_rows_by_customer(rows)

    assert list(grouped) == ["Beta", "Acme"]
    assert [row.number for row in grouped["Beta"]] == ["SAL-1", "SAL-3"]


def test_monthly_breakdown_empty():
    breakdown = monthly_breakdown([])
    assert breakdown.months == ()
    assert breakdown.net_total == Decimal("0")


def test_open_item_target_date():
    row = make_row("SAL-1", debit="10", date="2024-01-01", due_date="2024-02-01")
    assert OpenItem(row_index=0, row=row, amount=Decimal("10")).target_date == date(2024, 2, 1)
