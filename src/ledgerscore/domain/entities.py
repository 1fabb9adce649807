"""Domain model entities for ledgerscore.

These are pure data classes representing ledger concepts, independent of the
CSV layout they are read from and of the database holding the reference
lists. Every record produced by the engine is frozen, so results can be
handed to any renderer without defensive copies.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from functools import cached_property
from typing import Optional

from ledgerscore.utils.date_parser import parse_ledger_date
from ledgerscore.utils.names import normalize_customer_name, normalize_key

ZERO = Decimal("0")

# Amounts at or below this magnitude are treated as settled.
BALANCE_TOLERANCE = Decimal("0.01")

UNMATCHED = "UNMATCHED"


class TransactionKind(Enum):
    """Semantic kind of a ledger row, with its display label."""

    OPENING_BALANCE = "Opening Balance"
    PAYMENT = "Payment"
    OUR_PAID = "Our Paid"
    SALE = "Sale"
    RETURN = "Return"
    DISCOUNT = "Discount"
    OTHER = "Invoice/Txn"


class Rating(str, Enum):
    """Debt rating of a customer."""

    GOOD = "Good"
    MEDIUM = "Medium"
    BAD = "Bad"


class CustomerListType(str, Enum):
    """Kinds of customer reference lists kept in the store."""

    CLOSED = "closed"
    SEMI_CLOSED = "semi_closed"


@dataclass(frozen=True)
class LedgerRow:
    """One invoice, payment or opening-balance line of the customer ledger."""

    customer_name: str
    date: str
    number: str
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    due_date: Optional[str] = None
    matching: Optional[str] = None
    sales_rep: Optional[str] = None

    @property
    def net_amount(self) -> Decimal:
        return self.debit - self.credit

    # Cached per instance; dataclasses.replace builds a fresh one
    @cached_property
    def parsed_date(self) -> Optional[date]:
        return parse_ledger_date(self.date)

    @cached_property
    def parsed_due_date(self) -> Optional[date]:
        return parse_ledger_date(self.due_date)

    @property
    def matching_key(self) -> str:
        """Trimmed matching key, or "" for unmatched rows."""
        return (self.matching or "").strip()

    @property
    def normalized_number(self) -> str:
        """Trimmed, upper-cased document number used for prefix checks."""
        return (self.number or "").strip().upper()


@dataclass(frozen=True)
class OverridePair:
    """Forces the row with this number to hold its matching group's residual."""

    number: str
    matching: str

    def matches(self, row: LedgerRow) -> bool:
        return (
            normalize_key(self.number) == normalize_key(row.number)
            and normalize_key(self.matching) == normalize_key(row.matching)
        )


@dataclass(frozen=True)
class MatchingGroup:
    """Rows of one customer sharing a matching key."""

    key: str
    row_indices: tuple[int, ...]
    net: Decimal
    holder_index: Optional[int]

    @property
    def is_closed(self) -> bool:
        return abs(self.net) <= BALANCE_TOLERANCE


@dataclass(frozen=True)
class OpenItem:
    """An unmatched row or a residual holder with a non-trivial balance."""

    row_index: int
    row: LedgerRow
    amount: Decimal
    matching: Optional[str] = None

    @property
    def target_date(self) -> Optional[date]:
        """Due date when readable, otherwise the row date."""
        return self.row.parsed_due_date or self.row.parsed_date


@dataclass(frozen=True)
class AgingBreakdown:
    """Open amounts bucketed by days overdue."""

    at_date: Decimal = ZERO
    one_to_thirty: Decimal = ZERO
    thirty_one_to_sixty: Decimal = ZERO
    sixty_one_to_ninety: Decimal = ZERO
    ninety_one_to_one_twenty: Decimal = ZERO
    older: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return (
            self.at_date
            + self.one_to_thirty
            + self.thirty_one_to_sixty
            + self.sixty_one_to_ninety
            + self.ninety_one_to_one_twenty
            + self.older
        )


@dataclass(frozen=True)
class AgingResult:
    """Aging buckets plus overdue and opening-balance totals."""

    breakdown: AgingBreakdown
    overdue_amount: Decimal
    has_ob: bool
    open_ob_amount: Decimal


@dataclass(frozen=True)
class ActivityWindow:
    """Sales and payment activity over the trailing 90 days."""

    sales_3m: Decimal = ZERO
    sales_count_3m: int = 0
    payments_3m: Decimal = ZERO
    payments_count_3m: int = 0


@dataclass(frozen=True)
class MonthEntry:
    """Open amount of all open items dated in one month."""

    month: str
    amount: Decimal
    item_count: int


@dataclass(frozen=True)
class MonthlyBreakdown:
    """Open items summed per YYYY-MM, in chronological order."""

    months: tuple[MonthEntry, ...] = ()
    net_total: Decimal = ZERO


@dataclass(frozen=True)
class CustomerAggregate:
    """Everything the engine knows about one customer."""

    customer_name: str
    total_debit: Decimal
    total_credit: Decimal
    net_debt: Decimal
    net_sales: Decimal
    transaction_count: int
    sales_reps: tuple[str, ...]
    has_open_matchings: bool
    last_payment_date: Optional[date]
    last_payment_amount: Optional[Decimal]
    last_payment_matching: Optional[str]
    last_payment_closure: str
    last_sales_date: Optional[date]
    last_sales_amount: Optional[Decimal]
    last_transaction_date: Optional[date]
    credit_payments: Decimal
    credit_returns: Decimal
    credit_discounts: Decimal
    aging: AgingBreakdown
    overdue_amount: Decimal
    has_ob: bool
    open_ob_amount: Decimal
    activity: ActivityWindow
    monthly_breakdown: MonthlyBreakdown

    @property
    def normalized_name(self) -> str:
        return normalize_customer_name(self.customer_name)

    @property
    def collection_rate(self) -> Decimal:
        if self.total_debit <= 0:
            return ZERO
        return self.total_credit / self.total_debit

    @property
    def sales_3m(self) -> Decimal:
        return self.activity.sales_3m

    @property
    def sales_count_3m(self) -> int:
        return self.activity.sales_count_3m

    @property
    def payments_3m(self) -> Decimal:
        return self.activity.payments_3m

    @property
    def payments_count_3m(self) -> int:
        return self.activity.payments_count_3m


@dataclass(frozen=True)
class RatingInputs:
    """Raw figures the debt rating is computed from."""

    net_debt: Decimal
    collection_rate: Decimal
    days_since_last_payment: Optional[int]
    payments_count_3m: int
    days_since_last_sale: Optional[int]
    payments_3m: Decimal
    sales_3m: Decimal
    sales_count_3m: int


@dataclass(frozen=True)
class ComponentScores:
    """The eight 0-2 point component scores."""

    net_debt: int
    collection_rate: int
    days_since_last_payment: int
    payments_count_3m: int
    days_since_last_sale: int
    payments_3m: int
    sales_3m: int
    sales_count_3m: int

    def as_tuple(self) -> tuple[int, ...]:
        return (
            self.net_debt,
            self.collection_rate,
            self.days_since_last_payment,
            self.payments_count_3m,
            self.days_since_last_sale,
            self.payments_3m,
            self.sales_3m,
            self.sales_count_3m,
        )

    @property
    def total(self) -> int:
        return sum(self.as_tuple())


@dataclass(frozen=True)
class RatingBreakdown:
    """Explanation of a rating.

    risk_flag_1/risk_flag_2 are None when the rating was decided before the
    flags were evaluated; scores is None when it was decided before scoring.
    """

    inputs: RatingInputs
    risk_flag_1: Optional[bool] = None
    risk_flag_2: Optional[bool] = None
    scores: Optional[ComponentScores] = None

    @property
    def total_score(self) -> Optional[int]:
        return self.scores.total if self.scores is not None else None


@dataclass(frozen=True)
class DebtRatingResult:
    """Rating of one customer.

    Closed customers are rated without looking at their figures, so
    breakdown is None exactly when is_closed is True.
    """

    rating: Rating
    reason: str
    is_closed: bool
    breakdown: Optional[RatingBreakdown] = None


@dataclass(frozen=True)
class ReferenceLists:
    """Read-only snapshot of the externally maintained lists.

    Customer sets hold normalized names.
    """

    closed_customers: frozenset[str] = frozenset()
    semi_closed_customers: frozenset[str] = frozenset()
    customer_emails: frozenset[str] = frozenset()
    override_pairs: tuple[OverridePair, ...] = ()

    def is_closed(self, customer_name: str) -> bool:
        return normalize_customer_name(customer_name) in self.closed_customers

    def is_semi_closed(self, customer_name: str) -> bool:
        return normalize_customer_name(customer_name) in self.semi_closed_customers

    def has_email(self, customer_name: str) -> bool:
        return normalize_customer_name(customer_name) in self.customer_emails


@dataclass(frozen=True)
class CustomerReport:
    """Aggregate, rating and open items of one customer."""

    aggregate: CustomerAggregate
    rating: DebtRatingResult
    open_items: tuple[OpenItem, ...]
    net_only_rows: tuple[LedgerRow, ...]

    @property
    def customer_name(self) -> str:
        return self.aggregate.customer_name


@dataclass(frozen=True)
class LedgerAnalysis:
    """Reports for every customer of a ledger, in first-seen order."""

    today: date
    reports: tuple[CustomerReport, ...]

    def customer(self, customer_name: str) -> Optional[CustomerReport]:
        """Find a report by exact name, then by normalized name."""
        for report in self.reports:
            if report.customer_name == customer_name:
                return report
        wanted = normalize_customer_name(customer_name)
        for report in self.reports:
            if report.aggregate.normalized_name == wanted:
                return report
        return None


@dataclass(frozen=True)
class RatingCounts:
    good: int = 0
    medium: int = 0
    bad: int = 0


@dataclass(frozen=True)
class SalesRepSummary:
    """Portfolio figures of one sales rep."""

    sales_rep: str
    total_debit: Decimal
    total_credit: Decimal
    net_debt: Decimal
    customer_count: int
    transaction_count: int
    collection_rate: Decimal
    ratings: RatingCounts


@dataclass(frozen=True)
class PeriodSummary:
    """Portfolio figures of debtor customers for one year or month."""

    period: str
    total_debit: Decimal
    total_credit: Decimal
    net_debt: Decimal
    transaction_count: int
    collection_rate: Decimal
    ratings: RatingCounts


@dataclass(frozen=True)
class ImportResult:
    """Rows read from a ledger export and the problems found on the way."""

    rows: tuple[LedgerRow, ...]
    errors: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CustomerFlag:
    """Membership of a customer in a closed or semi-closed list."""

    id: int
    list_type: CustomerListType
    customer_name: str
    normalized_name: str
    created_at: datetime


@dataclass(frozen=True)
class CustomerEmail:
    """Email address on file for a customer."""

    id: int
    customer_name: str
    normalized_name: str
    email: str
    created_at: datetime


@dataclass(frozen=True)
class OverrideEntry:
    """Stored override pair."""

    id: int
    number: str
    matching: str
    created_at: datetime

    def to_pair(self) -> OverridePair:
        return OverridePair(number=self.number, matching=self.matching)
