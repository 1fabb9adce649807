"""Transaction kind classification by invoice-number prefix."""

from decimal import Decimal

from ledgerscore.domain.entities import BALANCE_TOLERANCE, LedgerRow, TransactionKind


def classify(row: LedgerRow) -> TransactionKind:
    """Map a ledger row to its kind.

    Prefixes are checked in order and the first match wins. PBNK lines are
    bank lines we paid out; they only count as a customer payment when they
    carry credit, otherwise they are kept out of every payment statistic.
    """
    num = row.normalized_number
    if num.startswith("OB"):
        return TransactionKind.OPENING_BALANCE
    if num.startswith("BNK"):
        return TransactionKind.PAYMENT
    if num.startswith("PBNK"):
        if row.credit > BALANCE_TOLERANCE:
            return TransactionKind.PAYMENT
        return TransactionKind.OUR_PAID
    if num.startswith("SAL"):
        return TransactionKind.SALE
    if num.startswith("RSAL"):
        return TransactionKind.RETURN
    if num.startswith("JV") or num.startswith("BIL"):
        return TransactionKind.DISCOUNT
    if row.credit > BALANCE_TOLERANCE:
        return TransactionKind.PAYMENT
    return TransactionKind.OTHER


def is_payment_txn(row: LedgerRow) -> bool:
    return classify(row) is TransactionKind.PAYMENT


def payment_amount(row: LedgerRow) -> Decimal:
    """Signed payment value; negative for reversal rows."""
    return row.credit - row.debit
