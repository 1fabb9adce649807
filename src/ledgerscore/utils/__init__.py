"""Utility functions for ledgerscore."""

from ledgerscore.utils.date_parser import parse_date, parse_ledger_date
from ledgerscore.utils.amount_parser import parse_amount
from ledgerscore.utils.names import normalize_customer_name

__all__ = ["parse_date", "parse_ledger_date", "parse_amount", "normalize_customer_name"]
