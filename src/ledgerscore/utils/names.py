"""Customer name normalization."""

import re

_WHITESPACE = re.compile(r"\s+")


def normalize_customer_name(name: str | None) -> str:
    """Normalize a customer name for list membership checks.

    Lowercases, trims and collapses internal whitespace. Punctuation is kept,
    so "Acme, LLC" and "Acme LLC" stay distinct.
    """
    if not name:
        return ""
    return _WHITESPACE.sub(" ", name.strip().lower())


def normalize_key(value: str | None) -> str:
    """Normalize an invoice number or matching key for comparisons."""
    return (value or "").strip().lower()
