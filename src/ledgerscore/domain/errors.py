"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def customer_not_found(customer_name: str) -> str:
    """Return message for a customer absent from the ledger."""
    return f"Customer '{customer_name}' not found in ledger"


def blank_customer_name() -> str:
    """Return message for an empty customer name."""
    return "Customer name must not be empty"


def customer_already_listed(customer_name: str, list_label: str) -> str:
    """Return message for a duplicate list entry."""
    return f"Customer '{customer_name}' is already in the {list_label} list"


def customer_not_listed(customer_name: str, list_label: str) -> str:
    """Return message for removing a customer that is not listed."""
    return f"Customer '{customer_name}' is not in the {list_label} list"


def email_not_found(customer_name: str) -> str:
    """Return message for a customer without an email on file."""
    return f"No email on file for customer '{customer_name}'"


def duplicate_override(number: str, matching: str) -> str:
    """Return message for a duplicate override pair."""
    return f"Override for number '{number}' in matching '{matching}' already exists"


def override_not_found(number: str, matching: str) -> str:
    """Return message for a missing override pair."""
    return f"No override for number '{number}' in matching '{matching}'"


def missing_ledger_columns(columns: list[str]) -> str:
    """Return message when a ledger export lacks required columns."""
    return f"Ledger file missing required columns: {', '.join(columns)}"
