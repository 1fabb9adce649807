"""Reference list domain service."""

import logging

from ledgerscore.database.base import Database
from ledgerscore.domain.entities import (
    CustomerEmail,
    CustomerFlag,
    CustomerListType,
    OverrideEntry,
    ReferenceLists,
)
from ledgerscore.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    blank_customer_name,
    customer_already_listed,
    customer_not_listed,
    duplicate_override,
    email_not_found,
    override_not_found,
)
from ledgerscore.utils.names import normalize_customer_name, normalize_key

logger = logging.getLogger(__name__)

LIST_LABELS = {
    CustomerListType.CLOSED: "closed",
    CustomerListType.SEMI_CLOSED: "semi-closed",
}


class ReferenceListService:
    """Service for managing the closed, semi-closed, email and override lists."""

    def __init__(self, db: Database):
        """Initialize reference list service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_customer(self, list_type: CustomerListType, customer_name: str) -> int:
        """Add a customer to the closed or semi-closed list.

        Args:
            list_type: Which list to add to
            customer_name: Customer name as shown in the ledger

        Returns:
            Entry ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If the customer is already listed
        """
        normalized = normalize_customer_name(customer_name)
        if not normalized:
            raise ValidationError(blank_customer_name())
        if self.db.get_customer_flag(list_type, normalized) is not None:
            raise ConflictError(customer_already_listed(customer_name, LIST_LABELS[list_type]))

        logger.info("Adding %r to %s list", customer_name, LIST_LABELS[list_type])
        return self.db.add_customer_flag(list_type, customer_name.strip(), normalized)

    def remove_customer(self, list_type: CustomerListType, customer_name: str) -> None:
        """Remove a customer from the closed or semi-closed list.

        Raises:
            NotFoundError: If the customer is not listed
        """
        normalized = normalize_customer_name(customer_name)
        flag = self.db.get_customer_flag(list_type, normalized)
        if flag is None:
            raise NotFoundError(customer_not_listed(customer_name, LIST_LABELS[list_type]))

        logger.info("Removing %r from %s list", customer_name, LIST_LABELS[list_type])
        self.db.delete_customer_flag(flag.id)

    def list_customers(self, list_type: CustomerListType) -> list[CustomerFlag]:
        return self.db.list_customer_flags(list_type)

    def set_email(self, customer_name: str, email: str) -> int:
        """Record (or replace) the email address of a customer.

        Raises:
            ValidationError: If the name is blank or the email is malformed
        """
        normalized = normalize_customer_name(customer_name)
        if not normalized:
            raise ValidationError(blank_customer_name())
        email = email.strip()
        if "@" not in email or email.startswith("@") or email.endswith("@"):
            raise ValidationError(f"Invalid email address '{email}'")
        return self.db.upsert_customer_email(customer_name.strip(), normalized, email)

    def remove_email(self, customer_name: str) -> None:
        """Remove the email address of a customer.

        Raises:
            NotFoundError: If no email is on file
        """
        entry = self.db.get_customer_email(normalize_customer_name(customer_name))
        if entry is None:
            raise NotFoundError(email_not_found(customer_name))
        self.db.delete_customer_email(entry.id)

    def list_emails(self) -> list[CustomerEmail]:
        return self.db.list_customer_emails()

    def add_override(self, number: str, matching: str) -> int:
        """Force the row with this number to hold its matching group's residual.

        Raises:
            ValidationError: If number or matching is blank
            ConflictError: If the pair already exists
        """
        number_key = normalize_key(number)
        matching_key = normalize_key(matching)
        if not number_key or not matching_key:
            raise ValidationError("Override needs both a number and a matching key")
        if self.db.get_override(number_key, matching_key) is not None:
            raise ConflictError(duplicate_override(number, matching))

        logger.info("Adding override %r for matching %r", number, matching)
        return self.db.add_override(number.strip(), matching.strip(), number_key, matching_key)

    def remove_override(self, number: str, matching: str) -> None:
        """Remove an override pair.

        Raises:
            NotFoundError: If the pair does not exist
        """
        entry = self.db.get_override(normalize_key(number), normalize_key(matching))
        if entry is None:
            raise NotFoundError(override_not_found(number, matching))
        self.db.delete_override(entry.id)

    def list_overrides(self) -> list[OverrideEntry]:
        return self.db.list_overrides()

    def snapshot(self) -> ReferenceLists:
        """Load all lists into an immutable snapshot for the engine."""
        return ReferenceLists(
            closed_customers=frozenset(
                flag.normalized_name for flag in self.list_customers(CustomerListType.CLOSED)
            ),
            semi_closed_customers=frozenset(
                flag.normalized_name
                for flag in self.list_customers(CustomerListType.SEMI_CLOSED)
            ),
            customer_emails=frozenset(entry.normalized_name for entry in self.list_emails()),
            override_pairs=tuple(entry.to_pair() for entry in self.list_overrides()),
        )
