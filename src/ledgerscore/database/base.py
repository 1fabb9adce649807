"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerscore.domain.entities import (
    CustomerEmail,
    CustomerFlag,
    CustomerListType,
    OverrideEntry,
)


class Database(ABC):
    """Abstract store for the customer reference lists.

    Ledger rows are never stored; only the lists that the engine consumes
    read-only live here.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Closed / semi-closed list operations
    @abstractmethod
    def add_customer_flag(
        self, list_type: CustomerListType, customer_name: str, normalized_name: str
    ) -> int:
        """Add a customer to a list. Returns entry ID."""
        pass

    @abstractmethod
    def get_customer_flag(
        self, list_type: CustomerListType, normalized_name: str
    ) -> Optional[CustomerFlag]:
        """Get a list entry by normalized customer name."""
        pass

    @abstractmethod
    def list_customer_flags(self, list_type: CustomerListType) -> list[CustomerFlag]:
        """List all entries of a list."""
        pass

    @abstractmethod
    def delete_customer_flag(self, flag_id: int) -> None:
        """Delete a list entry."""
        pass

    # Customer email operations
    @abstractmethod
    def upsert_customer_email(
        self, customer_name: str, normalized_name: str, email: str
    ) -> int:
        """Create or replace the email of a customer. Returns entry ID."""
        pass

    @abstractmethod
    def get_customer_email(self, normalized_name: str) -> Optional[CustomerEmail]:
        """Get the email entry of a customer."""
        pass

    @abstractmethod
    def list_customer_emails(self) -> list[CustomerEmail]:
        """List all customer emails."""
        pass

    @abstractmethod
    def delete_customer_email(self, email_id: int) -> None:
        """Delete a customer email entry."""
        pass

    # Override pair operations
    @abstractmethod
    def add_override(
        self, number: str, matching: str, number_key: str, matching_key: str
    ) -> int:
        """Add an override pair. Returns entry ID."""
        pass

    @abstractmethod
    def get_override(self, number_key: str, matching_key: str) -> Optional[OverrideEntry]:
        """Get an override pair by its normalized number and matching."""
        pass

    @abstractmethod
    def list_overrides(self) -> list[OverrideEntry]:
        """List all override pairs."""
        pass

    @abstractmethod
    def delete_override(self, override_id: int) -> None:
        """Delete an override pair."""
        pass
