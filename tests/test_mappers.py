"""Tests for database mappers."""

from datetime import datetime, UTC

from ledgerscore.database.models import (
    CustomerFlag as ORMCustomerFlag,
    CustomerEmail as ORMCustomerEmail,
    OverridePair as ORMOverridePair,
)
from ledgerscore.database.mappers import (
    customer_flag_to_domain,
    customer_email_to_domain,
    override_to_domain,
)
from ledgerscore.domain.entities import (
    CustomerEmail,
    CustomerFlag,
    CustomerListType,
    OverrideEntry,
)


class TestCustomerFlagMapper:
    """Tests for CustomerFlag mapper."""

    def test_customer_flag_to_domain(self):
        """Test converting ORM CustomerFlag to domain CustomerFlag."""
        created_at = datetime.now(UTC)
        orm_flag = ORMCustomerFlag(
            id=1,
            list_type="semi_closed",
            customer_name="Acme LLC",
            normalized_name="acme llc",
            created_at=created_at,
        )

        flag = customer_flag_to_domain(orm_flag)

        assert isinstance(flag, CustomerFlag)
        assert flag.id == 1
        assert flag.list_type is CustomerListType.SEMI_CLOSED
        assert flag.customer_name == "Acme LLC"
        assert flag.normalized_name == "acme llc"
        assert flag.created_at == created_at


class TestCustomerEmailMapper:
    """Tests for CustomerEmail mapper."""

    def test_customer_email_to_domain(self):
        orm_email = ORMCustomerEmail(
            id=3,
            customer_name="Acme LLC",
            normalized_name="acme llc",
            email="ar@acme.test",
            created_at=datetime.now(UTC),
        )

        entry = customer_email_to_domain(orm_email)

        assert isinstance(entry, CustomerEmail)
        assert entry.id == 3
        assert entry.email == "ar@acme.test"


class TestOverrideMapper:
    """Tests for OverridePair mapper."""

    def test_override_to_domain(self):
        orm_override = ORMOverridePair(
            id=7,
            number="SAL-2",
            matching="M7",
            number_key="sal-2",
            matching_key="m7",
            created_at=datetime.now(UTC),
        )

        entry = override_to_domain(orm_override)

        assert isinstance(entry, OverrideEntry)
        assert entry.number == "SAL-2"
        assert entry.matching == "M7"
        assert entry.to_pair().number == "SAL-2"
