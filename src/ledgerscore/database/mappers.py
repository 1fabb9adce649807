"""Mapper functions to convert between domain models and SQLAlchemy models."""

from ledgerscore.domain import entities as domain
from ledgerscore.database.models import (
    CustomerFlag as ORMCustomerFlag,
    CustomerEmail as ORMCustomerEmail,
    OverridePair as ORMOverridePair,
)


def customer_flag_to_domain(orm_flag: ORMCustomerFlag) -> domain.CustomerFlag:
    """Convert SQLAlchemy CustomerFlag model to domain CustomerFlag entity."""
    return domain.CustomerFlag(
        id=orm_flag.id,
        list_type=domain.CustomerListType(orm_flag.list_type),
        customer_name=orm_flag.customer_name,
        normalized_name=orm_flag.normalized_name,
        created_at=orm_flag.created_at,
    )


def customer_email_to_domain(orm_email: ORMCustomerEmail) -> domain.CustomerEmail:
    """Convert SQLAlchemy CustomerEmail model to domain CustomerEmail entity."""
    return domain.CustomerEmail(
        id=orm_email.id,
        customer_name=orm_email.customer_name,
        normalized_name=orm_email.normalized_name,
        email=orm_email.email,
        created_at=orm_email.created_at,
    )


def override_to_domain(orm_override: ORMOverridePair) -> domain.OverrideEntry:
    """Convert SQLAlchemy OverridePair model to domain OverrideEntry entity."""
    return domain.OverrideEntry(
        id=orm_override.id,
        number=orm_override.number,
        matching=orm_override.matching,
        created_at=orm_override.created_at,
    )
