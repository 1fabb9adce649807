"""SQLAlchemy models for the ledgerscore reference-list database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class CustomerFlag(Base):
    """Customer listed as closed or semi-closed."""

    __tablename__ = "customer_flags"

    id = Column(Integer, primary_key=True)
    list_type = Column(String, nullable=False)
    customer_name = Column(String, nullable=False)
    normalized_name = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("list_type", "normalized_name", name="uq_list_customer"),
    )


class CustomerEmail(Base):
    """Email address on file for a customer."""

    __tablename__ = "customer_emails"

    id = Column(Integer, primary_key=True)
    customer_name = Column(String, nullable=False)
    normalized_name = Column(String, unique=True, nullable=False)
    email = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class OverridePair(Base):
    """Row forced to hold its matching group's residual."""

    __tablename__ = "override_pairs"

    id = Column(Integer, primary_key=True)
    number = Column(String, nullable=False)
    matching = Column(String, nullable=False)
    number_key = Column(String, nullable=False)
    matching_key = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("number_key", "matching_key", name="uq_override_pair"),
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
