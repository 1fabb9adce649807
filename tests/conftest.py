"""Shared pytest fixtures for ledgerscore tests."""

import logging
import tempfile
import os
from decimal import Decimal
from pathlib import Path
import pytest

from ledgerscore.database.factories import create_sqlite_database
from ledgerscore.domain.entities import LedgerRow
from ledgerscore.domain.reference_lists import ReferenceListService


def make_row(
    number: str,
    debit: str = "0",
    credit: str = "0",
    date: str = "2024-06-01",
    customer_name: str = "Acme LLC",
    matching: str | None = None,
    due_date: str | None = None,
    sales_rep: str | None = None,
) -> LedgerRow:
    """Build a ledger row with string amounts."""
    return LedgerRow(
        customer_name=customer_name,
        date=date,
        number=number,
        debit=Decimal(debit),
        credit=Decimal(credit),
        due_date=due_date,
        matching=matching,
        sales_rep=sales_rep,
    )


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo logging configuration done by CLI invocations."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def reference_service(temp_db):
    """Create a ReferenceListService with a temporary database."""
    return ReferenceListService(temp_db)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def ledger_csv(fixtures_dir):
    """Path to the sample ledger export."""
    return fixtures_dir / "ledger.csv"
