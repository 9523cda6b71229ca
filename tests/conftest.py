"""Shared pytest fixtures for tripledger tests."""

import logging
import tempfile
import os
from datetime import date
from decimal import Decimal
from pathlib import Path
import pytest

from tripledger.database.factories import create_sqlite_database
from tripledger.domain.account import AccountService
from tripledger.domain.category import CategoryService
from tripledger.domain.entities import Direction, NewTransaction
from tripledger.domain.statement_import import StatementImportService
from tripledger.domain.trip_confirmation import TripConfirmationService

USER_ID = 1
OTHER_USER_ID = 2


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo the logging setup a CLI invocation applies."""
    yield
    logger = logging.getLogger("tripledger")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


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
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a StatementImportService with a temporary database."""
    return StatementImportService(temp_db)


@pytest.fixture
def confirmation_service(temp_db):
    """Create a TripConfirmationService that does not pause between groups."""
    return TripConfirmationService(temp_db, pause=0)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account for testing."""
    account_id = account_service.create_account(
        user_id=USER_ID, name="Test Account", bank_name="Test Bank"
    )
    return account_service.get_account(account_id)


@pytest.fixture
def travel_categories(category_service):
    """Create the categories trip confirmation files transactions under."""
    return {
        name: category_service.create_category(user_id=USER_ID, name=name)
        for name in ("Travel & Subsistence", "Motor/travel", "Subsistence")
    }


@pytest.fixture
def store_transactions(temp_db):
    """Insert expense rows for a user: ``store_transactions([(date, description, amount), ...])``."""

    def _store(rows, user_id=USER_ID, direction=Direction.EXPENSE):
        ids = temp_db.insert_transactions(
            [
                NewTransaction(
                    user_id=user_id,
                    date=txn_date,
                    description=description,
                    amount=Decimal(amount),
                    direction=direction,
                )
                for txn_date, description, amount in rows
            ]
        )
        return [temp_db.get_transaction(txn_id) for txn_id in ids]

    return _store


@pytest.fixture
def galway_trip_rows():
    """A night in Galway seen from a Navan base."""
    return [
        (date(2025, 3, 10), "HOTEL MERIDIAN GALWAY", "140.00"),
        (date(2025, 3, 11), "CENTRA GALWAY", "12.40"),
        (date(2025, 3, 11), "SUPERMACS GALWAY", "18.90"),
    ]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
