"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from tripledger.domain.entities import (
    Account,
    Category,
    Direction,
    ImportBatch,
    NewTransaction,
    Transaction,
)


class Database(ABC):
    """Abstract database interface for tripledger.

    Write methods raise ``StoreError`` when the underlying store rejects the
    operation; a failed write leaves nothing behind.
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

    # Account operations
    @abstractmethod
    def create_account(self, user_id: int, name: str, bank_name: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: int) -> list[Account]:
        """List a user's accounts."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, user_id: int, name: str, category_type: str = "expense") -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, user_id: int) -> list[Category]:
        """List a user's categories ordered by name."""
        pass

    # Import batch operations
    @abstractmethod
    def create_import_batch(
        self, user_id: int, filename: str, row_count: int, status: str = "completed"
    ) -> ImportBatch:
        """Record an uploaded file. Returns the stored batch."""
        pass

    @abstractmethod
    def get_import_batch(self, batch_id: int) -> Optional[ImportBatch]:
        """Get import batch by ID."""
        pass

    @abstractmethod
    def list_import_batches(self, user_id: int) -> list[ImportBatch]:
        """List a user's import batches, newest first."""
        pass

    @abstractmethod
    def delete_import_batch(self, batch_id: int) -> int:
        """Delete a batch and the transactions it produced. Returns the transaction count removed."""
        pass

    # Transaction operations
    @abstractmethod
    def insert_transactions(self, rows: Sequence[NewTransaction]) -> list[int]:
        """Insert rows in one unit of work.

        Returns the generated IDs in the same order as ``rows``. Either every
        row is stored or none is.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        direction: Optional[Direction] = None,
        import_batch_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List a user's transactions with optional filters, oldest first.

        Args:
            user_id: Owner of the transactions
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            direction: Optional income/expense filter
            import_batch_id: Optional filter to one uploaded file
        """
        pass

    @abstractmethod
    def update_transaction_categorization(
        self,
        transaction_id: int,
        category_id: Optional[int],
        notes: Optional[str],
        vat_rate: Optional[Decimal] = None,
    ) -> None:
        """Set category, notes and VAT rate on a transaction."""
        pass
