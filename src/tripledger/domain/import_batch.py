"""Import batch domain service."""

import logging
from typing import Optional

from tripledger.database.base import Database
from tripledger.domain.entities import ImportBatch, Transaction
from tripledger.domain.errors import NotFoundError, import_batch_not_found

logger = logging.getLogger(__name__)


class ImportBatchService:
    """Service for reviewing and undoing a user's statement uploads."""

    def __init__(self, db: Database):
        """Initialize import batch service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_batches(self, user_id: int) -> list[ImportBatch]:
        """List a user's import batches, newest first."""
        return self.db.list_import_batches(user_id)

    def get_batch(self, user_id: int, batch_id: int) -> Optional[ImportBatch]:
        """Get a batch only if it belongs to ``user_id``."""
        batch = self.db.get_import_batch(batch_id)
        if batch is None or batch.user_id != user_id:
            return None
        return batch

    def list_batch_transactions(self, user_id: int, batch_id: int) -> list[Transaction]:
        """Transactions stored by one upload, oldest first.

        Raises:
            NotFoundError: If the user has no such batch
        """
        if self.get_batch(user_id, batch_id) is None:
            raise NotFoundError(import_batch_not_found(batch_id))
        return self.db.list_transactions(user_id, import_batch_id=batch_id)

    def delete_batch(self, user_id: int, batch_id: int) -> int:
        """Delete a batch together with the transactions it stored.

        Returns:
            Number of transactions removed

        Raises:
            NotFoundError: If the user has no such batch
        """
        if self.get_batch(user_id, batch_id) is None:
            raise NotFoundError(import_batch_not_found(batch_id))
        removed = self.db.delete_import_batch(batch_id)
        logger.info("Deleted import batch %d and %d transaction(s)", batch_id, removed)
        return removed
