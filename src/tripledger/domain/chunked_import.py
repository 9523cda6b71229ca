"""Chunked persistence of transaction candidates."""

from datetime import datetime, UTC
import logging
from typing import Callable, Optional, Sequence

from tripledger.database.base import Database
from tripledger.domain.entities import (
    BatchResult,
    ImportResult,
    NewTransaction,
    Transaction,
    TransactionCandidate,
)
from tripledger.domain.errors import StoreError

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 50


class ChunkedImporter:
    """Insert candidates in fixed-size batches, isolating failures per batch.

    A failed batch is recorded and the remaining batches still run. Batches
    already written are never rolled back, so an import can partly succeed.
    """

    def __init__(self, db: Database, batch_size: int = DEFAULT_BATCH_SIZE):
        """Initialize the importer.

        Args:
            db: Database instance
            batch_size: Maximum number of rows per insert
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.db = db
        self.batch_size = batch_size

    def create_batch(self, user_id: int, filename: str, row_count: int) -> Optional[int]:
        """Record the uploaded file, returning None if the store refuses it."""
        try:
            batch = self.db.create_import_batch(
                user_id=user_id, filename=filename, row_count=row_count
            )
        except StoreError as e:
            logger.warning("Could not record import batch for %s: %s", filename, e)
            return None
        return batch.id

    def _resolve_account(self, user_id: int, account_id: Optional[int]) -> Optional[int]:
        if account_id is None:
            return None
        account = self.db.get_account(account_id)
        if account is None or account.user_id != user_id:
            logger.warning("Account %s not found, importing unassigned", account_id)
            return None
        return account_id

    def import_candidates(
        self,
        user_id: int,
        candidates: Sequence[TransactionCandidate],
        filename: Optional[str] = None,
        account_id: Optional[int] = None,
        progress: Optional[Callable[[int], None]] = None,
    ) -> ImportResult:
        """Persist candidates batch by batch.

        Args:
            user_id: Owner of the new transactions
            candidates: Candidates to store, in the order they should appear
            filename: Uploaded file name; when given an import batch is recorded first
            account_id: Optional account the transactions belong to
            progress: Called with the percentage of rows processed after each batch

        Returns:
            ImportResult with one BatchResult per batch and the stored transactions
        """
        import_batch_id = None
        if filename is not None and candidates:
            import_batch_id = self.create_batch(user_id, filename, len(candidates))
        account_id = self._resolve_account(user_id, account_id)

        total = len(candidates)
        batches: list[BatchResult] = []
        stored: list[Transaction] = []

        for batch_index, start in enumerate(range(0, total, self.batch_size)):
            chunk = candidates[start : start + self.batch_size]
            rows = [
                NewTransaction(
                    user_id=user_id,
                    date=c.date,
                    description=c.description,
                    amount=c.amount,
                    direction=c.direction,
                    reference=c.reference,
                    account_id=account_id,
                    import_batch_id=import_batch_id,
                )
                for c in chunk
            ]
            try:
                ids = self.db.insert_transactions(rows)
            except StoreError as e:
                logger.warning("Batch %d (%d rows) failed: %s", batch_index, len(rows), e)
                batches.append(BatchResult(batch_index=batch_index, size=len(rows), error=str(e)))
            else:
                if len(ids) != len(rows):
                    # Ids are matched to rows by position, so a short reply is unusable
                    error = f"store returned {len(ids)} ids for {len(rows)} rows"
                    logger.warning("Batch %d failed: %s", batch_index, error)
                    batches.append(BatchResult(batch_index=batch_index, size=len(rows), error=error))
                else:
                    batches.append(
                        BatchResult(batch_index=batch_index, size=len(rows), succeeded_ids=tuple(ids))
                    )
                    stored.extend(_to_transactions(rows, ids))

            done = start + len(chunk)
            logger.info("Imported batch %d: %d/%d rows processed", batch_index, done, total)
            if progress is not None:
                progress(round(done / total * 100))

        result = ImportResult(
            total=total,
            batches=tuple(batches),
            transactions=tuple(stored),
            import_batch_id=import_batch_id,
        )
        logger.info("Import finished: %d stored, %d failed", result.success, result.failed_count)
        return result


def _to_transactions(rows: Sequence[NewTransaction], ids: Sequence[int]) -> list[Transaction]:
    imported_at = datetime.now(UTC)
    return [
        Transaction(
            id=txn_id,
            user_id=row.user_id,
            account_id=row.account_id,
            import_batch_id=row.import_batch_id,
            date=row.date,
            description=row.description,
            amount=row.amount,
            direction=row.direction,
            reference=row.reference,
            category_id=None,
            notes=None,
            vat_rate=None,
            imported_at=imported_at,
        )
        for row, txn_id in zip(rows, ids)
    ]
