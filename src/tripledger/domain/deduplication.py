"""Content fingerprints and duplicate detection against stored transactions."""

from datetime import date
from decimal import Decimal
import logging
from typing import Iterable, Sequence, Union

from tripledger.database.base import Database
from tripledger.domain.entities import Transaction, TransactionCandidate
from tripledger.utils.amount_parser import round_money

logger = logging.getLogger(__name__)


def fingerprint(description: str, txn_date: date, amount: Decimal) -> str:
    """Build the dedup key for a transaction.

    The key ignores description casing and surrounding whitespace and the
    sign of the amount.

    Args:
        description: Transaction description
        txn_date: Transaction date
        amount: Amount, signed or not

    Returns:
        Key of the form ``description|yyyy-mm-dd|amount``
    """
    return f"{description.strip().lower()}|{txn_date.isoformat()}|{round_money(abs(amount)):.2f}"


def fingerprint_of(txn: Union[Transaction, TransactionCandidate]) -> str:
    """Fingerprint a candidate or a stored transaction."""
    return fingerprint(txn.description, txn.date, txn.amount)


def find_duplicates(
    candidates: Sequence[TransactionCandidate], existing: Iterable[str]
) -> list[bool]:
    """Flag each candidate whose fingerprint is already in ``existing``.

    Returns:
        One flag per candidate, in order
    """
    known = set(existing)
    return [fingerprint_of(c) in known for c in candidates]


class DuplicateService:
    """Compare statement candidates with what a user already has stored."""

    def __init__(self, db: Database):
        """Initialize duplicate service.

        Args:
            db: Database instance
        """
        self.db = db

    def existing_fingerprints(self, user_id: int, start_date: date, end_date: date) -> set[str]:
        """Fingerprints of a user's stored transactions in a date range."""
        stored = self.db.list_transactions(user_id, start_date=start_date, end_date=end_date)
        return {fingerprint_of(txn) for txn in stored}

    def flag_duplicates(
        self, user_id: int, candidates: Sequence[TransactionCandidate]
    ) -> list[bool]:
        """Flag candidates that match a stored transaction of the same user.

        Only the date range spanned by the candidates is fetched from the
        store. Two identical candidates in the same file are not flagged
        against each other.

        Returns:
            One flag per candidate, in order
        """
        if not candidates:
            return []
        dates = [c.date for c in candidates]
        existing = self.existing_fingerprints(user_id, min(dates), max(dates))
        flags = find_duplicates(candidates, existing)
        logger.info("%d of %d candidates already stored", sum(flags), len(candidates))
        return flags
