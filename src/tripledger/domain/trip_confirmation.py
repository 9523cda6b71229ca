"""Write confirmed trips back to the ledger as business travel."""

from dataclasses import dataclass
from decimal import Decimal
import logging
from typing import Callable, Optional, Sequence

from tripledger.database.base import Database
from tripledger.domain.allowances import DAY_TRIP_TEN_HOURS, OVERNIGHT_NORMAL
from tripledger.domain.category import CategoryService
from tripledger.domain.entities import (
    ConfirmationResult,
    DetectedTrip,
    InvoiceTripLink,
    TripExpenseType,
    TripTransaction,
)
from tripledger.domain.errors import NotFoundError
from tripledger.utils.grouping import run_in_groups

logger = logging.getLogger(__name__)

CONFIRM_GROUP_SIZE = 10
CONFIRM_PAUSE_SECONDS = 0.05

TRAVEL_CATEGORY = "Travel & Subsistence"
MOTOR_CATEGORY = "Motor/travel"
SUBSISTENCE_CATEGORY = "Subsistence"

CATEGORY_FOR_EXPENSE = {
    TripExpenseType.ACCOMMODATION: TRAVEL_CATEGORY,
    TripExpenseType.SUBSISTENCE: TRAVEL_CATEGORY,
    TripExpenseType.TRANSPORT: MOTOR_CATEGORY,
    TripExpenseType.OTHER: TRAVEL_CATEGORY,
}

# Hotel VAT is not deductible but is still charged at 13.5%
VAT_RATE_FOR_EXPENSE = {
    TripExpenseType.ACCOMMODATION: Decimal("13.5"),
    TripExpenseType.SUBSISTENCE: Decimal("23"),
    TripExpenseType.TRANSPORT: Decimal("0"),
    TripExpenseType.OTHER: Decimal("23"),
}


@dataclass(frozen=True)
class _ConfirmItem:
    txn: TripTransaction
    trip: DetectedTrip
    link: Optional[InvoiceTripLink]


def trip_note(
    txn: TripTransaction, trip: DetectedTrip, link: Optional[InvoiceTripLink] = None
) -> str:
    """Build the ledger note for one transaction of a confirmed trip."""
    start, end = trip.start_date.isoformat(), trip.end_date.isoformat()
    if start == end:
        where = f"Business trip to {trip.location} on {start}."
    else:
        where = f"Business trip to {trip.location} ({start} to {end})."

    note = f"[Trip] {where} {txn.expense_type.value}."
    if txn.expense_type is TripExpenseType.ACCOMMODATION:
        note += " Hotel VAT not deductible (Section 60(2)(a)(i))."

    if link is not None:
        if (
            txn.expense_type is TripExpenseType.ACCOMMODATION
            and link.allowance.subsistence.nights > 0
        ):
            note += f" [Subsistence] €{OVERNIGHT_NORMAL} overnight rate (Revenue civil service rate)."
        elif txn.expense_type is TripExpenseType.SUBSISTENCE:
            note += f" [Subsistence] €{DAY_TRIP_TEN_HOURS} day rate (Revenue civil service rate)."
        if link.invoice.invoice_number:
            note += f" Linked to Invoice {link.invoice.invoice_number}."
    return note.strip()


class TripConfirmationService:
    """Recategorise the transactions of trips the user confirmed."""

    def __init__(
        self,
        db: Database,
        group_size: int = CONFIRM_GROUP_SIZE,
        pause: float = CONFIRM_PAUSE_SECONDS,
    ):
        """Initialize trip confirmation service.

        Args:
            db: Database instance
            group_size: Transactions updated per group
            pause: Seconds to wait between groups
        """
        self.db = db
        self.category_service = CategoryService(db)
        self.group_size = group_size
        self.pause = pause

    def confirm(
        self,
        user_id: int,
        trips: Sequence[DetectedTrip],
        invoice_links: Sequence[InvoiceTripLink] = (),
        progress: Optional[Callable[[int], None]] = None,
    ) -> ConfirmationResult:
        """Set category, VAT rate and note on every transaction of ``trips``.

        A failure on one transaction is counted and never stops the others.

        Args:
            user_id: Owner of the transactions and categories
            trips: Trips the user confirmed
            invoice_links: Invoice matches; a trip matched by one gets the
                rate and invoice annotations
            progress: Called with the percentage processed after each group

        Returns:
            ConfirmationResult with total, updated and failed counts
        """
        link_by_trip = {
            link.matched_trip.id: link for link in invoice_links if link.matched_trip is not None
        }
        items = [
            _ConfirmItem(txn=txn, trip=trip, link=link_by_trip.get(trip.id))
            for trip in trips
            for txn in trip.transactions
        ]

        categories = {
            expense_type: self._category_id(user_id, name)
            for expense_type, name in CATEGORY_FOR_EXPENSE.items()
        }

        def update(item: _ConfirmItem) -> None:
            txn = self.db.get_transaction(item.txn.id)
            if txn is None or txn.user_id != user_id:
                raise NotFoundError(f"Transaction {item.txn.id} not found")
            self.db.update_transaction_categorization(
                transaction_id=item.txn.id,
                category_id=categories[item.txn.expense_type],
                notes=trip_note(item.txn, item.trip, item.link),
                vat_rate=VAT_RATE_FOR_EXPENSE[item.txn.expense_type],
            )

        outcomes = run_in_groups(
            items, update, group_size=self.group_size, pause=self.pause, on_progress=progress
        )

        result = ConfirmationResult(total=len(items))
        for outcome in outcomes:
            if outcome.ok:
                result.updated += 1
            else:
                result.failed += 1
                result.errors.append(f"Transaction {outcome.item.txn.id}: {outcome.error}")
        logger.info(
            "Confirmed %d trip(s): %d updated, %d failed", len(trips), result.updated, result.failed
        )
        return result

    def _category_id(self, user_id: int, preferred: str) -> Optional[int]:
        category = self.category_service.find_by_name(
            user_id, preferred, MOTOR_CATEGORY, SUBSISTENCE_CATEGORY
        )
        if category is None:
            logger.warning("No travel category found for user %s, leaving uncategorised", user_id)
            return None
        return category.id
