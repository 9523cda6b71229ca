"""Trip domain service: detection and allowances over stored transactions."""

from datetime import date
import logging
from typing import Optional, Sequence

from tripledger.database.base import Database
from tripledger.domain.allowances import AllowanceCalculator, InvoiceTripMatcher
from tripledger.domain.entities import (
    DetectedTrip,
    Direction,
    Invoice,
    InvoiceTripLink,
    TravelSettings,
    TripAllowance,
)
from tripledger.domain.errors import ValidationError
from tripledger.domain.trip_detection import JobWindow, detect_trips

logger = logging.getLogger(__name__)


class TripService:
    """Service for finding business trips in a user's transactions."""

    def __init__(self, db: Database, settings: Optional[TravelSettings] = None):
        """Initialize trip service.

        Args:
            db: Database instance
            settings: Director travel settings; defaults to empty settings
        """
        self.db = db
        self.calculator = AllowanceCalculator(settings or TravelSettings())

    @property
    def base_location(self) -> Optional[str]:
        return self.calculator.base_location

    def detect(
        self,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        job_windows: Sequence[JobWindow] = (),
        import_batch_id: Optional[int] = None,
    ) -> list[DetectedTrip]:
        """Detect trips among a user's expenses in a date window.

        Args:
            user_id: Owner of the transactions
            start_date: Optional start of the window (inclusive)
            end_date: Optional end of the window (inclusive)
            job_windows: Known job date ranges
            import_batch_id: Restrict detection to one uploaded file

        Raises:
            ValidationError: If the window ends before it starts
        """
        if start_date and end_date and start_date > end_date:
            raise ValidationError("Start date must be before or equal to end date")
        expenses = self.db.list_transactions(
            user_id,
            start_date=start_date,
            end_date=end_date,
            direction=Direction.EXPENSE,
            import_batch_id=import_batch_id,
        )
        return detect_trips(expenses, self.base_location, job_windows)

    def allowances(self, trips: Sequence[DetectedTrip]) -> list[TripAllowance]:
        """Allowance for each trip, in the same order."""
        return [self.calculator.for_trip(trip) for trip in trips]

    def match_invoices(
        self,
        user_id: int,
        invoices: Sequence[Invoice],
        start_date: date,
        end_date: date,
    ) -> list[InvoiceTripLink]:
        """Match invoices dated inside the window to the user's travel spend.

        Args:
            user_id: Owner of the transactions
            invoices: Invoices from the invoicing system
            start_date: Start of the window (inclusive)
            end_date: End of the window (inclusive)
        """
        in_window = [inv for inv in invoices if start_date <= inv.invoice_date <= end_date]
        expenses = self.db.list_transactions(
            user_id, start_date=start_date, end_date=end_date, direction=Direction.EXPENSE
        )
        return InvoiceTripMatcher(self.calculator).match(in_window, expenses)
