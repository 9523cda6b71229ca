"""Domain model entities for tripledger.

These are pure data classes representing business concepts, independent of
database schema. Persisted entities (accounts, import batches, transactions,
categories) come back from the Database layer; pipeline entities (candidates,
mappings, trips, allowances) are derived and never stored as such.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class Direction(str, Enum):
    """Money direction of a transaction; amounts themselves are never negative."""

    INCOME = "income"
    EXPENSE = "expense"


class TripExpenseType(str, Enum):
    """Kind of spend inside a business trip."""

    ACCOMMODATION = "accommodation"
    SUBSISTENCE = "subsistence"
    TRANSPORT = "transport"
    OTHER = "other"


class SubsistenceMethod(str, Enum):
    """How a subsistence allowance was computed."""

    VOUCHED = "vouched"
    FLAT = "flat"
    DAY = "day"


class VehicleType(str, Enum):
    """Vehicle a director travels in, for mileage purposes."""

    PERSONAL = "personal_vehicle"
    COMPANY = "company_vehicle"
    NONE = "none"


# Persisted entities


@dataclass(frozen=True)
class Account:
    """Bank account domain entity."""

    id: int
    user_id: int
    name: str
    bank_name: str
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Ledger category a transaction can be filed under."""

    id: int
    user_id: int
    name: str
    category_type: str
    created_at: datetime


@dataclass(frozen=True)
class ImportBatch:
    """Metadata for one uploaded statement file."""

    id: int
    user_id: int
    filename: str
    row_count: int
    status: str
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Persisted transaction domain entity."""

    id: int
    user_id: int
    account_id: Optional[int]
    import_batch_id: Optional[int]
    date: date
    description: str
    amount: Decimal
    direction: Direction
    reference: Optional[str]
    category_id: Optional[int]
    notes: Optional[str]
    vat_rate: Optional[Decimal]
    imported_at: datetime


# Import pipeline entities


@dataclass(frozen=True)
class ColumnMapping:
    """Header names chosen for each semantic field of a statement.

    Immutable once chosen for an import session. Only one of ``amount`` or
    the ``credit``/``debit`` pair is normally used, but both may be set.
    """

    date: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[str] = None
    credit: Optional[str] = None
    debit: Optional[str] = None
    reference: Optional[str] = None

    @property
    def has_amount_field(self) -> bool:
        return bool(self.amount or self.credit or self.debit)

    @property
    def missing_fields(self) -> list[str]:
        missing = []
        if not self.date:
            missing.append("date")
        if not self.description:
            missing.append("description")
        if not self.has_amount_field:
            missing.append("amount (or credit/debit)")
        return missing

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields

    @property
    def referenced_columns(self) -> list[str]:
        columns = [self.date, self.description, self.amount, self.credit, self.debit, self.reference]
        return [c for c in columns if c]


@dataclass(frozen=True)
class DetectedFormat:
    """Result of bank format detection."""

    bank_name: Optional[str]
    mapping: ColumnMapping


@dataclass(frozen=True)
class TransactionCandidate:
    """A statement row turned into a validated, not yet persisted transaction."""

    date: date
    description: str
    amount: Decimal
    direction: Direction
    reference: Optional[str] = None


@dataclass(frozen=True)
class BuildResult:
    """Candidates built from a statement plus what was dropped and why."""

    candidates: tuple[TransactionCandidate, ...]
    total_rows: int
    short_rows: int = 0
    zero_amount_rows: int = 0
    unparsed_date_rows: int = 0

    @property
    def dropped_rows(self) -> int:
        return self.short_rows + self.zero_amount_rows + self.unparsed_date_rows

    def summary(self) -> str:
        """User-facing parse summary, e.g. "12 of 14 rows parsed"."""
        text = f"{len(self.candidates)} of {self.total_rows} rows parsed"
        reasons = []
        if self.short_rows:
            reasons.append(f"{self.short_rows} short")
        if self.zero_amount_rows:
            reasons.append(f"{self.zero_amount_rows} zero amount")
        if self.unparsed_date_rows:
            reasons.append(f"{self.unparsed_date_rows} unreadable date")
        if reasons:
            text += f" ({', '.join(reasons)} skipped)"
        return text


@dataclass(frozen=True)
class NewTransaction:
    """Row handed to the store for bulk insert."""

    user_id: int
    date: date
    description: str
    amount: Decimal
    direction: Direction
    reference: Optional[str] = None
    account_id: Optional[int] = None
    import_batch_id: Optional[int] = None


@dataclass(frozen=True)
class BatchResult:
    """Outcome of inserting one chunk of candidates."""

    batch_index: int
    size: int
    succeeded_ids: tuple[int, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a chunked import, batch by batch."""

    total: int
    batches: tuple[BatchResult, ...]
    transactions: tuple[Transaction, ...]
    import_batch_id: Optional[int] = None

    @property
    def success(self) -> int:
        return sum(len(b.succeeded_ids) for b in self.batches)

    @property
    def failed_count(self) -> int:
        return self.total - self.success


@dataclass(frozen=True)
class ImportSummary:
    """Counts reported to the caller once an import session finishes."""

    total_rows: int
    valid: int
    duplicates: int
    imported: int
    failed: int


# Trip and allowance entities


@dataclass(frozen=True)
class TripTransaction:
    """A persisted transaction as seen from inside a trip."""

    id: int
    description: str
    amount: Decimal
    date: date
    direction: Direction
    expense_type: TripExpenseType


@dataclass(frozen=True)
class DetectedTrip:
    """A cluster of spend away from base. Derived on every detection run."""

    id: str
    location: str
    start_date: date
    end_date: date
    transactions: tuple[TripTransaction, ...]
    total_spend: Decimal

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days

    @property
    def days(self) -> int:
        return self.nights + 1


@dataclass(frozen=True)
class Invoice:
    """The parts of an invoice the trip matcher needs."""

    id: int
    invoice_number: str
    customer_name: str
    customer_address: Optional[str]
    invoice_date: date
    job_start_date: Optional[date] = None
    job_end_date: Optional[date] = None


@dataclass(frozen=True)
class TravelSettings:
    """Director travel and commute configuration."""

    base_address: Optional[str] = None
    fallback_address: Optional[str] = None
    place_of_work: Optional[str] = None
    workshop_address: Optional[str] = None
    workshop_county: Optional[str] = None
    subsistence_radius_km: int = 8
    commute_method: str = ""
    vehicle_owned_by_director: bool = False

    @property
    def vehicle_type(self) -> VehicleType:
        # Mileage is only claimable on a vehicle the director personally owns
        if self.commute_method == VehicleType.PERSONAL.value and self.vehicle_owned_by_director:
            return VehicleType.PERSONAL
        if self.commute_method == VehicleType.COMPANY.value:
            return VehicleType.COMPANY
        return VehicleType.NONE


@dataclass(frozen=True)
class TripExpense:
    """An actual trip cost taken from the bank statement."""

    description: str
    amount: Decimal
    expense_type: TripExpenseType


@dataclass(frozen=True)
class SubsistenceAllowance:
    """Statutory subsistence for a trip."""

    nights: int
    days: int
    allowance: Decimal
    method: SubsistenceMethod
    accommodation_actual: Decimal
    meals_allowance: Decimal


@dataclass(frozen=True)
class MileageAllowance:
    """Statutory mileage for a round trip."""

    distance_km: int
    allowance: Decimal


@dataclass(frozen=True)
class TripAllowance:
    """Allowances for a trip set against what the statement shows was spent."""

    location: str
    county: Optional[str]
    vehicle_type: VehicleType
    subsistence: SubsistenceAllowance
    mileage: MileageAllowance
    expenses: tuple[TripExpense, ...]
    total_expenses: Decimal
    total_allowance: Decimal
    directors_loan_balance: Decimal
    trip: Optional[DetectedTrip] = None


@dataclass(frozen=True)
class InvoiceTripLink:
    """An invoice's job matched to at most one detected trip."""

    invoice: Invoice
    job_county: str
    matched_trip: Optional[DetectedTrip]
    overnight_stay_detected: bool
    hotel_transactions: tuple[str, ...]
    allowance: TripAllowance

    @property
    def directors_loan_balance(self) -> Decimal:
        """Positive means the company owes the director."""
        return self.allowance.directors_loan_balance


@dataclass
class ConfirmationResult:
    """Counts from writing confirmed trips back as business travel."""

    total: int = 0
    updated: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
