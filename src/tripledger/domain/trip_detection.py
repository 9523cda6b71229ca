"""Business trip detection over persisted transactions.

Detection is a pure function of the transactions handed in: it reads
nothing from the store and writes nothing back. Confirming a trip is a
separate step (see ``trip_confirmation``).
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
import itertools
import logging
import re
import uuid
from typing import Iterable, Optional, Sequence

from tripledger.domain.entities import (
    DetectedTrip,
    Direction,
    Transaction,
    TripExpenseType,
    TripTransaction,
)
from tripledger.domain.irish_towns import (
    COUNTIES,
    COUNTY_OF_TOWN,
    IRISH_TOWNS,
    LOCATION_ABBREVIATIONS,
)

logger = logging.getLogger(__name__)

HOTEL_KEYWORDS = (
    "hotel",
    "b&b",
    "b & b",
    "guesthouse",
    "guest house",
    "hostel",
    "airbnb",
    "booking.com",
    "accommodation",
    "lodge",
    "inn",
)
ACCOMMODATION_KEYWORDS = HOTEL_KEYWORDS + ("dooleys", "stay")
SUBSISTENCE_KEYWORDS = (
    "restaurant",
    "cafe",
    "coffee",
    "food",
    "lunch",
    "dinner",
    "breakfast",
    "pub",
    "bar",
    "takeaway",
    "mcdonalds",
    "subway",
    "supermacs",
    "centra",
    "spar",
    "deli",
    "uisce beatha",
    "costa",
    "insomnia",
    "starbucks",
    "greggs",
    "lidl",
    "aldi",
    "tesco",
    "dunnes",
    "supervalu",
    # forecourt shops, small purchases are meals
    "circle k",
    "applegreen",
    "maxol",
    "texaco",
    "top",
    "emo",
    "go fuel",
    "inver",
)
TRANSPORT_KEYWORDS = (
    "port of",
    "ferry",
    "taxi",
    "freenow",
    "bolt",
    "uber",
    "bus",
    "train",
    "toll",
    "eflow",
    "parking",
    "fuel",
)
# Never trip expenses
EXCLUDED_KEYWORDS = (
    "bank charge",
    "bank fee",
    "government stamp",
    "stamp duty",
    "revenue",
    "rev comm",
    "interest charge",
    "account fee",
    "service charge",
    "direct debit",
    "standing order",
)

_NOT_WORD = re.compile(r"[^a-z0-9\s&.]")
_WHITESPACE = re.compile(r"\s+")
_DUBLIN_EIRCODE = re.compile(r"\bd(?:0[1-9]|1[0-9]|2[0-4]|6w)\b")
_COUNTY_PATTERNS = (re.compile(r"\bco\.?\s+(\w+)\b"), re.compile(r"\bcounty\s+(\w+)\b"))


def normalise(text: str) -> str:
    """Lower-case, replace punctuation with spaces and collapse whitespace."""
    text = _NOT_WORD.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def _build_locations() -> dict[str, str]:
    # Keys are normalised like descriptions so "Carrick-on-Suir" can match
    locations = {normalise(town.name): town.name for town in IRISH_TOWNS}
    locations.update(LOCATION_ABBREVIATIONS)
    return locations


LOCATIONS: dict[str, str] = _build_locations()

# Longest key first so "carrickmacross" wins over "carrick" and
# "carrick on shannon" over "shannon"
_LOCATION_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(rf"\b{re.escape(key)}\b"), LOCATIONS[key])
    for key in sorted(LOCATIONS, key=len, reverse=True)
)


def _find_location(address: Optional[str]) -> Optional[str]:
    if not address:
        return None
    norm = normalise(address)
    for pattern, name in _LOCATION_PATTERNS:
        if pattern.search(norm):
            return name
    if _DUBLIN_EIRCODE.search(norm):
        return "Dublin"
    return None


def extract_base_location(
    address: Optional[str], fallback_address: Optional[str] = None
) -> Optional[str]:
    """Find the town a business is based in from its address.

    Args:
        address: Primary address, e.g. the business address
        fallback_address: Tried when the primary yields nothing, e.g. the
            director's home address

    Returns:
        Canonical town name, or None if neither address names a known place
    """
    return _find_location(address) or _find_location(fallback_address)


def extract_county_from_address(address: Optional[str]) -> Optional[str]:
    """Find the county of a free-text address.

    An explicit "Co. X" or "County X" naming a known county wins; otherwise
    the county of the first town found in the address is used.
    """
    if not address:
        return None
    norm = normalise(address)
    for pattern in _COUNTY_PATTERNS:
        match = pattern.search(norm)
        if match:
            candidate = match.group(1).capitalize()
            if candidate in COUNTIES:
                return candidate

    location = extract_base_location(address)
    if location is not None:
        return COUNTY_OF_TOWN.get(location)
    return None


def county_of(location: Optional[str]) -> Optional[str]:
    """County of a canonical town name."""
    if location is None:
        return None
    return COUNTY_OF_TOWN.get(location)


def detect_transaction_location(description: str) -> Optional[str]:
    """Find the place named in a transaction description."""
    norm = normalise(description)
    for pattern, name in _LOCATION_PATTERNS:
        if pattern.search(norm):
            return name
    return None


def classify_trip_expense(description: str) -> TripExpenseType:
    """Classify a description by keyword.

    Excluded bank and revenue charges always come back as OTHER. After that
    accommodation beats transport, which beats subsistence.
    """
    norm = normalise(description)
    if any(k in norm for k in EXCLUDED_KEYWORDS):
        return TripExpenseType.OTHER
    if any(k in norm for k in ACCOMMODATION_KEYWORDS):
        return TripExpenseType.ACCOMMODATION
    if any(k in norm for k in TRANSPORT_KEYWORDS):
        return TripExpenseType.TRANSPORT
    if any(k in norm for k in SUBSISTENCE_KEYWORDS):
        return TripExpenseType.SUBSISTENCE
    return TripExpenseType.OTHER


def is_excluded(description: str) -> bool:
    norm = normalise(description)
    return any(k in norm for k in EXCLUDED_KEYWORDS)


def is_hotel_booking(description: str) -> bool:
    norm = normalise(description)
    return any(k in norm for k in HOTEL_KEYWORDS)


@dataclass(frozen=True)
class JobWindow:
    """Inclusive date range of a known job."""

    start: date
    end: date

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


def classify_in_context(
    description: str, txn_date: date, job_windows: Sequence[JobWindow] = ()
) -> TripExpenseType:
    """Classify, treating unclassified spend during a job as subsistence.

    Excluded charges stay OTHER even inside a job window.
    """
    expense_type = classify_trip_expense(description)
    if (
        expense_type is TripExpenseType.OTHER
        and any(txn_date in w for w in job_windows)
        and not is_excluded(description)
    ):
        return TripExpenseType.SUBSISTENCE
    return expense_type


@dataclass
class _TripDraft:
    location: str
    start_date: date
    end_date: date
    txns: list[Transaction] = field(default_factory=list)


def _is_home(location: str, base_location: Optional[str]) -> bool:
    if not base_location:
        return False
    if location.lower() == base_location.lower():
        return True
    base_county = COUNTY_OF_TOWN.get(base_location)
    txn_county = COUNTY_OF_TOWN.get(location)
    return bool(base_county and txn_county and base_county == txn_county)


def detect_trips(
    transactions: Iterable[Transaction],
    base_location: Optional[str],
    job_windows: Sequence[JobWindow] = (),
) -> list[DetectedTrip]:
    """Cluster spend away from base into trips.

    Only expenses with a recognisable place that is neither the base nor in
    the base's county take part. A day at a place qualifies with two or more
    transactions or a single hotel booking; qualifying days at the same
    place at most one day apart merge into one trip.

    Args:
        transactions: Persisted transactions, typically one date window
        base_location: Canonical town the business is based in, if known
        job_windows: Known job date ranges; unclassified spend inside them
            is treated as subsistence

    Returns:
        Trips ordered by location then start date. Trip ids are unique
        within this call only.
    """
    groups: dict[tuple[date, str], list[Transaction]] = {}
    for txn in transactions:
        if txn.direction is not Direction.EXPENSE:
            continue
        location = detect_transaction_location(txn.description)
        if location is None or _is_home(location, base_location):
            continue
        groups.setdefault((txn.date, location), []).append(txn)

    qualified = [
        (day, location, txns)
        for (day, location), txns in groups.items()
        if len(txns) >= 2 or any(is_hotel_booking(t.description) for t in txns)
    ]
    qualified.sort(key=lambda item: (item[1], item[0]))

    drafts: list[_TripDraft] = []
    for day, location, txns in qualified:
        current = drafts[-1] if drafts else None
        if current and current.location == location and (day - current.end_date).days <= 1:
            current.end_date = day
            current.txns.extend(txns)
        else:
            drafts.append(_TripDraft(location=location, start_date=day, end_date=day, txns=list(txns)))

    run_token = uuid.uuid4().hex[:8]
    counter = itertools.count(1)
    trips = [_build_trip(draft, f"trip-{next(counter)}-{run_token}", job_windows) for draft in drafts]
    logger.info("Detected %d trip(s) away from %s", len(trips), base_location or "unknown base")
    return trips


def _build_trip(draft: _TripDraft, trip_id: str, job_windows: Sequence[JobWindow]) -> DetectedTrip:
    members = tuple(
        TripTransaction(
            id=t.id,
            description=t.description,
            amount=t.amount,
            date=t.date,
            direction=t.direction,
            expense_type=classify_in_context(t.description, t.date, job_windows),
        )
        for t in draft.txns
    )
    return DetectedTrip(
        id=trip_id,
        location=draft.location,
        start_date=draft.start_date,
        end_date=draft.end_date,
        transactions=members,
        total_spend=sum((abs(t.amount) for t in draft.txns), Decimal("0")),
    )
