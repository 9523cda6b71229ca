"""Subsistence and mileage allowances for business travel.

Rates are the Revenue civil service rates effective 29 January 2025. Every
money value is rounded to the cent where it is computed, so recomputing an
allowance always gives the same figure.
"""

from datetime import date, timedelta
from decimal import Decimal
import logging
from typing import Iterable, Optional, Sequence

from tripledger.domain.entities import (
    DetectedTrip,
    Direction,
    Invoice,
    InvoiceTripLink,
    MileageAllowance,
    SubsistenceAllowance,
    SubsistenceMethod,
    Transaction,
    TravelSettings,
    TripAllowance,
    TripExpense,
    TripExpenseType,
    VehicleType,
)
from tripledger.domain.irish_towns import COUNTY_DISTANCE_FROM_DUBLIN
from tripledger.domain.trip_detection import (
    JobWindow,
    classify_in_context,
    county_of,
    detect_trips,
    extract_base_location,
    extract_county_from_address,
    is_excluded,
)
from tripledger.utils.amount_parser import round_money

logger = logging.getLogger(__name__)

# Subsistence (EUR)
OVERNIGHT_NORMAL = Decimal("205.53")
VOUCHED_DAY_RATE = Decimal("46.17")
DAY_TRIP_TEN_HOURS = Decimal("46.17")

# Mileage bands as (upper km bound, EUR per km); None means no upper bound
MILEAGE_BANDS: dict[str, tuple[tuple[Optional[int], Decimal], ...]] = {
    "motor_car": (
        (1_500, Decimal("0.5182")),
        (5_500, Decimal("0.9063")),
        (25_000, Decimal("0.3922")),
        (None, Decimal("0.2587")),
    ),
    "motorcycle": (
        (6_437, Decimal("0.2372")),
        (None, Decimal("0.1529")),
    ),
}
BICYCLE_RATE = Decimal("0.08")

DEFAULT_WORKING_DAYS = 230
MINIMUM_INTER_COUNTY_KM = 50
# Days either side of the invoice date searched when a job has no dates
INVOICE_DATE_SLACK_DAYS = 2


def calculate_mileage_allowance(distance_km: Decimal | int, vehicle: str = "motor_car") -> Decimal:
    """Mileage allowance for a distance, applying banded rates cumulatively.

    Args:
        distance_km: Total kilometres travelled
        vehicle: "motor_car", "motorcycle" or "bicycle"

    Returns:
        Allowance in EUR, rounded to the cent

    Raises:
        ValueError: If the vehicle type has no rates
    """
    distance = Decimal(distance_km)
    if distance <= 0:
        return round_money(Decimal("0"))

    if vehicle == "bicycle":
        return round_money(distance * BICYCLE_RATE)
    if vehicle not in MILEAGE_BANDS:
        raise ValueError(f"No mileage rates for vehicle '{vehicle}'")

    remaining = distance
    total = Decimal("0")
    previous_ceiling = 0
    for ceiling, rate in MILEAGE_BANDS[vehicle]:
        band_width = remaining if ceiling is None else Decimal(ceiling - previous_ceiling)
        km_in_band = min(remaining, band_width)
        if km_in_band <= 0:
            break
        total += km_in_band * rate
        remaining -= km_in_band
        if ceiling is not None:
            previous_ceiling = ceiling
    return round_money(total)


def calculate_subsistence_allowance(nights: int, days: int) -> Decimal:
    """Flat subsistence for overnight stays plus full days away without one."""
    return round_money(nights * OVERNIGHT_NORMAL + days * DAY_TRIP_TEN_HOURS)


def calculate_annual_commute_mileage(
    one_way_km: Decimal | int, working_days: int = DEFAULT_WORKING_DAYS
) -> Decimal:
    """Motor car mileage for a year of return commutes."""
    return calculate_mileage_allowance(Decimal(one_way_km) * 2 * working_days, "motor_car")


def estimate_distance_km(from_county: str, to_county: str) -> int:
    """Rough one-way road distance between two counties.

    Uses the difference of the counties' distances from Dublin, never less
    than 50 km for different counties. The same county is 0 km.
    """
    if from_county == to_county:
        return 0
    from_km = COUNTY_DISTANCE_FROM_DUBLIN.get(from_county, 0)
    to_km = COUNTY_DISTANCE_FROM_DUBLIN.get(to_county, 0)
    return max(abs(to_km - from_km), MINIMUM_INTER_COUNTY_KM)


def select_subsistence(nights: int, days: int, accommodation_actual: Decimal) -> SubsistenceAllowance:
    """Pick the subsistence method and compute the allowance.

    Vouched (actual accommodation plus the meal day rate per night) applies
    whenever accommodation was paid and there is at least one night. Without
    receipts nights get the flat overnight rate. With no nights only the
    day-trip rate applies.
    """
    accommodation_actual = round_money(accommodation_actual)
    if accommodation_actual > 0 and nights > 0:
        meals = round_money(nights * VOUCHED_DAY_RATE)
        return SubsistenceAllowance(
            nights=nights,
            days=days,
            allowance=round_money(accommodation_actual + meals),
            method=SubsistenceMethod.VOUCHED,
            accommodation_actual=accommodation_actual,
            meals_allowance=meals,
        )
    if nights > 0:
        return SubsistenceAllowance(
            nights=nights,
            days=days,
            allowance=round_money(nights * OVERNIGHT_NORMAL),
            method=SubsistenceMethod.FLAT,
            accommodation_actual=accommodation_actual,
            meals_allowance=round_money(Decimal("0")),
        )
    meals = round_money(days * DAY_TRIP_TEN_HOURS)
    return SubsistenceAllowance(
        nights=0,
        days=days,
        allowance=meals,
        method=SubsistenceMethod.DAY,
        accommodation_actual=accommodation_actual,
        meals_allowance=meals,
    )


def _span(start: date, end: date) -> tuple[int, int]:
    """Nights and extra day-rate days for an inclusive date span."""
    nights = abs((end - start).days)
    # The arrival day is covered by the first overnight
    return nights, 1


class AllowanceCalculator:
    """Compute allowances for trips given a director's travel settings."""

    def __init__(self, settings: TravelSettings):
        """Resolve base, home county and workshop county from the settings.

        Args:
            settings: Travel configuration of the director
        """
        self.settings = settings
        self.base_location = extract_base_location(
            settings.base_address, settings.fallback_address
        )
        self.home_county = (
            extract_county_from_address(settings.place_of_work)
            or settings.workshop_county
            or county_of(self.base_location)
        )
        if settings.workshop_address:
            self.workshop_county = (
                extract_county_from_address(settings.workshop_address) or self.home_county
            )
        else:
            self.workshop_county = self.home_county
        self.vehicle_type = settings.vehicle_type

    def is_outside_home_county(self, county: Optional[str]) -> bool:
        if self.home_county is None:
            return True
        return county != self.home_county

    def is_local_work(self, county: str) -> bool:
        """Work in the workshop county within the subsistence radius."""
        if not self.workshop_county or county != self.workshop_county:
            return False
        distance = estimate_distance_km(self.workshop_county, county)
        return distance < self.settings.subsistence_radius_km

    def mileage_for(self, county: Optional[str]) -> MileageAllowance:
        """Round-trip mileage to a county, only for a director-owned vehicle."""
        if self.vehicle_type is not VehicleType.PERSONAL or not self.workshop_county or not county:
            return MileageAllowance(distance_km=0, allowance=round_money(Decimal("0")))
        distance = estimate_distance_km(self.workshop_county, county) * 2
        return MileageAllowance(
            distance_km=distance, allowance=calculate_mileage_allowance(distance, "motor_car")
        )

    def build(
        self,
        location: str,
        county: Optional[str],
        nights: int,
        days: int,
        expenses: Sequence[TripExpense],
        trip: Optional[DetectedTrip] = None,
    ) -> TripAllowance:
        """Combine subsistence, mileage and actual expenses into one allowance.

        The director's loan balance is the total allowance less what the
        statement shows was spent; positive means the company owes the
        director.
        """
        accommodation = sum(
            (e.amount for e in expenses if e.expense_type is TripExpenseType.ACCOMMODATION),
            Decimal("0"),
        )
        subsistence = select_subsistence(nights, days, accommodation)
        mileage = self.mileage_for(county)
        total_expenses = round_money(sum((e.amount for e in expenses), Decimal("0")))
        total_allowance = round_money(subsistence.allowance + mileage.allowance)
        return TripAllowance(
            location=location,
            county=county,
            vehicle_type=self.vehicle_type,
            subsistence=subsistence,
            mileage=mileage,
            expenses=tuple(expenses),
            total_expenses=total_expenses,
            total_allowance=total_allowance,
            directors_loan_balance=round_money(total_allowance - total_expenses),
            trip=trip,
        )

    def for_trip(self, trip: DetectedTrip) -> TripAllowance:
        """Allowance for a detected trip that has no invoice behind it."""
        county = county_of(trip.location)
        expenses = [
            TripExpense(description=t.description, amount=abs(t.amount), expense_type=t.expense_type)
            for t in trip.transactions
        ]
        if self.is_outside_home_county(county):
            nights, days = _span(trip.start_date, trip.end_date)
        else:
            nights, days = 0, 1
        return self.build(trip.location, county, nights, days, expenses, trip=trip)


class InvoiceTripMatcher:
    """Link invoiced jobs to the spend and trips around them."""

    def __init__(self, calculator: AllowanceCalculator):
        """Initialize the matcher.

        Args:
            calculator: Calculator holding the director's travel settings
        """
        self.calculator = calculator

    def match(
        self, invoices: Iterable[Invoice], transactions: Sequence[Transaction]
    ) -> list[InvoiceTripLink]:
        """Match each invoice away from the workshop to its trip and allowances.

        Invoices without a recognisable customer county and local jobs are
        skipped.

        Args:
            invoices: Invoices to consider
            transactions: Stored transactions covering the invoices' dates;
                only expenses are used

        Returns:
            One link per matched invoice, in invoice order
        """
        expenses = [t for t in transactions if t.direction is Direction.EXPENSE]
        links = []
        for invoice in invoices:
            link = self.match_one(invoice, expenses)
            if link is not None:
                links.append(link)
        logger.info("Matched %d invoice(s) to travel", len(links))
        return links

    def match_one(self, invoice: Invoice, expenses: Sequence[Transaction]) -> Optional[InvoiceTripLink]:
        calc = self.calculator
        job_county = extract_county_from_address(invoice.customer_address)
        if job_county is None:
            logger.debug("Invoice %s: no county in customer address", invoice.invoice_number)
            return None
        if calc.is_local_work(job_county):
            logger.debug("Invoice %s: local work in %s", invoice.invoice_number, job_county)
            return None

        has_job_dates = invoice.job_start_date is not None and invoice.job_end_date is not None
        if has_job_dates:
            window = JobWindow(start=invoice.job_start_date, end=invoice.job_end_date)
        else:
            slack = timedelta(days=INVOICE_DATE_SLACK_DAYS)
            window = JobWindow(start=invoice.invoice_date - slack, end=invoice.invoice_date + slack)
        nearby = [t for t in expenses if t.date in window]
        job_windows = [window]

        trip_expenses: list[TripExpense] = []
        hotel_transactions: list[str] = []
        for txn in nearby:
            if is_excluded(txn.description):
                continue
            expense_type = classify_in_context(txn.description, txn.date, job_windows)
            trip_expenses.append(
                TripExpense(description=txn.description, amount=abs(txn.amount), expense_type=expense_type)
            )
            if expense_type is TripExpenseType.ACCOMMODATION:
                hotel_transactions.append(txn.description)

        trips = detect_trips(nearby, calc.base_location, job_windows)
        matched_trip = next(
            (t for t in trips if county_of(t.location) == job_county),
            trips[0] if trips else None,
        )

        if calc.is_outside_home_county(job_county):
            if has_job_dates:
                nights, days = _span(invoice.job_start_date, invoice.job_end_date)
            elif matched_trip is not None:
                nights, days = _span(matched_trip.start_date, matched_trip.end_date)
            elif hotel_transactions:
                nights, days = len(hotel_transactions), 1
            else:
                nights, days = 0, 1
        else:
            nights, days = 0, 1

        allowance = calc.build(
            location=job_county,
            county=job_county,
            nights=nights,
            days=days,
            expenses=trip_expenses,
            trip=matched_trip,
        )
        return InvoiceTripLink(
            invoice=invoice,
            job_county=job_county,
            matched_trip=matched_trip,
            overnight_stay_detected=bool(hotel_transactions),
            hotel_transactions=tuple(hotel_transactions),
            allowance=allowance,
        )
