"""Tests for subsistence, mileage and invoice-linked trip allowances."""

from datetime import date, datetime, UTC
from decimal import Decimal

import pytest

from tripledger.domain.allowances import (
    AllowanceCalculator,
    InvoiceTripMatcher,
    calculate_annual_commute_mileage,
    calculate_mileage_allowance,
    calculate_subsistence_allowance,
    estimate_distance_km,
    select_subsistence,
)
from tripledger.domain.entities import (
    Direction,
    Invoice,
    SubsistenceMethod,
    Transaction,
    TravelSettings,
    VehicleType,
)
from tripledger.domain.trip_detection import detect_trips

NAVAN_SETTINGS = TravelSettings(base_address="12 Main Street, Navan, Co. Meath")

_ids = iter(range(1, 10_000))


def _txn(txn_date, description, amount, direction=Direction.EXPENSE):
    return Transaction(
        id=next(_ids),
        user_id=1,
        account_id=None,
        import_batch_id=None,
        date=txn_date,
        description=description,
        amount=Decimal(amount),
        direction=direction,
        reference=None,
        category_id=None,
        notes=None,
        vat_rate=None,
        imported_at=datetime.now(UTC),
    )


def _galway_spend():
    return [
        _txn(date(2025, 3, 10), "HOTEL MERIDIAN GALWAY", "140.00"),
        _txn(date(2025, 3, 11), "CENTRA GALWAY", "12.40"),
        _txn(date(2025, 3, 11), "SUPERMACS GALWAY", "18.90"),
        _txn(date(2025, 3, 12), "WOODIES GALWAY", "25.00"),
        _txn(date(2025, 3, 12), "BANK CHARGE QUARTERLY", "7.50"),
        _txn(date(2025, 3, 12), "INV 1042 CUSTOMER", "650.00", Direction.INCOME),
    ]


def _invoice(address="Eyre Square, Galway", job_start=None, job_end=None):
    return Invoice(
        id=1,
        invoice_number="INV-1042",
        customer_name="Galway Bay Fabrication",
        customer_address=address,
        invoice_date=date(2025, 3, 11),
        job_start_date=job_start,
        job_end_date=job_end,
    )


class TestRates:
    """Tests for the Revenue rate helpers."""

    def test_mileage_within_first_band(self):
        assert calculate_mileage_allowance(320) == Decimal("165.82")

    def test_mileage_is_cumulative_across_bands(self):
        assert calculate_mileage_allowance(2000) == Decimal("1230.45")

    def test_motorcycle_bands(self):
        assert calculate_mileage_allowance(7000, "motorcycle") == Decimal("1612.94")

    def test_bicycle_flat_rate(self):
        assert calculate_mileage_allowance(100, "bicycle") == Decimal("8.00")

    def test_no_distance(self):
        assert calculate_mileage_allowance(0) == Decimal("0.00")

    def test_unknown_vehicle(self):
        with pytest.raises(ValueError, match="No mileage rates"):
            calculate_mileage_allowance(10, "tractor")

    def test_annual_commute(self):
        assert calculate_annual_commute_mileage(10) == Decimal("3586.83")

    def test_subsistence_allowance(self):
        assert calculate_subsistence_allowance(2, 1) == Decimal("457.23")

    def test_distance_between_counties(self):
        assert estimate_distance_km("Meath", "Galway") == 160
        assert estimate_distance_km("Meath", "Kildare") == 50
        assert estimate_distance_km("Cork", "Cork") == 0


class TestSelectSubsistence:
    """Tests for choosing the subsistence method."""

    def test_vouched_with_accommodation(self):
        result = select_subsistence(1, 1, Decimal("140.00"))

        assert result.method is SubsistenceMethod.VOUCHED
        assert result.allowance == Decimal("186.17")
        assert result.meals_allowance == Decimal("46.17")

    def test_flat_rate_without_receipts(self):
        result = select_subsistence(2, 1, Decimal("0"))

        assert result.method is SubsistenceMethod.FLAT
        assert result.allowance == Decimal("411.06")
        assert result.meals_allowance == Decimal("0.00")

    def test_day_trip(self):
        result = select_subsistence(0, 1, Decimal("0"))

        assert result.method is SubsistenceMethod.DAY
        assert result.allowance == Decimal("46.17")


class TestAllowanceCalculator:
    """Tests for resolving travel settings and trip allowances."""

    def test_counties_from_settings(self):
        calc = AllowanceCalculator(
            TravelSettings(
                base_address="Navan",
                place_of_work="Unit 3, Mullingar",
                workshop_address="Athlone",
            )
        )

        assert calc.base_location == "Navan"
        assert calc.home_county == "Westmeath"
        assert calc.workshop_county == "Westmeath"

    def test_home_county_falls_back_to_base(self):
        calc = AllowanceCalculator(NAVAN_SETTINGS)

        assert calc.home_county == "Meath"
        assert calc.workshop_county == "Meath"

    @pytest.mark.parametrize(
        "method, owned, expected",
        [
            ("personal_vehicle", True, VehicleType.PERSONAL),
            ("personal_vehicle", False, VehicleType.NONE),
            ("company_vehicle", False, VehicleType.COMPANY),
            ("other", True, VehicleType.NONE),
        ],
    )
    def test_vehicle_type(self, method, owned, expected):
        settings = TravelSettings(commute_method=method, vehicle_owned_by_director=owned)
        assert AllowanceCalculator(settings).vehicle_type is expected

    def test_detected_trip_allowance(self):
        settings = TravelSettings(
            base_address="12 Main Street, Navan, Co. Meath",
            commute_method="personal_vehicle",
            vehicle_owned_by_director=True,
        )
        (trip,) = detect_trips(_galway_spend()[:3], "Navan")

        allowance = AllowanceCalculator(settings).for_trip(trip)

        assert allowance.county == "Galway"
        assert allowance.subsistence.method is SubsistenceMethod.VOUCHED
        assert allowance.subsistence.allowance == Decimal("186.17")
        assert allowance.mileage.distance_km == 320
        assert allowance.mileage.allowance == Decimal("165.82")
        assert allowance.total_allowance == Decimal("351.99")
        assert allowance.total_expenses == Decimal("171.30")
        assert allowance.directors_loan_balance == Decimal("180.69")
        assert allowance.trip is trip

    def test_trip_county_comes_from_the_town(self):
        settings = TravelSettings(
            base_address="12 Main Street, Navan, Co. Meath",
            commute_method="personal_vehicle",
            vehicle_owned_by_director=True,
        )
        spend = [
            _txn(date(2025, 5, 6), "LANDMARK HOTEL CARRICK ON SHANNON", "110.00"),
            _txn(date(2025, 5, 7), "CENTRA CARRICK ON SHANNON", "8.60"),
            _txn(date(2025, 5, 7), "SUPERVALU CARRICK ON SHANNON", "14.20"),
        ]
        (trip,) = detect_trips(spend, "Navan")

        allowance = AllowanceCalculator(settings).for_trip(trip)

        assert trip.location == "Carrick-on-Shannon"
        assert allowance.county == "Leitrim"
        assert allowance.mileage.distance_km == 370

    def test_no_mileage_without_own_vehicle(self):
        (trip,) = detect_trips(_galway_spend()[:3], "Navan")

        allowance = AllowanceCalculator(NAVAN_SETTINGS).for_trip(trip)

        assert allowance.mileage.allowance == Decimal("0.00")
        assert allowance.vehicle_type is VehicleType.NONE


class TestInvoiceTripMatcher:
    """Tests for linking invoiced jobs to travel spend."""

    def test_invoice_date_window(self):
        matcher = InvoiceTripMatcher(AllowanceCalculator(NAVAN_SETTINGS))

        (link,) = matcher.match([_invoice()], _galway_spend())

        assert link.job_county == "Galway"
        assert link.matched_trip.location == "Galway"
        assert link.overnight_stay_detected
        assert link.hotel_transactions == ("HOTEL MERIDIAN GALWAY",)
        assert link.allowance.subsistence.nights == 1
        assert link.allowance.subsistence.allowance == Decimal("186.17")
        # Bank charge and income are left out, the hardware purchase counts
        assert link.allowance.total_expenses == Decimal("196.30")
        assert link.directors_loan_balance == Decimal("-10.13")

    def test_job_dates_set_the_nights(self):
        matcher = InvoiceTripMatcher(AllowanceCalculator(NAVAN_SETTINGS))
        invoice = _invoice(job_start=date(2025, 3, 10), job_end=date(2025, 3, 12))

        (link,) = matcher.match([invoice], _galway_spend())

        assert link.allowance.subsistence.nights == 2
        assert link.allowance.subsistence.allowance == Decimal("232.34")

    def test_hotel_without_trip_counts_nights(self):
        matcher = InvoiceTripMatcher(AllowanceCalculator(NAVAN_SETTINGS))
        spend = [_txn(date(2025, 3, 11), "HOTEL ABC", "90.00")]

        (link,) = matcher.match([_invoice()], spend)

        assert link.matched_trip is None
        assert link.allowance.subsistence.nights == 1

    def test_day_trip_without_spend(self):
        matcher = InvoiceTripMatcher(AllowanceCalculator(NAVAN_SETTINGS))

        (link,) = matcher.match([_invoice()], [])

        assert link.matched_trip is None
        assert not link.overnight_stay_detected
        assert link.allowance.subsistence.method is SubsistenceMethod.DAY
        assert link.allowance.subsistence.allowance == Decimal("46.17")

    def test_local_work_is_skipped(self):
        settings = TravelSettings(base_address="Navan", workshop_county="Galway")
        matcher = InvoiceTripMatcher(AllowanceCalculator(settings))

        assert matcher.match([_invoice()], _galway_spend()) == []

    def test_invoice_without_county_is_skipped(self):
        matcher = InvoiceTripMatcher(AllowanceCalculator(NAVAN_SETTINGS))

        assert matcher.match([_invoice(address=None)], _galway_spend()) == []

    def test_home_county_job_is_a_day(self):
        settings = TravelSettings(
            base_address="Navan", place_of_work="Navan", workshop_address="Athlone"
        )
        matcher = InvoiceTripMatcher(AllowanceCalculator(settings))

        (link,) = matcher.match([_invoice(address="Trim, Co. Meath")], [])

        assert link.job_county == "Meath"
        assert link.allowance.subsistence.nights == 0
        assert link.allowance.subsistence.days == 1
