"""CLI helpers for director travel settings."""

import click

from tripledger.domain.entities import TravelSettings


def travel_options(func):
    """Add the travel setting options, each also read from a TRIPLEDGER_* variable."""
    options = [
        click.option("--base-address", envvar="TRIPLEDGER_BASE_ADDRESS", help="Director's home address"),
        click.option(
            "--fallback-address",
            envvar="TRIPLEDGER_FALLBACK_ADDRESS",
            help="Address used when no town is found in the base address",
        ),
        click.option("--place-of-work", envvar="TRIPLEDGER_PLACE_OF_WORK", help="Normal place of work"),
        click.option("--workshop-address", envvar="TRIPLEDGER_WORKSHOP_ADDRESS", help="Workshop address"),
        click.option("--workshop-county", envvar="TRIPLEDGER_WORKSHOP_COUNTY", help="Workshop county"),
        click.option(
            "--radius-km",
            type=int,
            default=8,
            show_default=True,
            envvar="TRIPLEDGER_RADIUS_KM",
            help="Distance from the workshop below which work counts as local",
        ),
        click.option(
            "--commute-method",
            type=click.Choice(["personal_vehicle", "company_vehicle", "other"]),
            default="other",
            show_default=True,
            envvar="TRIPLEDGER_COMMUTE_METHOD",
            help="How the director travels to jobs",
        ),
        click.option(
            "--owns-vehicle",
            is_flag=True,
            envvar="TRIPLEDGER_OWNS_VEHICLE",
            help="The director personally owns the vehicle",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def travel_settings(
    *,
    base_address: str | None,
    fallback_address: str | None,
    place_of_work: str | None,
    workshop_address: str | None,
    workshop_county: str | None,
    radius_km: int,
    commute_method: str,
    owns_vehicle: bool,
) -> TravelSettings:
    """Build TravelSettings from the values of the travel options."""
    return TravelSettings(
        base_address=base_address,
        fallback_address=fallback_address,
        place_of_work=place_of_work,
        workshop_address=workshop_address,
        workshop_county=workshop_county,
        subsistence_radius_km=radius_km,
        commute_method=commute_method,
        vehicle_owned_by_director=owns_vehicle,
    )
