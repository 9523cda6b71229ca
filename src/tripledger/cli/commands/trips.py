"""Business trip detection commands."""

import click
from tripledger.cli.date_filters import PERIOD_FLAGS, period_options, resolve_cli_date_range
from tripledger.cli.error_handling import handle_domain_error
from tripledger.cli.travel_options import travel_options, travel_settings
from tripledger.domain.entities import TripAllowance
from tripledger.domain.errors import DomainError
from tripledger.domain.trip_confirmation import TripConfirmationService
from tripledger.domain.trips import TripService


def print_trip(number: int, allowance: TripAllowance) -> None:
    """Print one trip with its spend and allowances."""
    trip = allowance.trip
    if trip.start_date == trip.end_date:
        when = trip.start_date.isoformat()
    else:
        when = f"{trip.start_date.isoformat()} to {trip.end_date.isoformat()}"
    click.echo(f"\n{number}. {trip.location}: {when}")
    click.echo(f"   County: {allowance.county or 'unknown'}")
    click.echo(f"   Spend: €{trip.total_spend:.2f} over {len(trip.transactions)} transaction(s)")
    for txn in trip.transactions:
        click.echo(
            f"     {txn.date.isoformat()}  {txn.description[:40]:40s} "
            f"€{txn.amount:>9.2f}  {txn.expense_type.value}"
        )
    subsistence = allowance.subsistence
    click.echo(
        f"   Subsistence: €{subsistence.allowance:.2f} "
        f"({subsistence.method.value}, {subsistence.nights} night(s), {subsistence.days} day(s))"
    )
    if allowance.mileage.distance_km:
        click.echo(
            f"   Mileage: €{allowance.mileage.allowance:.2f} ({allowance.mileage.distance_km} km)"
        )
    click.echo(f"   Director's loan balance: €{allowance.directors_loan_balance:.2f}")


@click.command("trips")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--batch", "batch_id", type=int, help="Only look at one import batch")
@travel_options
@click.option("--confirm", "confirm_trips", is_flag=True, help="Record trips as business travel")
@click.option("--yes", "-y", is_flag=True, help="Confirm every trip without asking")
@click.pass_context
def trips(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    last_month: bool,
    this_year: bool,
    last_year: bool,
    tax_window: bool,
    batch_id: int | None,
    confirm_trips: bool,
    yes: bool,
    **travel,
):
    """Find business trips in your expenses and work out allowances.

    A trip is spend on a day away from the base address: two or more
    transactions in the same town, or a hotel booking.

    Examples:
        tripledger trips --base-address "12 Main St, Navan, Co. Meath" --last-month
        tripledger trips --batch 4 --confirm
        tripledger trips --start-date 2025-01-01 --end-date 2025-03-31
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]

    flags = dict(zip(
        (period for _, period in PERIOD_FLAGS),
        (this_month, last_month, this_year, last_year, tax_window),
    ))
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=flags
    )

    service = TripService(db, travel_settings(**travel))
    if service.base_location is None:
        click.echo("Warning: no base location found, every located expense counts as away", err=True)
    else:
        click.echo(f"Base location: {service.base_location}")

    try:
        found = service.detect(user_id, start_date=start, end_date=end, import_batch_id=batch_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not found:
        click.echo("No trips found.")
        return

    click.echo(f"Found {len(found)} trip(s):")
    for number, allowance in enumerate(service.allowances(found), start=1):
        print_trip(number, allowance)

    if not confirm_trips:
        return

    chosen = [
        trip
        for trip in found
        if yes or click.confirm(f"Record trip to {trip.location} ({trip.start_date}) as business travel?")
    ]
    if not chosen:
        click.echo("No trips confirmed.")
        return

    with click.progressbar(length=100, label="Updating transactions") as bar:
        last = [0]

        def advance(percent: int) -> None:
            bar.update(percent - last[0])
            last[0] = percent

        result = TripConfirmationService(db).confirm(user_id, chosen, progress=advance)

    click.echo(f"\nUpdated {result.updated} of {result.total} transaction(s)")
    if result.failed:
        click.echo(f"  Failed: {result.failed}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register trip commands with main CLI."""
    cli.add_command(trips)
