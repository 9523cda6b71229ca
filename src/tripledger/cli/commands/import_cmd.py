"""Bank statement import command."""

import click
from tripledger.cli.account_resolution import resolve_account_or_exit
from tripledger.cli.commands.trips import print_trip
from tripledger.cli.error_handling import handle_domain_error
from tripledger.cli.travel_options import travel_options, travel_settings
from tripledger.domain.account import AccountService
from tripledger.domain.entities import ColumnMapping
from tripledger.domain.errors import DomainError, incomplete_mapping
from tripledger.domain.statement_import import StatementImportService
from tripledger.domain.trips import TripService


def _mapping_override(session, overrides: dict[str, str | None]) -> ColumnMapping | None:
    """Merge column options over the detected mapping; None if no option was given.

    A signed amount column and a credit/debit pair exclude each other, so
    choosing one drops whatever detection picked for the other.
    """
    if not any(overrides.values()):
        return None
    base = session.mapping or ColumnMapping()
    fields = {name: getattr(base, name) for name in overrides}
    if overrides.get("amount"):
        fields["credit"] = fields["debit"] = None
    if overrides.get("credit") or overrides.get("debit"):
        fields["amount"] = None
    fields.update({name: value for name, value in overrides.items() if value})
    return ColumnMapping(**fields)


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option("--account", help="Account name or ID the transactions belong to")
@click.option("--date-column", help="Header of the date column")
@click.option("--description-column", help="Header of the description column")
@click.option("--amount-column", help="Header of a signed amount column")
@click.option("--credit-column", help="Header of the money-in column")
@click.option("--debit-column", help="Header of the money-out column")
@click.option("--reference-column", help="Header of the reference column")
@click.option(
    "--keep-duplicates",
    is_flag=True,
    help="Import rows that match transactions already stored",
)
@travel_options
@click.pass_context
def import_csv(
    ctx,
    csv_file: str,
    account: str | None,
    date_column: str | None,
    description_column: str | None,
    amount_column: str | None,
    credit_column: str | None,
    debit_column: str | None,
    reference_column: str | None,
    keep_duplicates: bool,
    **travel,
):
    """Import transactions from a bank statement export.

    The bank format is detected from the header row. Use the --*-column
    options to pick columns when detection fails or guesses wrong. Trips
    found among the imported expenses are listed with their allowances.

    Examples:
        tripledger import statement.csv
        tripledger import export.csv --account "AIB Current"
        tripledger import export.csv --date-column "Value Date" --amount-column "Amount"
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = StatementImportService(db)
    trip_service = TripService(db, travel_settings(**travel))

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), user_id, account)

    try:
        session = service.load_file(user_id, csv_file)
        click.echo(f"Detected format: {session.bank_name or 'unknown bank'}")

        mapping = _mapping_override(
            session,
            {
                "date": date_column,
                "description": description_column,
                "amount": amount_column,
                "credit": credit_column,
                "debit": debit_column,
                "reference": reference_column,
            },
        )
        session = service.map_columns(session, mapping)
        if session.needs_mapping:
            missing = session.mapping.missing_fields if session.mapping else ["date", "description", "amount (or credit/debit)"]
            if missing:
                click.echo(f"Error: {incomplete_mapping(missing)}", err=True)
            else:
                click.echo(f"Error: No transactions could be read ({session.build.summary()})", err=True)
            click.echo(f"Columns in file: {', '.join(session.table.headers)}", err=True)
            ctx.exit(1)

        click.echo(session.build.summary())
        session = service.check_duplicates(session, skip_duplicates=not keep_duplicates)
        if session.duplicate_count:
            action = "importing anyway" if keep_duplicates else "skipping"
            click.echo(f"Found {session.duplicate_count} duplicate(s), {action}")

        with click.progressbar(length=100, label="Importing") as bar:
            last = [0]

            def advance(percent: int) -> None:
                bar.update(percent - last[0])
                last[0] = percent

            session = service.persist(session, account_id=account_id, progress=advance)
        session = service.detect_trips(session, trip_service.base_location)
    except (DomainError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)

    summary = session.summary()
    click.echo("\nImport complete:")
    click.echo(f"  Rows in file: {summary.total_rows}")
    click.echo(f"  Valid: {summary.valid}")
    click.echo(f"  Duplicates: {summary.duplicates}")
    click.echo(f"  Imported: {summary.imported} transactions")
    if summary.failed:
        click.echo(f"  Failed: {summary.failed}")
        for batch in session.result.batches:
            if not batch.ok:
                click.echo(f"    Batch {batch.batch_index + 1}: {batch.error}", err=True)
    if session.result and session.result.import_batch_id is not None:
        click.echo(f"  Import batch: {session.result.import_batch_id}")

    if session.trips:
        click.echo(f"\nFound {len(session.trips)} trip(s) in this import:")
        for number, allowance in enumerate(trip_service.allowances(session.trips), start=1):
            print_trip(number, allowance)
        if session.result.import_batch_id is not None:
            click.echo(
                f"\nRecord them with: tripledger trips --batch {session.result.import_batch_id} --confirm"
            )


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
