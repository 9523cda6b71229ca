"""Import batch commands."""

import click
from tripledger.cli.error_handling import handle_domain_error
from tripledger.domain.entities import Direction
from tripledger.domain.errors import DomainError
from tripledger.domain.import_batch import ImportBatchService


@click.group()
def batches_group():
    """Review and undo statement imports."""
    pass


@batches_group.command("list")
@click.pass_context
def list_batches(ctx):
    """List your import batches, newest first."""
    service = ImportBatchService(ctx.obj["db"])

    batches = service.list_batches(ctx.obj["user_id"])
    if not batches:
        click.echo("No imports found.")
        return

    click.echo("\nImports:")
    click.echo("-" * 80)
    for batch in batches:
        created = batch.created_at.strftime("%Y-%m-%d %H:%M")
        click.echo(
            f"ID: {batch.id:3d} | {created} | {batch.filename:30s} | "
            f"{batch.row_count:5d} rows | {batch.status}"
        )


@batches_group.command("show")
@click.argument("batch_id", type=int, metavar="BATCH_ID")
@click.pass_context
def show_batch(ctx, batch_id: int):
    """Show the transactions one import stored."""
    service = ImportBatchService(ctx.obj["db"])

    try:
        transactions = service.list_batch_transactions(ctx.obj["user_id"], batch_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions in this import.")
        return

    for txn in transactions:
        sign = "-" if txn.direction is Direction.EXPENSE else "+"
        click.echo(f"{txn.date} | {txn.description:40s} | {sign}€{txn.amount:.2f}")


@batches_group.command("delete")
@click.argument("batch_id", type=int, metavar="BATCH_ID")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_batch(ctx, batch_id: int, yes: bool):
    """Delete an import batch and every transaction it stored.

    Examples:
        tripledger batches delete 3
        tripledger batches delete 3 --yes
    """
    user_id = ctx.obj["user_id"]
    service = ImportBatchService(ctx.obj["db"])

    batch = service.get_batch(user_id, batch_id)
    if batch is None:
        click.echo(f"Error: Import batch {batch_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Delete import '{batch.filename}' (ID: {batch_id}) and its transactions?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        removed = service.delete_batch(user_id, batch_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted import '{batch.filename}' and {removed} transaction(s)")


def register_commands(cli):
    """Register import batch commands with main CLI."""
    cli.add_command(batches_group, name="batches")
