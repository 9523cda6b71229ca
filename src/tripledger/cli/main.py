"""Main CLI entry point."""

import click
from tripledger.database.factories import create_sqlite_database
from tripledger.utils.config_logging import configure_logging

# Import and register all commands at module level
from tripledger.cli.commands import (
    account,
    batches,
    import_cmd,
    trips,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides TRIPLEDGER_DB_PATH environment variable)",
    envvar="TRIPLEDGER_DB_PATH",
)
@click.option(
    "--user",
    "user_id",
    type=int,
    default=1,
    show_default=True,
    envvar="TRIPLEDGER_USER_ID",
    help="User whose ledger to work on",
)
@click.option("--verbose", "-v", is_flag=True, help="Log pipeline details to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, user_id: int, verbose: bool):
    """Tripledger - Bank statement import and business trip detection.

    Import statement exports from Irish banks, skip what is already in the
    ledger, and find business trips with their subsistence and mileage
    allowances.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose=verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user_id"] = user_id
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
import_cmd.register_commands(cli)
trips.register_commands(cli)
batches.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
