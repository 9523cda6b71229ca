"""CLI helpers for account resolution."""

from __future__ import annotations

import click
from tripledger.domain.account import AccountService


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, user_id: int, account: str
) -> int:
    """Resolve an account name or ID, or exit with a CLI error.

    A numeric value is taken as an ID and passed through unchecked so the
    import can fall back to unassigned transactions. A name must match one
    of the user's accounts.
    """
    if account.isdigit():
        return int(account)

    for acc in account_service.list_accounts(user_id):
        if acc.name == account:
            return acc.id

    click.echo(f"Error: Account '{account}' not found", err=True)
    ctx.exit(1)
