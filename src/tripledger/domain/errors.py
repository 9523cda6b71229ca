"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class StoreError(DomainError):
    """A read or write against the persistent store failed."""


def account_name_taken(name: str) -> str:
    """Return message for duplicate account name."""
    return f"Account with name '{name}' already exists"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def import_batch_not_found(batch_id: int) -> str:
    """Return message for missing import batch."""
    return f"Import batch {batch_id} not found"


def incomplete_mapping(missing: list[str]) -> str:
    """Return message when a column mapping cannot produce transactions."""
    return (
        f"Column mapping is missing: {', '.join(missing)}. "
        "Assign the columns manually."
    )


def unknown_columns(columns: list[str]) -> str:
    """Return message when a mapping names columns absent from the file."""
    return f"Columns not found in file: {', '.join(columns)}"
