"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the domain entities stay stable
when the table layout changes.
"""

from tripledger.domain import entities as domain
from tripledger.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    ImportBatch as ORMImportBatch,
    Transaction as ORMTransaction,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        bank_name=orm_account.bank_name,
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        user_id=orm_category.user_id,
        name=orm_category.name,
        category_type=orm_category.category_type,
        created_at=orm_category.created_at,
    )


def import_batch_to_domain(orm_batch: ORMImportBatch) -> domain.ImportBatch:
    """Convert SQLAlchemy ImportBatch model to domain ImportBatch entity."""
    return domain.ImportBatch(
        id=orm_batch.id,
        user_id=orm_batch.user_id,
        filename=orm_batch.filename,
        row_count=orm_batch.row_count,
        status=orm_batch.status,
        created_at=orm_batch.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        account_id=orm_transaction.account_id,
        import_batch_id=orm_transaction.import_batch_id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        amount=orm_transaction.amount,
        direction=domain.Direction(orm_transaction.direction),
        reference=orm_transaction.reference,
        category_id=orm_transaction.category_id,
        notes=orm_transaction.notes,
        vat_rate=orm_transaction.vat_rate,
        imported_at=orm_transaction.imported_at,
    )


def new_transaction_to_orm(row: domain.NewTransaction) -> ORMTransaction:
    """Build an unsaved SQLAlchemy Transaction from an insert row."""
    return ORMTransaction(
        user_id=row.user_id,
        account_id=row.account_id,
        import_batch_id=row.import_batch_id,
        date=row.date,
        description=row.description,
        amount=row.amount,
        direction=row.direction.value,
        reference=row.reference,
    )
