"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from tripledger.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    ImportBatch as ORMImportBatch,
    Transaction as ORMTransaction,
)
from tripledger.database.mappers import (
    account_to_domain,
    category_to_domain,
    import_batch_to_domain,
    new_transaction_to_orm,
    transaction_to_domain,
)
from tripledger.domain.entities import (
    Account,
    Category,
    Direction,
    ImportBatch,
    NewTransaction,
    Transaction,
)


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        """Test converting ORM Account to domain Account."""
        created = datetime.now(UTC)
        orm_account = ORMAccount(
            id=1, user_id=7, name="Current", bank_name="AIB", created_at=created
        )

        domain_account = account_to_domain(orm_account)

        assert isinstance(domain_account, Account)
        assert domain_account.id == 1
        assert domain_account.user_id == 7
        assert domain_account.name == "Current"
        assert domain_account.bank_name == "AIB"
        assert domain_account.created_at == created


class TestCategoryMapper:
    def test_category_to_domain(self):
        orm_category = ORMCategory(
            id=3,
            user_id=7,
            name="Motor/travel",
            category_type="expense",
            created_at=datetime.now(UTC),
        )

        domain_category = category_to_domain(orm_category)

        assert isinstance(domain_category, Category)
        assert domain_category.name == "Motor/travel"
        assert domain_category.category_type == "expense"


class TestImportBatchMapper:
    def test_import_batch_to_domain(self):
        orm_batch = ORMImportBatch(
            id=4,
            user_id=7,
            filename="march.csv",
            row_count=40,
            status="completed",
            created_at=datetime.now(UTC),
        )

        batch = import_batch_to_domain(orm_batch)

        assert isinstance(batch, ImportBatch)
        assert batch.filename == "march.csv"
        assert batch.row_count == 40
        assert batch.status == "completed"


class TestTransactionMapper:
    """Tests for Transaction mappers."""

    def test_transaction_to_domain(self):
        """Test converting ORM Transaction to domain Transaction."""
        orm_transaction = ORMTransaction(
            id=10,
            user_id=7,
            account_id=1,
            import_batch_id=4,
            date=date(2025, 3, 11),
            description="CENTRA GALWAY",
            amount=Decimal("12.40"),
            direction="expense",
            reference=None,
            category_id=None,
            notes=None,
            vat_rate=None,
            imported_at=datetime.now(UTC),
        )

        txn = transaction_to_domain(orm_transaction)

        assert isinstance(txn, Transaction)
        assert txn.id == 10
        assert txn.direction is Direction.EXPENSE
        assert txn.amount == Decimal("12.40")
        assert txn.import_batch_id == 4

    def test_income_direction(self):
        orm_transaction = ORMTransaction(
            id=11,
            user_id=7,
            date=date(2025, 3, 1),
            description="SALARY",
            amount=Decimal("650.00"),
            direction="income",
            imported_at=datetime.now(UTC),
        )

        assert transaction_to_domain(orm_transaction).direction is Direction.INCOME

    def test_new_transaction_to_orm(self):
        row = NewTransaction(
            user_id=7,
            date=date(2025, 3, 11),
            description="SUPERMACS GALWAY",
            amount=Decimal("18.90"),
            direction=Direction.EXPENSE,
            reference="R-1",
            account_id=2,
            import_batch_id=4,
        )

        orm_transaction = new_transaction_to_orm(row)

        assert isinstance(orm_transaction, ORMTransaction)
        assert orm_transaction.id is None
        assert orm_transaction.direction == "expense"
        assert orm_transaction.reference == "R-1"
        assert orm_transaction.account_id == 2
        assert orm_transaction.import_batch_id == 4
        assert orm_transaction.category_id is None
