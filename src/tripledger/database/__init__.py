"""Database layer for tripledger application."""

from tripledger.database.base import Database
from tripledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
