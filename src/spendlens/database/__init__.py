"""Storage layer: the Database interface and its SQLite implementation."""

from spendlens.database.base import Database
from spendlens.database.factories import create_sqlite_database
from spendlens.database.sqlalchemy_db import SQLAlchemyDatabase

__all__ = ["Database", "SQLAlchemyDatabase", "create_sqlite_database"]
