"""Database factory functions."""

import os
from pathlib import Path
from typing import Optional, Union

from spendlens.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV_VAR = "SPENDLENS_DB_PATH"


def default_database_path() -> Path:
    """Return ~/.spendlens/spendlens.db, creating the directory if needed."""
    db_dir = Path.home() / ".spendlens"
    db_dir.mkdir(parents=True, exist_ok=True)
    return db_dir / "spendlens.db"


def create_sqlite_database(
    database_path: Optional[Union[str, Path]] = None,
) -> SQLAlchemyDatabase:
    """Create a SQLite-backed store.

    Args:
        database_path: Path to the SQLite file. Falls back to the
            SPENDLENS_DB_PATH environment variable, then to
            ~/.spendlens/spendlens.db. Missing parent directories are created.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = database_path or os.environ.get(DB_PATH_ENV_VAR)
    resolved = Path(path).expanduser() if path else default_database_path()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyDatabase(f"sqlite:///{resolved}")
