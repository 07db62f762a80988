"""Database factory functions."""

import logging
import os
from pathlib import Path
from typing import Optional

from ridelog.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DB_PATH_ENV = "RIDELOG_DB_PATH"
DEFAULT_DB_PATH = Path.home() / ".ridelog" / "ridelog.db"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the SQLite file to use.

    An explicit path wins, then the RIDELOG_DB_PATH environment variable,
    then ~/.ridelog/ridelog.db. The parent directory is created if missing.
    """
    raw = database_path or os.environ.get(DB_PATH_ENV)
    path = Path(raw).expanduser() if raw else DEFAULT_DB_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLAlchemyDatabase backed by a SQLite file.

    Args:
        database_path: Path to the SQLite file (see resolve_database_path)

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = resolve_database_path(database_path)
    logger.debug("Using trip database at %s", path)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
