"""Database factory functions for creating database instances."""

from pathlib import Path
from typing import Optional

from scribe.config import DEFAULT_DB_DIR, load_settings
from scribe.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(
    database_path: Optional[str] = None, busy_timeout: Optional[float] = None
) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks SCRIBE_DB_PATH
            environment variable, then defaults to ~/.scribe/scribe.db
        busy_timeout: Seconds to wait for a lock. If None, uses SCRIBE_BUSY_TIMEOUT

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    settings = load_settings()
    if database_path is None:
        database_path = settings.db_path

    if database_path is None:
        db_dir = Path(DEFAULT_DB_DIR)
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "scribe.db")

    if busy_timeout is None:
        busy_timeout = settings.busy_timeout

    return SQLAlchemyDatabase(f"sqlite:///{database_path}", busy_timeout=busy_timeout)


def create_database(
    database_url: Optional[str] = None, database_path: Optional[str] = None
) -> SQLAlchemyDatabase:
    """Create a database from a URL, falling back to SQLite.

    Args:
        database_url: Any SQLAlchemy URL. If None, checks SCRIBE_DATABASE_URL
        database_path: SQLite file used when no URL is configured

    Returns:
        SQLAlchemyDatabase instance
    """
    settings = load_settings()
    if database_url is None:
        database_url = settings.database_url

    if database_url is None:
        return create_sqlite_database(database_path=database_path)
    return SQLAlchemyDatabase(database_url, busy_timeout=settings.busy_timeout)
