"""Environment-driven settings."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_DB_DIR = Path.home() / ".scribe"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_BUSY_TIMEOUT = 5.0


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    ``database_url`` wins over ``db_path`` when both are set.
    """

    database_url: Optional[str] = None
    db_path: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL
    busy_timeout: float = DEFAULT_BUSY_TIMEOUT


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from SCRIBE_* environment variables.

    Raises:
        ValueError: If SCRIBE_BUSY_TIMEOUT is not a number
    """
    if environ is None:
        environ = os.environ

    raw_timeout = environ.get("SCRIBE_BUSY_TIMEOUT")
    try:
        busy_timeout = float(raw_timeout) if raw_timeout else DEFAULT_BUSY_TIMEOUT
    except ValueError:
        raise ValueError(f"SCRIBE_BUSY_TIMEOUT must be a number of seconds, got '{raw_timeout}'")

    return Settings(
        database_url=environ.get("SCRIBE_DATABASE_URL") or None,
        db_path=environ.get("SCRIBE_DB_PATH") or None,
        log_level=environ.get("SCRIBE_LOG_LEVEL") or DEFAULT_LOG_LEVEL,
        busy_timeout=busy_timeout,
    )
