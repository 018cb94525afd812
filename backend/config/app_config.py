"""
Runtime Configuration

Settings are read from environment variables once at import time, so set
them before importing the application.

Variables:
- DATABASE_URL: SQLAlchemy URL (defaults to a SQLite file in the app data dir)
- SQL_ECHO: log every SQL statement ('true', '1' or 'yes')
- LOG_LEVEL: root log level name
- LOG_DIR: where the rotating log file is written
- DEFAULT_PAGE_SIZE / MAX_PAGE_SIZE: paging defaults for filtered queries
"""
import os
import logging
from pathlib import Path

from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

APP_DATA_DIR = Path.home() / ".local/share/RecordService"


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.environ.get(name, default).lower() in ('true', '1', 'yes')


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", key=name)


def get_database_url() -> str:
    """
    Resolve the database URL.

    Returns:
        DATABASE_URL if set, otherwise a SQLite file under APP_DATA_DIR
    """
    url = os.environ.get('DATABASE_URL')
    if url:
        return url
    APP_DATA_DIR.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{APP_DATA_DIR / 'records.db'}"


DATABASE_URL = get_database_url()
SQL_ECHO = _env_flag('SQL_ECHO')
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
LOG_DIR = Path(os.environ.get('LOG_DIR', str(APP_DATA_DIR / "logs")))

DEFAULT_PAGE_SIZE = _env_int('DEFAULT_PAGE_SIZE', 10)
MAX_PAGE_SIZE = _env_int('MAX_PAGE_SIZE', 1000)

if DEFAULT_PAGE_SIZE < 1 or DEFAULT_PAGE_SIZE > MAX_PAGE_SIZE:
    raise ConfigurationError(
        f"DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE ({MAX_PAGE_SIZE})",
        key='DEFAULT_PAGE_SIZE'
    )
