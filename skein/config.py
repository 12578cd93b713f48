"""
Skein configuration

All settings come from the environment and are read at call time, so
tests and the CLI can override them per process.

    SKEIN_DB_PATH       database file       (./artifacts/skein/knots.db)
    SKEIN_LOG_LEVEL     logging level       (INFO)
    SKEIN_QUERY_LIMIT   default page size   (100)
    SKEIN_API_PORT      HTTP port           (8430)
"""

import logging
import os
from pathlib import Path

DEFAULT_DB_PATH = Path("artifacts") / "skein" / "knots.db"
DEFAULT_QUERY_LIMIT = 100
DEFAULT_API_PORT = 8430

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_logging_configured = False


def db_path() -> Path:
    return Path(os.environ.get("SKEIN_DB_PATH", str(DEFAULT_DB_PATH)))


def log_level() -> str:
    return os.environ.get("SKEIN_LOG_LEVEL", "INFO").upper()


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def query_limit() -> int:
    return _int_env("SKEIN_QUERY_LIMIT", DEFAULT_QUERY_LIMIT)


def api_port() -> int:
    return _int_env("SKEIN_API_PORT", DEFAULT_API_PORT)


def setup_logging(level: str = None):
    """Configure root logging once. Later calls only adjust the level."""
    global _logging_configured
    level = (level or log_level()).upper()
    if not _logging_configured:
        logging.basicConfig(level=level, format=LOG_FORMAT)
        _logging_configured = True
    logging.getLogger().setLevel(level)
