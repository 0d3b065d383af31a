"""
Logging configuration for the job board API.

Console plus a rotating file under LOG_DIR; payloads are redacted before
they are logged.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE = "offcampus.log"
MAX_LOG_BYTES = 10 * 1024 * 1024  # 10MB
LOG_BACKUPS = 5

# Matched against lower-cased key names
SENSITIVE_KEYS = ("password", "token", "secret", "authorization", "database_url")
REDACTED = "***REDACTED***"


def _with_format(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    return handler


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = None):
    """
    Configure the root logger for the API process.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for the rotating log file (default: logs/)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    log_path = Path(log_dir or "logs")
    log_path.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    root.addHandler(_with_format(logging.StreamHandler(sys.stdout), level, CONSOLE_FORMAT))
    root.addHandler(_with_format(
        RotatingFileHandler(log_path / LOG_FILE, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS),
        level,
        FILE_FORMAT,
    ))

    for noisy in ("uvicorn", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _is_sensitive(key: Any) -> bool:
    return isinstance(key, str) and any(marker in key.lower() for marker in SENSITIVE_KEYS)


def sanitize_log_data(data: Any) -> Any:
    """
    Return a copy of data with secret-looking values redacted.

    Walks nested dicts and lists; anything else is returned unchanged.
    """
    if isinstance(data, dict):
        return {
            key: REDACTED if _is_sensitive(key) else sanitize_log_data(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [sanitize_log_data(item) for item in data]
    return data
