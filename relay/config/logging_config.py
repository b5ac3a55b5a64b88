"""
Logging setup for the relay.

Everything the relay logs goes through the single `conversation_relay` logger.
configure_logging() may be called more than once (application import, then
run.py with the command-line level); each call replaces the handlers of the
previous one.

Environment:
- LOG_LEVEL: level name, read when configure_logging() runs so a value loaded
  from .env is honoured
- LOG_FILE: path of the rotating log file; set it empty to log to the console only
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from relay.config.constants import LOGGER_NAME

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_FILE = Path("logs") / "conversation_relay.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5


def resolve_level(level: Optional[str] = None) -> int:
    """Map a level name (or LOG_LEVEL when None) to a logging level, INFO if unknown."""
    name = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def resolve_log_file(log_file: Union[str, Path, None] = None) -> Optional[Path]:
    """Path of the log file, or None when file logging is switched off."""
    if log_file is None:
        log_file = os.getenv("LOG_FILE", str(DEFAULT_LOG_FILE))
    return Path(log_file) if str(log_file).strip() else None


def configure_logging(
    level: Optional[str] = None,
    log_file: Union[str, Path, None] = None,
) -> logging.Logger:
    """
    Configure the relay logger.

    Args:
        level: Level name; LOG_LEVEL (or INFO) when omitted
        log_file: Rotating log file; LOG_FILE (or logs/conversation_relay.log)
            when omitted, an empty string disables it

    Returns:
        logging.Logger: The configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    path = resolve_log_file(log_file)
    if path is not None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                path,
                maxBytes=MAX_LOG_SIZE,
                backupCount=BACKUP_COUNT,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not set up file logging at {path}: {e}")

    # Uvicorn configures the root logger; keep relay records out of it
    logger.propagate = False

    logger.debug(
        f"Logging configured at {logging.getLevelName(logger.level)}"
        + (f", writing to {path}" if path is not None else "")
    )
    return logger
