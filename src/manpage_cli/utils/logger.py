"""Application log file under platformdirs user_log_dir.

Console output is the Reporter's job; this log keeps the details a user
does not need to see (subprocess argv, exit codes, tracebacks).
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "manpage_cli"
_LOG_FILE = "manpage.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def get_log_path() -> Path:
    """Return the path of the rotating log file."""
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger, or one of its children.

    The root ``manpage_cli`` logger is configured once; children such as
    ``get_logger("installer")`` share its file handler.
    """
    global _logger
    if _logger is None:
        logger = logging.getLogger(_APP_NAME)
        logger.setLevel(logging.DEBUG)
        if not any(
            isinstance(h, logging.handlers.RotatingFileHandler)
            for h in logger.handlers
        ):
            log_path = get_log_path()
            log_path.parent.mkdir(parents=True, exist_ok=True)

            handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=_MAX_BYTES,
                backupCount=_BACKUP_COUNT,
                encoding="utf-8",
            )
            handler.setFormatter(
                logging.Formatter(
                    fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                    datefmt="%Y-%m-%dT%H:%M:%S",
                )
            )
            logger.addHandler(handler)
        logger.propagate = False
        _logger = logger

    if name:
        return _logger.getChild(name)
    return _logger
