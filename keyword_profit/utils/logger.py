"""KeywordProfit - Logging for the server and the CLI.

Everything logs under the ``keyword_profit`` namespace. Modules use
``logging.getLogger(__name__)`` and propagate into the logger configured
here, which writes to stderr and, when a log directory is configured,
to a rotating file in it.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_FILE = "keyword_profit.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def _parse_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def _file_handler(logger: logging.Logger) -> Optional[RotatingFileHandler]:
    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler):
            return handler
    return None


def get_logger(
    name: str = "keyword_profit",
    log_level: Union[str, int] = "INFO",
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """Return the named logger, configured for *log_level*.

    The stderr handler is attached once. Asking again updates the level and
    adds the file handler if *log_dir* is given and none is attached yet;
    an existing file handler is left alone.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_parse_level(log_level))
    formatter = logging.Formatter(LOG_FORMAT)

    if not logger.handlers:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        logger.addHandler(console)
        logger.propagate = False

    if log_dir is not None and _file_handler(logger) is None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / LOG_FILE,
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
