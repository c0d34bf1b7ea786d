"""Console and file logging for command-line runs.

Library code only ever logs through `logging.getLogger(__name__)`; nothing is
printed until a driver script calls `setup_logging`.
"""
import logging
import sys
from typing import List, Optional

LOGGER_NAME = "loop_cppn"

# Render workers log from pool threads, so the thread name is kept.
LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(threadName)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    return handlers


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Routes the `loop_cppn` logger to stdout and, optionally, to `log_file`.

    Calling it again replaces the handlers from the previous call, closing
    them first, so a driver can re-run it with a different level.

    Args:
        level: Threshold for the logger and every handler it gets.
        log_file: File to write the same records to, truncated on open.

    Returns:
        The configured `loop_cppn` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _handlers(log_file):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("logging to %d handler(s) at %s", len(logger.handlers),
                 logging.getLevelName(level))
    return logger
