"""
logging_config.py
=================

Handlers for the ``mandalagen`` logger. The library itself only logs through
``logging.getLogger(__name__)``; the command line calls ``setup_logging`` to
make those records visible. stdout is left to the CLI result.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "mandalagen"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """Send package records to stderr, and to ``log_file`` (truncated) if given.

    Calling it again replaces the handlers installed by the previous call.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(sys.stderr), level)
    if log_file:
        _attach(logger, logging.FileHandler(log_file, mode="w", encoding="utf-8"), level)

    logger.debug("logging to stderr%s at %s", f" and {log_file}" if log_file else "",
                 logging.getLevelName(level))
