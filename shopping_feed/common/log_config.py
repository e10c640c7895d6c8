"""
Logging Configuration

Feed progress goes to the "shopping_feed" logger; connection-level
chatter from requests/urllib3 is routed through the same stderr
handler only in verbose mode. stdout stays reserved for the feed.
"""

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "shopping_feed"
TRANSPORT_LOGGERS = ("urllib3", "requests")
LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"

_HANDLER_NAME = "shopping_feed.stderr"


def _level_for(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def _replace_handler(logger: logging.Logger, handler: Optional[logging.Handler]) -> None:
    """Detach handlers installed by an earlier setup_logging call, then attach handler."""
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)
    if handler is not None:
        logger.addHandler(handler)


def setup_logging(verbose: bool = False, quiet: bool = False,
                  stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure logging for feed runs.

    Args:
        verbose: DEBUG for the package, and show request/retry
                 details from urllib3 and requests
        quiet: Only warnings and errors
        stream: Output stream (default: sys.stderr)

    Returns:
        The configured package logger
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_level_for(verbose, quiet))
    _replace_handler(logger, handler)

    for name in TRANSPORT_LOGGERS:
        transport = logging.getLogger(name)
        if verbose:
            transport.setLevel(logging.DEBUG)
            _replace_handler(transport, handler)
        else:
            # urllib3 logs every retry and new connection at INFO/DEBUG
            transport.setLevel(logging.WARNING)
            _replace_handler(transport, None)

    return logger
