"""Logging setup for the taskboard service."""
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_handler = None


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the ``taskboard`` logger.

    Calling it again only updates the level, so app factories and tests can
    call it freely.
    """
    global _handler
    logger = logging.getLogger("taskboard")
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if _handler not in logger.handlers:
        logger.addHandler(_handler)
    return logger
