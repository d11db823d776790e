"""
Logging configuration for the catalog service and its scripts.
"""
import logging
import sys

from labcatalog.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Configure the ``labcatalog`` logger with a single console handler.

    Safe to call more than once: existing handlers are replaced, so reloads
    and scripts never duplicate output.
    """
    logger = logging.getLogger("labcatalog")
    logger.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
