"""
utils/logger.py
---------------
Logging setup shared by the whole package.
Modules obtain their logger with `get_logger(__name__)`; the root
logger is configured lazily on first use, at the level named by
``LOG_LEVEL`` in the environment.
"""

import logging
import sys

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_configured = False


def _configure_root() -> None:
    """Attach a stdout handler to the root logger, once."""
    global _configured
    if _configured:
        return
    root = logging.getLogger()
    level = getattr(logging, LOG_LEVEL, None)
    root.setLevel(level if isinstance(level, int) else logging.INFO)
    # An embedding application (or pytest) may already own the root handlers.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
        root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Return the logger for a module.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    _configure_root()
    return logging.getLogger(name)
