"""
Logging for the storefront cart.

The root handler is installed once when this module is first imported;
modules then ask for a named logger:

    from storefront.logging import get_logger
    logger = get_logger(__name__)
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Product ids come from page markup; keep log lines short and single-line
LOGGED_ID_LENGTH = 8
_CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})

# Chatty third-party loggers (the Upstash REST client goes through httpx)
_QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str | None = None, production: bool | None = None) -> bool:
    """
    Install a stdout handler on the root logger unless one is already there.

    Args:
        level: Level name (default: LOG_LEVEL env var, then INFO)
        production: Use the short format (default: STOREFRONT_ENV == "production")

    Returns:
        True if a handler was installed, False if the root was already configured
    """
    root = logging.getLogger()
    if root.handlers:
        return False

    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    if production is None:
        production = os.environ.get("STOREFRONT_ENV") == "production"

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if production else LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return True


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def sanitize_id_for_logging(id_value: str | None) -> str:
    """Product id safe for a log line: control chars escaped, cut to LOGGED_ID_LENGTH."""
    if not id_value:
        return "N/A"
    return str(id_value).translate(_CONTROL_CHARS)[:LOGGED_ID_LENGTH]


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
]
