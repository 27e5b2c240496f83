"""
Logging for FreshCart.

Every module asks for its logger through ``get_logger(__name__)``. The first
call installs a single stdout handler on the ``freshcart`` logger; the level
comes from ``LOG_LEVEL`` and ``FRESHCART_ENV=production`` drops timestamps
for hosts that add their own.

Product names and ids come from user input, so they go through the
``sanitize_*`` helpers before being interpolated into a message.
"""

import logging
import os
import sys
from functools import cache

ROOT_LOGGER = "freshcart"

_PRODUCTION_FORMAT = "%(levelname)s [%(name)s] %(message)s"
_LOCAL_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Control characters that could split one record into forged lines (CWE-117)
_UNSAFE_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Attach the FreshCart handler to the package logger.

    Safe to call more than once; the handler is only installed the first time.
    An explicit ``level`` always wins over ``LOG_LEVEL``.
    """
    package_logger = logging.getLogger(ROOT_LOGGER)

    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    package_logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not any(getattr(h, "_freshcart", False) for h in package_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        production = os.environ.get("FRESHCART_ENV") == "production"
        handler.setFormatter(logging.Formatter(_PRODUCTION_FORMAT if production else _LOCAL_FORMAT))
        handler._freshcart = True
        package_logger.addHandler(handler)

    # The cart mirror posts through httpx, which logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return package_logger


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger for a FreshCart module, configuring the package on first use."""
    configure_logging()
    return logging.getLogger(name)


def sanitize_id_for_logging(id_value: str | None) -> str:
    """Escaped id cut to 8 characters (enough to tell UUIDs apart), or "N/A"."""
    if not id_value:
        return "N/A"
    return str(id_value).translate(_UNSAFE_CHARS)[:8]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Escaped user text capped at max_length characters, or "N/A"."""
    if not value:
        return "N/A"
    safe_value = str(value).translate(_UNSAFE_CHARS)
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."
