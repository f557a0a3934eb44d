"""
Logging setup for the storefront.

Usage:
    from storefront.logging import get_logger
    logger = get_logger(__name__)

    logger.info("Cart written")
    logger.error("Order submission failed", exc_info=True)

Level and layout come from ``STOREFRONT_LOG_LEVEL`` and
``STOREFRONT_LOG_FORMAT`` (see storefront.config).
"""

import logging
import sys
from functools import cache
from typing import Any

from storefront.config import STOREFRONT_LOG_FORMAT, STOREFRONT_LOG_LEVEL

LOG_FORMATS = {
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "plain": "%(levelname)s [%(name)s] %(message)s",
}

# Client libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "upstash_redis")

# Control characters that could forge extra log lines (CWE-117)
_UNSAFE_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


def configure_logging(level: str = STOREFRONT_LOG_LEVEL, fmt: str = STOREFRONT_LOG_FORMAT) -> None:
    """Attach a stdout handler to the root logger unless the host app already did."""
    root = logging.getLogger()
    if root.handlers:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMATS.get(fmt, LOG_FORMATS["detailed"])))
    root.setLevel(numeric_level)
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def sanitize_for_logging(value: Any, max_length: int = 50) -> str:
    """
    Make a user-controlled value (product name, stored cart payload) safe to log.

    Args:
        value: Anything; non-strings are rendered with ``str``
        max_length: Characters kept before truncating with "..."

    Returns:
        Single-line text, or "N/A" for empty values
    """
    if value is None or value == "":
        return "N/A"
    text = str(value).translate(_UNSAFE_CHARS)
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


__all__ = [
    "LOG_FORMATS",
    "configure_logging",
    "get_logger",
    "sanitize_for_logging",
]
