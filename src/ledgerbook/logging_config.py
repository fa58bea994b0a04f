"""Logging setup for ledgerbook.

All loggers live under the ``ledgerbook`` namespace. Services emit
event-style messages (``transaction_posted``) with structured ``extra``
fields, which the formatter appends as ``key=value`` pairs.
"""

import logging
import sys
import threading
from typing import Any

_LOGGER_PREFIX = "ledgerbook"

_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "taskName", "asctime"}


class KeyValueFormatter(logging.Formatter):
    """Render a record as ``time level logger message key=value ...``."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = [
            f"{key}={val}"
            for key, val in vars(record).items()
            if key not in _STDLIB_KEYS
        ]
        if fields:
            line = f"{line} {' '.join(fields)}"
        return line


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ledgerbook namespace."""
    if name == _LOGGER_PREFIX or name.startswith(f"{_LOGGER_PREFIX}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_configured = False
_lock = threading.Lock()


def configure_logging(level: int | str = logging.WARNING, stream: Any = None) -> None:
    """Configure the ledgerbook logger hierarchy (idempotent)."""
    global _configured
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)

    with _lock:
        if _configured:
            return
        _configured = True

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(KeyValueFormatter())
    root_logger.addHandler(handler)
    root_logger.propagate = False


def reset_logging() -> None:
    """Reset logging configuration. FOR TESTING ONLY."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    logger.propagate = True
