"""Structured logging for vclock.

Records go to the ``vclock`` logger, which writes to stderr through its own
handler and does not propagate. Keyword arguments become ``key=value`` fields
after the message::

    12:30:45 [DEBUG] Vector clock decode failed reason='Empty input' size=0
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from vclock.config import LoggingConfig

LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "off": logging.CRITICAL + 1,
}

_PLAIN = "%(asctime)s [%(levelname)s] %(message)s"
_WITH_LOCATION = "%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s"


class FieldsFormatter(logging.Formatter):
    """Appends the record's ``fields`` mapping to the formatted line."""

    def __init__(self, *, location: bool = False) -> None:
        super().__init__(_WITH_LOCATION if location else _PLAIN, datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields: dict[str, Any] = getattr(record, "fields", {})
        if not fields:
            return line
        return line + " " + " ".join(f"{key}={value!r}" for key, value in fields.items())


_logger = logging.getLogger("vclock")
_logger.setLevel(LEVELS["warn"])
_logger.propagate = False

_handler = logging.StreamHandler(sys.stderr)
_handler.setFormatter(FieldsFormatter())
_logger.addHandler(_handler)


def apply(config: LoggingConfig) -> None:
    _logger.setLevel(LEVELS[config.level])
    _handler.setFormatter(FieldsFormatter(location=config.location))


def debug(msg: str, **fields: Any) -> None:
    _logger.debug(msg, extra={"fields": fields}, stacklevel=2)


def info(msg: str, **fields: Any) -> None:
    _logger.info(msg, extra={"fields": fields}, stacklevel=2)


def error(msg: str, **fields: Any) -> None:
    _logger.error(msg, extra={"fields": fields}, stacklevel=2)
