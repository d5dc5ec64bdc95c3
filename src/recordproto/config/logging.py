# recordproto:header:start
#
#   project      : RecordProto
#   file         : logging.py
#   file_relpath : src/recordproto/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Logging for RecordProto: a TRACE level, colored output and env-based configuration.

Library modules obtain their logger with `get_logger(__name__)`; registration
details and coder fallbacks are logged at TRACE, which sits below DEBUG.

Logging is silent (CRITICAL) unless ``RECORDPROTO_LOG_LEVEL`` names a level, e.g.:

```sh
RECORDPROTO_LOG_LEVEL=TRACE recordproto infer flights.csv ...
```
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV_VAR: Final[str] = "RECORDPROTO_LOG_LEVEL"

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "[%(levelname)s] [%(name)s:%(lineno)d] %(message)s"


class RecordprotoLogger(logging.Logger):
    """`logging.Logger` with a `trace()` method."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` at TRACE level."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


logging.addLevelName(TRACE_LEVEL, "TRACE")
logging.setLoggerClass(RecordprotoLogger)


# Highest threshold first; a record takes the style of the first threshold it reaches.
_LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class ChalkFormatter(logging.Formatter):
    """Formatter coloring each record by severity with `yachalk`."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for threshold, style in _LEVEL_STYLES:
            if record.levelno >= threshold:
                return style(message)
        return chalk.dim(message)


_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}


def resolve_env_log_level() -> int | None:
    """Return the level named by ``RECORDPROTO_LOG_LEVEL``, or None.

    Accepts level names (case-insensitive) and numbers. Unset, empty and unknown
    values give None.
    """
    raw = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if raw.isdigit():
        return int(raw)
    return _LEVEL_NAMES.get(raw)


def setup_logging(level: int | None = None) -> None:
    """Send log records to stderr through a `ChalkFormatter`.

    Replaces the root logger's handlers, so calling it again reconfigures rather
    than duplicates output.

    Args:
        level (int | None): Root level; `resolve_env_log_level()` or CRITICAL if None.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    fmt = LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT
    handler.setFormatter(ChalkFormatter(fmt))
    root.addHandler(handler)


def get_logger(name: str) -> RecordprotoLogger:
    """Return the `RecordprotoLogger` called ``name``."""
    return cast("RecordprotoLogger", logging.getLogger(name))
