# recordproto:header:start
#
#   project      : RecordProto
#   file         : options.py
#   file_relpath : src/recordproto/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Group-level options shared by every RecordProto command.

Verbosity (``-v`` / ``-q``) controls how much the commands print to the console;
it is expressed as a `logging` level number so commands can compare against
``logging.INFO`` and friends. Internal library logging is configured separately,
through ``RECORDPROTO_LOG_LEVEL``.

Color follows ``--color`` / ``--no-color`` first, then ``FORCE_COLOR`` and
``NO_COLOR``, then whether stdout is a terminal.
"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from typing import TYPE_CHECKING, Final, ParamSpec, TypeVar

import click

from recordproto.cli.errors import RecordprotoUsageError
from recordproto.config.logging import TRACE_LEVEL

if TYPE_CHECKING:
    from collections.abc import Callable

P = ParamSpec("P")
R = TypeVar("R")

# Index = number of -v flags (capped at the last entry).
VERBOSE_LEVELS: Final[tuple[int, ...]] = (
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
    TRACE_LEVEL,
)
QUIET_LEVEL: Final[int] = logging.ERROR


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Return the console output level for the given ``-v`` and ``-q`` counts.

    Args:
        verbose_count (int): Number of ``-v`` flags; each one lowers the level one step,
            down to TRACE.
        quiet_count (int): Number of ``-q`` flags; any number gives ERROR.

    Returns:
        int: A `logging` level number; WARNING when neither flag is given.

    Raises:
        RecordprotoUsageError: If both flags are given.
    """
    if verbose_count and quiet_count:
        raise RecordprotoUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count:
        return QUIET_LEVEL
    return VERBOSE_LEVELS[min(verbose_count, len(VERBOSE_LEVELS) - 1)]


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the counted ``-v/--verbose`` and ``-q/--quiet`` options to ``f``."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Print more about what is done; repeat (up to -vvv) for more detail.",
    )(f)
    return click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only print errors.",
    )(f)


class ColorMode(str, Enum):
    """Requested colorization of console output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"

    @classmethod
    def from_flags(cls, color: str | None, no_color: bool) -> ColorMode:
        """Combine ``--color`` and ``--no-color``; the latter wins."""
        if no_color:
            return cls.NEVER
        return cls(color) if color else cls.AUTO


def _env_color_override() -> bool | None:
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    return None


def resolve_color_mode(*, cli_mode: ColorMode | None, stdout_isatty: bool | None = None) -> bool:
    """Return whether console output should be colored.

    Args:
        cli_mode (ColorMode | None): Mode requested on the command line; None means AUTO.
        stdout_isatty (bool | None): Whether stdout is a terminal; detected if None.

    Returns:
        bool: True to color output.
    """
    if cli_mode is ColorMode.ALWAYS:
        return True
    if cli_mode is ColorMode.NEVER:
        return False
    override = _env_color_override()
    if override is not None:
        return override
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            # detached or closed stream
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color {auto,always,never}`` and ``--no-color`` to ``f``."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([mode.value for mode in ColorMode]),
        default=None,
        help="Colorize output: auto (default), always or never.",
    )(f)
    return click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Same as --color=never.",
    )(f)
