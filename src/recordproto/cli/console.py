# recordproto:header:start
#
#   project      : RecordProto
#   file         : console.py
#   file_relpath : src/recordproto/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Console used by commands for user-facing output.

Generated files, mappings and confirmations go through the console; diagnostics
go through `logging`.
"""

from __future__ import annotations

import sys
from typing import Any, Protocol, TextIO

import click


class ConsoleLike(Protocol):
    """What commands need from a console."""

    def print(self, text: str = "", *, nl: bool = True) -> None: ...

    def error(self, text: str, *, nl: bool = True) -> None: ...

    def styled(self, text: str, **style_kwargs: Any) -> str: ...


class ClickConsole:
    """`ConsoleLike` writing with `click.echo`.

    Args:
        enable_color (bool): Keep ANSI styling in the output.
        out (TextIO | None): Output stream; `sys.stdout` if None.
        err (TextIO | None): Error stream; `sys.stderr` if None.
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out
        self.err = err

    def print(self, text: str = "", *, nl: bool = True) -> None:
        click.echo(text, nl=nl, file=self.out or sys.stdout, color=self.enable_color)

    def error(self, text: str, *, nl: bool = True) -> None:
        click.echo(text, nl=nl, file=self.err or sys.stderr, color=self.enable_color)

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` passed through `click.style`, or as is without color."""
        return click.style(text, **style_kwargs) if self.enable_color else text
