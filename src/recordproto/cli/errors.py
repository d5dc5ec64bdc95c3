# recordproto:header:start
#
#   project      : RecordProto
#   file         : errors.py
#   file_relpath : src/recordproto/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""CLI exceptions and the exit codes they map to.

Commands translate library errors (`MappingError`, `InferenceError`, `CodegenError`,
`OSError`) into one of these at the command boundary. Click prints the message
and exits with the class's `exit_code`.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any

import click

from recordproto.cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from pathlib import Path


class RecordprotoError(click.ClickException):
    """Base class of CLI errors.

    Args:
        message (str): What went wrong.
        path (Path | str | None): File the error is about; prefixed to the message.
    """

    exit_code = ExitCode.FAILURE

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(f"{path}: {message}" if path is not None else message)
        self.path = path

    def format_message(self) -> str:
        return self.message

    def show(self, file: IO[Any] | None = None) -> None:
        """Print the error through the console in ``ctx.obj``, else as Click does."""
        ctx = click.get_current_context(silent=True)
        obj = ctx.obj if ctx is not None else None
        console = obj.get("console") if isinstance(obj, dict) else None
        if console is None:
            super().show(file)
            return
        console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))


class RecordprotoUsageError(RecordprotoError):
    """Invalid combination of command-line options."""

    exit_code = ExitCode.USAGE_ERROR


class RecordprotoDataError(RecordprotoError):
    """Input data that cannot be decoded or inferred from."""

    exit_code = ExitCode.DATA_ERROR


class RecordprotoFileNotFoundError(RecordprotoError):
    exit_code = ExitCode.FILE_NOT_FOUND


class RecordprotoIOError(RecordprotoError):
    exit_code = ExitCode.IO_ERROR


class RecordprotoPermissionDeniedError(RecordprotoError):
    exit_code = ExitCode.PERMISSION_DENIED


class RecordprotoConfigError(RecordprotoError):
    """Malformed or incomplete mapping file."""

    exit_code = ExitCode.CONFIG_ERROR
