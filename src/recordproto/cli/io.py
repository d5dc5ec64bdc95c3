# recordproto:header:start
#
#   project      : RecordProto
#   file         : io.py
#   file_relpath : src/recordproto/cli/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""File helpers translating OS errors into CLI errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recordproto.cli.errors import (
    RecordprotoDataError,
    RecordprotoFileNotFoundError,
    RecordprotoIOError,
    RecordprotoPermissionDeniedError,
)
from recordproto.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from recordproto.config.logging import RecordprotoLogger

logger: RecordprotoLogger = get_logger(__name__)


def read_text_file(path: Path) -> str:
    """Return the UTF-8 contents of ``path``.

    Raises:
        RecordprotoFileNotFoundError: If ``path`` does not exist.
        RecordprotoPermissionDeniedError: If ``path`` cannot be read.
        RecordprotoDataError: If the contents are not valid UTF-8.
        RecordprotoIOError: On any other read error.
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise RecordprotoFileNotFoundError("file not found", path=path) from exc
    except PermissionError as exc:
        raise RecordprotoPermissionDeniedError("permission denied", path=path) from exc
    except UnicodeDecodeError as exc:
        raise RecordprotoDataError(f"not valid UTF-8: {exc}", path=path) from exc
    except OSError as exc:
        raise RecordprotoIOError(f"cannot read: {exc}", path=path) from exc


def write_text_file(path: Path, text: str) -> None:
    """Write ``text`` to ``path``, creating parent directories as needed.

    Raises:
        RecordprotoPermissionDeniedError: If ``path`` cannot be written.
        RecordprotoIOError: On any other write error.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except PermissionError as exc:
        raise RecordprotoPermissionDeniedError("permission denied", path=path) from exc
    except OSError as exc:
        raise RecordprotoIOError(f"cannot write: {exc}", path=path) from exc
    logger.info("Wrote %s", path)
