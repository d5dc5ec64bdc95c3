# recordproto:header:start
#
#   project      : RecordProto
#   file         : errors.py
#   file_relpath : src/recordproto/csvcoder/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Exceptions raised while mapping CSV rows to records."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from recordproto.csvcoder.row import Row


class CsvCoderError(Exception):
    """Base class for CSV decoding errors, including invalid row types and headers."""


class RowError(CsvCoderError):
    """A row could not be decoded.

    The message is prefixed with the row position, e.g. ``data.csv:12: ...``.

    Attributes:
        row (Row): The offending row.
    """

    def __init__(self, row: Row, message: str) -> None:
        self.row = row
        super().__init__(f"{row.position_string()}: {message}")
