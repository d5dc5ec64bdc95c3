# recordproto:header:start
#
#   project      : RecordProto
#   file         : positions.py
#   file_relpath : src/recordproto/csvcoder/positions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Zero-based row and column positions within a CSV file."""

from __future__ import annotations

from typing import Final


class ColumnNumber(int):
    """Zero-based column index. Negative values are invalid."""

    def is_valid(self) -> bool:
        return self >= 0

    def offset(self) -> int:
        """Return the index into a row's values."""
        return int(self)


class RowNumber(int):
    """Zero-based row index, counting the header row. Negative values are invalid."""

    def is_valid(self) -> bool:
        return self >= 0

    def offset(self) -> int:
        return int(self)

    def ordinal(self) -> int:
        """Return the one-based row number, as displayed by editors."""
        return self.offset() + 1


INVALID_COLUMN: Final[ColumnNumber] = ColumnNumber(-1)
INVALID_ROW: Final[RowNumber] = RowNumber(-1)
