# recordproto:header:start
#
#   project      : RecordProto
#   file         : __init__.py
#   file_relpath : src/recordproto/csvcoder/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Decoding of CSV rows into dataclass records.

Every cell is decoded with `recordproto.textcoder`, so any type with a registered
text coder (or an underlying primitive) can appear as a record field. Importing
this package also registers a `datetime.datetime` coder in the default registry.
"""

from __future__ import annotations

from recordproto.csvcoder.errors import CsvCoderError, RowError
from recordproto.csvcoder.file import FileParser
from recordproto.csvcoder.positions import INVALID_COLUMN, INVALID_ROW, ColumnNumber, RowNumber
from recordproto.csvcoder.row import (
    ROW_CONTEXT_KEY,
    FieldBinding,
    Header,
    Row,
    RowType,
    get_row_type,
    parse_row,
    register_row_type,
)
from recordproto.csvcoder.timecoder import TIME_LAYOUT_KEY, TIME_ZONE_KEY

__all__ = [
    "INVALID_COLUMN",
    "INVALID_ROW",
    "ROW_CONTEXT_KEY",
    "TIME_LAYOUT_KEY",
    "TIME_ZONE_KEY",
    "ColumnNumber",
    "CsvCoderError",
    "FieldBinding",
    "FileParser",
    "Header",
    "Row",
    "RowError",
    "RowNumber",
    "RowType",
    "get_row_type",
    "parse_row",
    "register_row_type",
]
