# recordproto:header:start
#
#   project      : RecordProto
#   file         : columns.py
#   file_relpath : src/recordproto/infer/columns.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Candidate column types and the tests deciding whether a value fits one.

Candidates are tried in order: every timestamp layout, then ``int64``, then
``float``. A column takes the first candidate that accepts all of its values,
and ``string`` otherwise.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Final

from recordproto.mapping import TIMESTAMP_PROTO_IMPORT, TIMESTAMP_PROTO_TYPE, TimeFormat
from recordproto.textcoder import Float32, Int64, ParseError, Ref, default_registry

if TYPE_CHECKING:
    from recordproto.mapping import ColumnToFieldMapping


@dataclass(frozen=True)
class ColumnType:
    """An inferred proto type for a column."""

    proto_type: str
    proto_imports: tuple[str, ...] = ()

    def accepts(self, value: str) -> bool:
        raise NotImplementedError

    def update_mapping(self, mapping: ColumnToFieldMapping) -> None:
        """Add type-specific parsing information to ``mapping``."""


@dataclass(frozen=True)
class StringColumnType(ColumnType):
    proto_type: str = "string"

    def accepts(self, value: str) -> bool:
        return True


@dataclass(frozen=True)
class NumberColumnType(ColumnType):
    """``int64`` columns use the `Int64` decoder, ``float`` columns the `Float32` decoder."""

    decode_as: type = Int64

    def accepts(self, value: str) -> bool:
        decoder = default_registry().get_decoder(self.decode_as)
        if decoder is None:
            return False
        try:
            decoder.decode_text(None, value, Ref(type_=self.decode_as))
        except ParseError:
            return False
        return True


INT64_COLUMN: Final[NumberColumnType] = NumberColumnType("int64", decode_as=Int64)
FLOAT_COLUMN: Final[NumberColumnType] = NumberColumnType("float", decode_as=Float32)
STRING_COLUMN: Final[StringColumnType] = StringColumnType()


@dataclass(frozen=True)
class TimestampColumnType(ColumnType):
    """A ``google.protobuf.Timestamp`` column in one `datetime.strptime` layout.

    Attributes:
        layout (str): The strptime format.
        shape (re.Pattern[str] | None): Full-match pattern a value must satisfy
            before parsing, for layouts that strptime would match too loosely.
        time_zone (str): Zone name recorded in the mapping.
    """

    proto_type: str = TIMESTAMP_PROTO_TYPE
    proto_imports: tuple[str, ...] = (TIMESTAMP_PROTO_IMPORT,)
    layout: str = ""
    shape: re.Pattern[str] | None = field(default=None, compare=False)
    time_zone: str = ""

    def accepts(self, value: str) -> bool:
        if self.shape is not None and self.shape.fullmatch(value) is None:
            return False
        try:
            datetime.strptime(value, self.layout)
        except ValueError:
            return False
        return True

    def update_mapping(self, mapping: ColumnToFieldMapping) -> None:
        mapping.time_format = TimeFormat(layout=self.layout, time_zone_name=self.time_zone)


_COMPACT_DATE: Final[re.Pattern[str]] = re.compile(r"[0-9]{8}")

TIMESTAMP_LAYOUTS: Final[tuple[tuple[str, re.Pattern[str] | None], ...]] = (
    ("%Y-%m-%d %H:%M:%S", None),
    ("%Y-%m-%d %I:%M:%S %p", None),
    ("%m/%d/%Y %I:%M:%S %p", None),
    ("%a %b %d %H:%M:%S %Y", None),  # ANSI C
    ("%a %b %d %H:%M:%S %Z %Y", None),  # Unix date
    ("%d %b %y %H:%M %Z", None),  # RFC 822
    ("%d %b %y %H:%M %z", None),
    ("%A, %d-%b-%y %H:%M:%S %Z", None),  # RFC 850
    ("%a, %d %b %Y %H:%M:%S %Z", None),  # RFC 1123
    ("%a, %d %b %Y %H:%M:%S %z", None),
    ("%Y-%m-%dT%H:%M:%S%z", None),  # RFC 3339
    ("%Y-%m-%dT%H:%M:%S.%f%z", None),
    ("%I:%M%p", None),
    ("%b %d %H:%M:%S", None),
    ("%b %d %H:%M:%S.%f", None),
    ("%Y-%m-%d", None),
    ("%Y/%m/%d", None),
    ("%Y%m%d", _COMPACT_DATE),
)
"""Timestamp layouts tried in order."""


def candidate_column_types(time_zone: str = "") -> list[ColumnType]:
    """Return the candidate types in the order they are tried."""
    candidates: list[ColumnType] = [
        TimestampColumnType(layout=layout, shape=shape, time_zone=time_zone)
        for layout, shape in TIMESTAMP_LAYOUTS
    ]
    candidates += [INT64_COLUMN, FLOAT_COLUMN]
    return candidates
