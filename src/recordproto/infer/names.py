# recordproto:header:start
#
#   project      : RecordProto
#   file         : names.py
#   file_relpath : src/recordproto/infer/names.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Conversion of CSV column names to proto field names."""

from __future__ import annotations

import re
from typing import Final

_MULTIPLE_UNDERSCORES: Final[re.Pattern[str]] = re.compile(r"_+")
_NOT_FIELD_NAME_CHAR: Final[re.Pattern[str]] = re.compile(r"[^_a-zA-Z0-9]")
_ACRONYM_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"([a-z0-9])([A-Z])")


def snake_case(name: str) -> str:
    """Return ``name`` in snake_case, splitting camelCase and acronyms.

    >>> snake_case("DepTime")
    'dep_time'
    >>> snake_case("HTTPStatus")
    'http_status'
    """
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return _MULTIPLE_UNDERSCORES.sub("_", name).lower()


def column_name_to_field_name(col_name: str) -> str:
    """Return a proto field name derived from a CSV column name.

    >>> column_name_to_field_name("Origin Airport (IATA)")
    'origin_airport_iata'
    """
    s = col_name.replace(" ", "_").replace("(", "_").replace(")", "_")
    s = _NOT_FIELD_NAME_CHAR.sub("_", s)
    s = _MULTIPLE_UNDERSCORES.sub("_", s)
    s = s.removeprefix("_").removesuffix("_")
    return snake_case(s)
