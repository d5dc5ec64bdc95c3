# recordproto:header:start
#
#   project      : RecordProto
#   file         : errors.py
#   file_relpath : src/recordproto/mapping/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Exceptions raised while reading or writing mapping files."""

from __future__ import annotations


class MappingError(Exception):
    """A mapping document is malformed or cannot be read.

    Attributes:
        path (str | None): The file the document came from, when known.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
