# recordproto:header:start
#
#   project      : RecordProto
#   file         : errors.py
#   file_relpath : src/recordproto/codegen/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Exceptions raised by the code generators."""

from __future__ import annotations


class CodegenError(Exception):
    """A mapping cannot be turned into code."""
