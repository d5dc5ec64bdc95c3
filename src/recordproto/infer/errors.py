# recordproto:header:start
#
#   project      : RecordProto
#   file         : errors.py
#   file_relpath : src/recordproto/infer/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Exceptions raised during schema inference."""

from __future__ import annotations


class InferenceError(Exception):
    """The input rows do not allow a schema to be inferred."""
