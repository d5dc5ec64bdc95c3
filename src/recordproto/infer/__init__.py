# recordproto:header:start
#
#   project      : RecordProto
#   file         : __init__.py
#   file_relpath : src/recordproto/infer/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Inference of proto messages and mappings from example CSV data."""

from __future__ import annotations

from recordproto.infer.columns import (
    FLOAT_COLUMN,
    INT64_COLUMN,
    STRING_COLUMN,
    TIMESTAMP_LAYOUTS,
    ColumnType,
    TimestampColumnType,
    candidate_column_types,
)
from recordproto.infer.errors import InferenceError
from recordproto.infer.inferrer import (
    InferOptions,
    InferredColumn,
    InferredProto,
    RecordBasedInferrer,
    infer_column_type,
    infer_proto,
    statistical_comment,
)
from recordproto.infer.names import column_name_to_field_name, snake_case

__all__ = [
    "FLOAT_COLUMN",
    "INT64_COLUMN",
    "STRING_COLUMN",
    "TIMESTAMP_LAYOUTS",
    "ColumnType",
    "InferOptions",
    "InferenceError",
    "InferredColumn",
    "InferredProto",
    "RecordBasedInferrer",
    "TimestampColumnType",
    "candidate_column_types",
    "column_name_to_field_name",
    "infer_column_type",
    "infer_proto",
    "snake_case",
    "statistical_comment",
]
