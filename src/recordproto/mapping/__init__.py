# recordproto:header:start
#
#   project      : RecordProto
#   file         : __init__.py
#   file_relpath : src/recordproto/mapping/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Record-to-proto mapping model and its TOML file format."""

from __future__ import annotations

from recordproto.mapping.errors import MappingError
from recordproto.mapping.io import (
    dumps_mapping,
    load_mapping,
    loads_mapping,
    mapping_from_dict,
    mapping_to_dict,
    save_mapping,
)
from recordproto.mapping.merge import merge
from recordproto.mapping.model import (
    TIMESTAMP_PROTO_IMPORT,
    TIMESTAMP_PROTO_TYPE,
    ColumnToFieldMapping,
    FieldDefinition,
    PythonOptions,
    RecordProtoMapping,
    TimeFormat,
)

__all__ = [
    "TIMESTAMP_PROTO_IMPORT",
    "TIMESTAMP_PROTO_TYPE",
    "ColumnToFieldMapping",
    "FieldDefinition",
    "MappingError",
    "PythonOptions",
    "RecordProtoMapping",
    "TimeFormat",
    "dumps_mapping",
    "load_mapping",
    "loads_mapping",
    "mapping_from_dict",
    "mapping_to_dict",
    "merge",
    "save_mapping",
]
