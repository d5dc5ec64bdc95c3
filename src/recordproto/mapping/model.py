# recordproto:header:start
#
#   project      : RecordProto
#   file         : model.py
#   file_relpath : src/recordproto/mapping/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Data model of a record-to-proto mapping.

A `RecordProtoMapping` describes how the columns of a CSV file map onto the
fields of a generated proto message. It is produced by `recordproto.infer`,
edited by hand as a TOML file, and consumed by `recordproto.codegen`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

TIMESTAMP_PROTO_TYPE: Final[str] = "google.protobuf.Timestamp"
TIMESTAMP_PROTO_IMPORT: Final[str] = "google/protobuf/timestamp.proto"


@dataclass
class TimeFormat:
    """How a timestamp column is parsed.

    Attributes:
        layout (str): A `datetime.strptime` format.
        time_zone_name (str): IANA zone for naive timestamps; empty means UTC.
    """

    layout: str = ""
    time_zone_name: str = ""


@dataclass
class ColumnToFieldMapping:
    """Maps one CSV column to one proto field."""

    column_index: int = 0
    col_name: str = ""
    proto_name: str = ""
    proto_type: str = ""
    proto_tag: int = 0
    ignored: bool = False
    proto_imports: list[str] = field(default_factory=list)
    comment: str = ""
    time_format: TimeFormat | None = None


@dataclass
class FieldDefinition:
    """A proto field that does not correspond to a CSV column."""

    proto_name: str = ""
    proto_type: str = ""
    proto_tag: int = 0
    proto_imports: list[str] = field(default_factory=list)
    comment: str = ""


@dataclass
class PythonOptions:
    """Options for the generated Python converter module.

    Attributes:
        module_name (str): Name of the generated module, e.g. ``flights_reader``.
        proto_module (str): Import path of the protoc-generated ``_pb2`` module.
            When empty, the converter has no ``to_proto()`` method.
    """

    module_name: str = ""
    proto_module: str = ""


@dataclass
class RecordProtoMapping:
    """The complete mapping from a CSV file to a proto message."""

    package_name: str = ""
    message_name: str = ""
    columns: list[ColumnToFieldMapping] = field(default_factory=list)
    python_options: PythonOptions | None = None
    extra_fields: list[FieldDefinition] = field(default_factory=list)

    def field_definitions(self) -> list[FieldDefinition]:
        """Return every proto field: mapped columns that are not ignored, then extras."""
        defs = [
            FieldDefinition(
                proto_name=col.proto_name,
                proto_type=col.proto_type,
                proto_tag=col.proto_tag,
                proto_imports=list(col.proto_imports),
                comment=col.comment,
            )
            for col in self.columns
            if not col.ignored
        ]
        defs.extend(self.extra_fields)
        return defs
