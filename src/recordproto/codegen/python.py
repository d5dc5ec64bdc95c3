# recordproto:header:start
#
#   project      : RecordProto
#   file         : python.py
#   file_relpath : src/recordproto/codegen/python.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Rendering of the Python converter module for a mapping.

The generated module defines:

- ``<Message>Record``: a dataclass with one field per mapped column, decoded by
  `recordproto.csvcoder`;
- ``COLUMN_INDEXES``: the column position of every field in the mapping;
- ``Reader``: iterates records from a text stream;
- ``read_all(stream)``: convenience wrapper around ``Reader``;
- ``<Message>Record.to_proto()`` when a ``proto_module`` is configured.
"""

from __future__ import annotations

import keyword
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from recordproto.codegen.errors import CodegenError
from recordproto.codegen.proto import quote
from recordproto.mapping import TIMESTAMP_PROTO_TYPE
from recordproto.textcoder import Int32, marshal

if TYPE_CHECKING:
    from recordproto.mapping import ColumnToFieldMapping, RecordProtoMapping

DEFAULT_TIME_ZONE: Final[str] = "UTC"


@dataclass(frozen=True)
class PythonType:
    """Python annotation of a proto scalar and how to convert it for the proto message."""

    annotation: str
    import_from: str
    to_proto: str


_INT = "int({})"
_FLOAT = "float({})"
_SAME = "{}"

PROTO_TO_PYTHON: Final[dict[str, PythonType]] = {
    "int32": PythonType("Int32", "recordproto.textcoder", _INT),
    "sint32": PythonType("Int32", "recordproto.textcoder", _INT),
    "sfixed32": PythonType("Int32", "recordproto.textcoder", _INT),
    "int64": PythonType("Int64", "recordproto.textcoder", _INT),
    "sint64": PythonType("Int64", "recordproto.textcoder", _INT),
    "sfixed64": PythonType("Int64", "recordproto.textcoder", _INT),
    "uint32": PythonType("UInt32", "recordproto.textcoder", _INT),
    "fixed32": PythonType("UInt32", "recordproto.textcoder", _INT),
    "uint64": PythonType("UInt64", "recordproto.textcoder", _INT),
    "fixed64": PythonType("UInt64", "recordproto.textcoder", _INT),
    "float": PythonType("Float32", "recordproto.textcoder", _FLOAT),
    "double": PythonType("Float64", "recordproto.textcoder", _FLOAT),
    "bool": PythonType("bool", "", _SAME),
    "string": PythonType("str", "", _SAME),
    TIMESTAMP_PROTO_TYPE: PythonType("datetime", "datetime", _SAME),
}


def python_type(col: ColumnToFieldMapping) -> PythonType:
    """Return the Python type used for ``col``.

    Raises:
        CodegenError: If the proto type has no Python counterpart.
    """
    try:
        return PROTO_TO_PYTHON[col.proto_type]
    except KeyError:
        raise CodegenError(
            f"unexpected type {quote(col.proto_type)} for column {quote(col.col_name)}"
        ) from None


def python_field_name(proto_name: str) -> str:
    """Return a valid Python attribute name for a proto field name.

    Raises:
        CodegenError: If ``proto_name`` is not an identifier.
    """
    if not proto_name.isidentifier():
        raise CodegenError(f"proto field name {quote(proto_name)} is not a valid identifier")
    return proto_name + "_" if keyword.iskeyword(proto_name) else proto_name


def record_class_name(message_name: str) -> str:
    return f"{message_name}Record"


def _field_metadata(col: ColumnToFieldMapping) -> str:
    items = [f'"csv": {quote(col.col_name)}']
    if col.proto_type == TIMESTAMP_PROTO_TYPE:
        time_format = col.time_format
        if time_format is None or not time_format.layout:
            raise CodegenError(f"timestamp column {quote(col.col_name)} has no time_format.layout")
        items.append(f'"time_layout": {quote(time_format.layout)}')
        items.append(f'"time_zone": {quote(time_format.time_zone_name or DEFAULT_TIME_ZONE)}')
    return "{" + ", ".join(items) + "}"


def _to_proto_method(message: str, columns: list[ColumnToFieldMapping]) -> list[str]:
    args: list[str] = []
    timestamps: list[str] = []
    for col in columns:
        attr = python_field_name(col.proto_name)
        # protoc keeps keyword field names; they are only reachable via getattr / **kwargs
        is_keyword = keyword.iskeyword(col.proto_name)
        if col.proto_type == TIMESTAMP_PROTO_TYPE:
            target = (
                f"getattr(msg, {quote(col.proto_name)})" if is_keyword else f"msg.{col.proto_name}"
            )
            timestamps.append(f"        {target}.FromDatetime(self.{attr})")
        else:
            expr = python_type(col).to_proto.format(f"self.{attr}")
            if is_keyword:
                arg = f"**{{{quote(col.proto_name)}: {expr}}}"
            else:
                arg = f"{col.proto_name}={expr}"
            args.append(f"            {arg},")
    lines = [
        "",
        f"    def to_proto(self) -> {message}:",
        f'        """Return this record as a ``{message}`` message."""',
    ]
    if args:
        lines += [f"        msg = {message}(", *args, "        )"]
    else:
        lines.append(f"        msg = {message}()")
    lines += timestamps
    lines.append("        return msg")
    return lines


def render_python(mapping: RecordProtoMapping) -> str:
    """Return the source of the converter module for ``mapping``.

    Raises:
        CodegenError: If ``python_options.module_name`` is not set or a column
            cannot be represented.
    """
    options = mapping.python_options
    if options is None:
        raise CodegenError("must specify python_options in the mapping")
    if not options.module_name:
        raise CodegenError("must specify a non-empty module_name in python_options")
    if not mapping.message_name.isidentifier():
        raise CodegenError(f"message name {quote(mapping.message_name)} is not a valid identifier")

    columns = [col for col in mapping.columns if not col.ignored]
    record = record_class_name(mapping.message_name)
    types = [python_type(col) for col in columns]

    scalar_imports = sorted(
        {t.annotation for t in types if t.import_from == "recordproto.textcoder"}
    )
    imports = [
        "import csv",
        "from collections.abc import Iterator",
        "from dataclasses import dataclass, field",
    ]
    if any(t.import_from == "datetime" for t in types):
        imports.append("from datetime import datetime")
    imports += [
        "from typing import IO",
        "",
        "from recordproto.csvcoder import FileParser",
    ]
    if scalar_imports:
        imports.append(f"from recordproto.textcoder import {', '.join(scalar_imports)}")
    if options.proto_module:
        imports += ["", f"from {options.proto_module} import {mapping.message_name}"]

    field_lines = [
        f"    {python_field_name(col.proto_name)}: {t.annotation}"
        f" = field(metadata={_field_metadata(col)})"
        for col, t in zip(columns, types)
    ]
    if not field_lines:
        field_lines = ["    pass"]

    index_lines = [
        f"    {quote(python_field_name(col.proto_name))}: {marshal(Int32(col.column_index))},"
        for col in columns
    ]

    lines = [
        f'"""Reader for {mapping.package_name}.{mapping.message_name} records from CSV files.',
        "",
        f"Generated by recordproto as module {options.module_name}. Do not edit.",
        '"""',
        "",
        *imports,
        "",
        "COLUMN_INDEXES: dict[str, int] = {",
        *index_lines,
        "}",
        "",
        "",
        "@dataclass",
        f"class {record}:",
        f'    """One row of a {mapping.message_name} CSV file."""',
        "",
        *field_lines,
    ]
    if options.proto_module:
        lines += _to_proto_method(mapping.message_name, columns)
    lines += [
        "",
        "",
        "class Reader:",
        f'    """Reads ``{record}`` values from a CSV text stream with a header row."""',
        "",
        '    def __init__(self, stream: IO[str], path: str = "input.csv") -> None:',
        f"        self._parser = FileParser(csv.reader(stream), path, {record})",
        "",
        f"    def read(self) -> {record}:",
        '        """Return the next record; raises StopIteration at the end of the input."""',
        "        return self._parser.read()",
        "",
        f"    def read_all(self) -> list[{record}]:",
        "        return self._parser.read_all()",
        "",
        f"    def __iter__(self) -> Iterator[{record}]:",
        "        return iter(self._parser)",
        "",
        "",
        f'def read_all(stream: IO[str], path: str = "input.csv") -> list[{record}]:',
        f'    """Return every ``{record}`` in ``stream``."""',
        "    return Reader(stream, path).read_all()",
        "",
    ]
    return "\n".join(lines)
