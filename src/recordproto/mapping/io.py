# recordproto:header:start
#
#   project      : RecordProto
#   file         : io.py
#   file_relpath : src/recordproto/mapping/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""TOML serialization of `RecordProtoMapping`.

Layout of a mapping file:

```toml
package_name = "flights"
message_name = "Flight"

[python_options]
module_name = "flights_reader"
proto_module = "flights_pb2"

[[columns]]
column_index = 0
col_name = "Departure"
proto_name = "departure"
proto_type = "google.protobuf.Timestamp"
proto_tag = 1
ignored = false
proto_imports = ["google/protobuf/timestamp.proto"]
comment = "..."

[columns.time_format]
layout = "%Y-%m-%d %H:%M:%S"
time_zone_name = "UTC"

[[extra_fields]]
proto_name = "source_file"
proto_type = "string"
proto_tag = 100
```

TOML has no `null` value, so `None` entries are omitted when rendering.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from recordproto.config.logging import get_logger
from recordproto.mapping.errors import MappingError
from recordproto.mapping.model import (
    ColumnToFieldMapping,
    FieldDefinition,
    PythonOptions,
    RecordProtoMapping,
    TimeFormat,
)

if TYPE_CHECKING:
    from recordproto.config.logging import RecordprotoLogger

logger: RecordprotoLogger = get_logger(__name__)

TomlTable = dict[str, Any]

_MAPPING_KEYS = frozenset(
    {"package_name", "message_name", "columns", "python_options", "extra_fields"}
)
_COLUMN_KEYS = frozenset(
    {
        "column_index",
        "col_name",
        "proto_name",
        "proto_type",
        "proto_tag",
        "ignored",
        "proto_imports",
        "comment",
        "time_format",
    }
)
_FIELD_KEYS = frozenset({"proto_name", "proto_type", "proto_tag", "proto_imports", "comment"})
_TIME_FORMAT_KEYS = frozenset({"layout", "time_zone_name"})
_PYTHON_OPTIONS_KEYS = frozenset({"module_name", "proto_module"})


# --- rendering ---


def _strip_none_for_toml(value: object) -> object:
    """Remove TOML-incompatible `None` from mappings and lists."""
    if isinstance(value, Mapping):
        out: dict[str, object] = {}
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        for k_any, v_any in m.items():
            if v_any is None:
                continue
            out[str(k_any)] = _strip_none_for_toml(v_any)
        return out
    if isinstance(value, list):
        return [_strip_none_for_toml(v) for v in cast("list[object]", value) if v is not None]
    return value


def _is_table_like(value: object) -> bool:
    if isinstance(value, Mapping):
        return True
    return (
        isinstance(value, list)
        and bool(value)
        and all(isinstance(v, Mapping) for v in cast("list[object]", value))
    )


def mapping_to_dict(mapping: RecordProtoMapping) -> TomlTable:
    """Return ``mapping`` as plain TOML-compatible data.

    Plain keys come before tables and arrays of tables, as TOML requires.
    """
    data = cast("TomlTable", _strip_none_for_toml(asdict(mapping)))
    plain = {k: v for k, v in data.items() if not _is_table_like(v)}
    tables = {k: v for k, v in data.items() if _is_table_like(v)}
    return {**plain, **tables}


def dumps_mapping(mapping: RecordProtoMapping) -> str:
    """Serialize ``mapping`` to a TOML document.

    Args:
        mapping (RecordProtoMapping): The mapping to render.

    Returns:
        str: The TOML text.
    """
    data = mapping_to_dict(mapping)
    return cast("str", cast("Any", tomlkit).dumps(data))


def save_mapping(mapping: RecordProtoMapping, path: Path | str, *, header: str = "") -> None:
    """Write ``mapping`` to ``path`` as TOML, preceded by ``header`` if given.

    Raises:
        MappingError: If the file cannot be written.
    """
    target = Path(path)
    text = header + dumps_mapping(mapping)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise MappingError(f"cannot write mapping: {exc}", str(target)) from exc
    logger.info("Wrote mapping to %s", target)


# --- parsing ---


def _check_keys(table: TomlTable, allowed: frozenset[str], where: str) -> None:
    for key in table:
        if key not in allowed:
            logger.warning("Ignoring unknown key %r in %s", key, where)


def _get_str(table: TomlTable, key: str, where: str) -> str:
    value = table.get(key, "")
    if not isinstance(value, str):
        raise MappingError(f"{where}.{key}: expected a string, got {type(value).__name__}")
    return value


def _get_int(table: TomlTable, key: str, where: str) -> int:
    value = table.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, int):
        raise MappingError(f"{where}.{key}: expected an integer, got {type(value).__name__}")
    return value


def _get_bool(table: TomlTable, key: str, where: str) -> bool:
    value = table.get(key, False)
    if not isinstance(value, bool):
        raise MappingError(f"{where}.{key}: expected a boolean, got {type(value).__name__}")
    return value


def _get_str_list(table: TomlTable, key: str, where: str) -> list[str]:
    value = table.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise MappingError(f"{where}.{key}: expected a list of strings")
    return list(cast("list[str]", value))


def _get_table(table: TomlTable, key: str, where: str) -> TomlTable | None:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise MappingError(f"{where}.{key}: expected a table, got {type(value).__name__}")
    return cast("TomlTable", value)


def _get_table_list(table: TomlTable, key: str, where: str) -> list[TomlTable]:
    value = table.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise MappingError(f"{where}.{key}: expected an array of tables")
    return cast("list[TomlTable]", value)


def _time_format_from_table(table: TomlTable, where: str) -> TimeFormat:
    _check_keys(table, _TIME_FORMAT_KEYS, where)
    return TimeFormat(
        layout=_get_str(table, "layout", where),
        time_zone_name=_get_str(table, "time_zone_name", where),
    )


def _column_from_table(table: TomlTable, where: str) -> ColumnToFieldMapping:
    _check_keys(table, _COLUMN_KEYS, where)
    time_table = _get_table(table, "time_format", where)
    return ColumnToFieldMapping(
        column_index=_get_int(table, "column_index", where),
        col_name=_get_str(table, "col_name", where),
        proto_name=_get_str(table, "proto_name", where),
        proto_type=_get_str(table, "proto_type", where),
        proto_tag=_get_int(table, "proto_tag", where),
        ignored=_get_bool(table, "ignored", where),
        proto_imports=_get_str_list(table, "proto_imports", where),
        comment=_get_str(table, "comment", where),
        time_format=(
            _time_format_from_table(time_table, f"{where}.time_format")
            if time_table is not None
            else None
        ),
    )


def _field_from_table(table: TomlTable, where: str) -> FieldDefinition:
    _check_keys(table, _FIELD_KEYS, where)
    return FieldDefinition(
        proto_name=_get_str(table, "proto_name", where),
        proto_type=_get_str(table, "proto_type", where),
        proto_tag=_get_int(table, "proto_tag", where),
        proto_imports=_get_str_list(table, "proto_imports", where),
        comment=_get_str(table, "comment", where),
    )


def mapping_from_dict(data: TomlTable) -> RecordProtoMapping:
    """Build a mapping from plain TOML data.

    Raises:
        MappingError: If a value has the wrong shape.
    """
    _check_keys(data, _MAPPING_KEYS, "mapping")
    options_table = _get_table(data, "python_options", "mapping")
    python_options: PythonOptions | None = None
    if options_table is not None:
        _check_keys(options_table, _PYTHON_OPTIONS_KEYS, "python_options")
        python_options = PythonOptions(
            module_name=_get_str(options_table, "module_name", "python_options"),
            proto_module=_get_str(options_table, "proto_module", "python_options"),
        )
    return RecordProtoMapping(
        package_name=_get_str(data, "package_name", "mapping"),
        message_name=_get_str(data, "message_name", "mapping"),
        columns=[
            _column_from_table(table, f"columns[{i}]")
            for i, table in enumerate(_get_table_list(data, "columns", "mapping"))
        ],
        python_options=python_options,
        extra_fields=[
            _field_from_table(table, f"extra_fields[{i}]")
            for i, table in enumerate(_get_table_list(data, "extra_fields", "mapping"))
        ],
    )


def loads_mapping(text: str) -> RecordProtoMapping:
    """Parse a TOML mapping document.

    Raises:
        MappingError: If the text is not valid TOML or has the wrong shape.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise MappingError(f"invalid TOML: {exc}") from exc
    data_any: Any = doc.unwrap()
    return mapping_from_dict(cast("TomlTable", data_any))


def load_mapping(path: Path | str) -> RecordProtoMapping:
    """Read and parse the mapping file at ``path``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        MappingError: If the file cannot be read or parsed.
    """
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as exc:
        raise MappingError(f"cannot read mapping: {exc}", str(source)) from exc
    try:
        mapping = loads_mapping(text)
    except MappingError as exc:
        raise MappingError(str(exc), str(source)) from exc
    logger.debug("Loaded mapping %s with %d columns", source, len(mapping.columns))
    return mapping
