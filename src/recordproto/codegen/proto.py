# recordproto:header:start
#
#   project      : RecordProto
#   file         : proto.py
#   file_relpath : src/recordproto/codegen/proto.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Rendering of the ``.proto`` file for a mapping."""

from __future__ import annotations

import json
import textwrap
from typing import TYPE_CHECKING, Final

from recordproto.config.logging import get_logger
from recordproto.textcoder import Int32, marshal

if TYPE_CHECKING:
    from collections.abc import Iterable

    from recordproto.config.logging import RecordprotoLogger
    from recordproto.mapping import FieldDefinition, RecordProtoMapping

logger: RecordprotoLogger = get_logger(__name__)

FIELD_INDENT: Final[int] = 2
PROTO_WRAP_COLUMN: Final[int] = 80


def quote(text: str) -> str:
    """Return ``text`` as a double-quoted string literal."""
    return json.dumps(text, ensure_ascii=False)


def format_proto_comment(comment: str, indent: int = FIELD_INDENT) -> str:
    """Return ``comment`` as ``//`` lines wrapped at `PROTO_WRAP_COLUMN`.

    Existing line breaks are kept. Words longer than a line are not split, so a
    line may still exceed the limit; a warning is logged in that case.
    """
    if not comment:
        return ""
    prefix = " " * indent + "// "
    width = PROTO_WRAP_COLUMN - len(prefix)
    out: list[str] = []
    for paragraph in comment.split("\n"):
        wrapped = textwrap.wrap(
            paragraph, width=width, break_long_words=False, break_on_hyphens=False
        ) or [""]
        for line in wrapped:
            formatted = (prefix + line).rstrip()
            if len(formatted) > PROTO_WRAP_COLUMN:
                logger.warning(
                    "despite word wrapping, field comment %s results in line length %d, "
                    "max recommended is %d",
                    quote(comment),
                    len(formatted),
                    PROTO_WRAP_COLUMN,
                )
            out.append(formatted + "\n")
    return "".join(out)


def import_statements(paths: Iterable[str]) -> str:
    """Return sorted, de-duplicated ``import`` statements."""
    return "\n".join(f"import {quote(path)};" for path in sorted(set(paths)))


def _column_field_definitions(mapping: RecordProtoMapping) -> list[FieldDefinition]:
    defs = mapping.field_definitions()
    # Column-backed fields come first; annotate them with their source column.
    columns = [col for col in mapping.columns if not col.ignored]
    for definition, col in zip(defs, columns):
        csv_note = f"csv field: {quote(col.col_name)}"
        definition.comment = f"{col.comment}\n\n{csv_note}" if col.comment else csv_note
    return defs


def render_proto(mapping: RecordProtoMapping) -> str:
    """Return the ``.proto`` source declaring the mapping's message."""
    imports: list[str] = []
    sections: list[str] = []
    for definition in _column_field_definitions(mapping):
        imports.extend(definition.proto_imports)
        sections.append(
            f"{format_proto_comment(definition.comment)}"
            f"{' ' * FIELD_INDENT}{definition.proto_type} {definition.proto_name} = "
            f"{marshal(Int32(definition.proto_tag))};"
        )
    header = f'syntax = "proto3";\n\npackage {mapping.package_name};\n\n'
    if imports:
        header += import_statements(imports) + "\n\n"
    body = "\n\n".join(sections)
    return f"{header}message {mapping.message_name} {{\n{body}\n}}\n"
