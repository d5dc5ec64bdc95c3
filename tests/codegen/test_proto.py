# recordproto:header:start
#
#   project      : RecordProto
#   file         : test_proto.py
#   file_relpath : tests/codegen/test_proto.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Tests for ``.proto`` rendering and mapping validation."""

from __future__ import annotations

import logging

import pytest

from recordproto.codegen import (
    CodegenError,
    format_proto_comment,
    generate_code,
    import_statements,
    render_proto,
    validate_mapping,
)
from recordproto.mapping import (
    TIMESTAMP_PROTO_IMPORT,
    TIMESTAMP_PROTO_TYPE,
    ColumnToFieldMapping,
    FieldDefinition,
    RecordProtoMapping,
    TimeFormat,
)


def _mapping() -> RecordProtoMapping:
    return RecordProtoMapping(
        package_name="flights",
        message_name="Flight",
        columns=[
            ColumnToFieldMapping(
                column_index=0,
                col_name="Origin",
                proto_name="origin",
                proto_type="string",
                proto_tag=1,
            ),
            ColumnToFieldMapping(
                column_index=1,
                col_name="Departure",
                proto_name="departure",
                proto_type=TIMESTAMP_PROTO_TYPE,
                proto_tag=2,
                proto_imports=[TIMESTAMP_PROTO_IMPORT],
                comment="Departure time.",
                time_format=TimeFormat(layout="%Y-%m-%d %H:%M:%S"),
            ),
            ColumnToFieldMapping(
                column_index=2,
                col_name="Internal",
                proto_name="internal",
                proto_type="string",
                proto_tag=3,
                ignored=True,
            ),
        ],
        extra_fields=[
            FieldDefinition(
                proto_name="source", proto_type="string", proto_tag=100, comment="source file"
            )
        ],
    )


def test_render_proto() -> None:
    assert render_proto(_mapping()) == (
        'syntax = "proto3";\n'
        "\n"
        "package flights;\n"
        "\n"
        'import "google/protobuf/timestamp.proto";\n'
        "\n"
        "message Flight {\n"
        '  // csv field: "Origin"\n'
        "  string origin = 1;\n"
        "\n"
        "  // Departure time.\n"
        "  //\n"
        '  // csv field: "Departure"\n'
        "  google.protobuf.Timestamp departure = 2;\n"
        "\n"
        "  // source file\n"
        "  string source = 100;\n"
        "}\n"
    )


def test_render_proto_does_not_modify_mapping() -> None:
    mapping = _mapping()
    render_proto(mapping)
    assert mapping == _mapping()


def test_import_statements_are_sorted_and_unique() -> None:
    assert import_statements(["b.proto", "a.proto", "b.proto"]) == (
        'import "a.proto";\nimport "b.proto";'
    )


def test_format_proto_comment_wraps_at_eighty_columns() -> None:
    comment = " ".join(["word"] * 30)
    lines = format_proto_comment(comment).splitlines()
    assert len(lines) > 1
    assert all(line.startswith("  // ") and len(line) <= 80 for line in lines)
    assert " ".join(line[5:] for line in lines) == comment


def test_format_proto_comment_keeps_long_words(caplog: pytest.LogCaptureFixture) -> None:
    word = "x" * 90
    with caplog.at_level(logging.WARNING):
        text = format_proto_comment(word)
    assert text == f"  // {word}\n"
    assert "despite word wrapping" in caplog.text


def test_format_proto_comment_empty() -> None:
    assert format_proto_comment("") == ""
    assert format_proto_comment("a\n\nb", indent=0) == "// a\n//\n// b\n"


@pytest.mark.parametrize(
    "mapping, message",
    [
        (RecordProtoMapping(message_name="M"), "no package_name"),
        (RecordProtoMapping(package_name="p"), "no message_name"),
        (
            RecordProtoMapping(
                package_name="p",
                message_name="M",
                extra_fields=[FieldDefinition(proto_name="a", proto_type="string", proto_tag=0)],
            ),
            "invalid tag 0",
        ),
        (
            RecordProtoMapping(
                package_name="p",
                message_name="M",
                extra_fields=[
                    FieldDefinition(proto_name="a", proto_type="string", proto_tag=1),
                    FieldDefinition(proto_name="b", proto_type="string", proto_tag=1),
                ],
            ),
            'fields "a" and "b" share tag 1',
        ),
        (
            RecordProtoMapping(
                package_name="p",
                message_name="M",
                extra_fields=[
                    FieldDefinition(proto_name="a", proto_type="string", proto_tag=1),
                    FieldDefinition(proto_name="a", proto_type="string", proto_tag=2),
                ],
            ),
            'duplicate field name "a"',
        ),
        (
            RecordProtoMapping(
                package_name="p",
                message_name="M",
                extra_fields=[FieldDefinition(proto_name="a", proto_tag=1)],
            ),
            "needs proto_name and proto_type",
        ),
    ],
)
def test_validate_mapping(mapping: RecordProtoMapping, message: str) -> None:
    with pytest.raises(CodegenError, match=message):
        validate_mapping(mapping)


def test_ignored_columns_may_reuse_tags() -> None:
    mapping = _mapping()
    mapping.columns[2].proto_tag = 1
    validate_mapping(mapping)


def test_generate_code_selects_outputs() -> None:
    code = generate_code(_mapping(), python=False)
    assert code.proto_code.startswith('syntax = "proto3";')
    assert code.python_code == ""
