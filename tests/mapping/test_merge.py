# recordproto:header:start
#
#   project      : RecordProto
#   file         : test_merge.py
#   file_relpath : tests/mapping/test_merge.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Tests for laying an inferred mapping over a template."""

from __future__ import annotations

from recordproto.mapping import (
    ColumnToFieldMapping,
    FieldDefinition,
    PythonOptions,
    RecordProtoMapping,
    merge,
)


def _inferred() -> RecordProtoMapping:
    return RecordProtoMapping(
        package_name="flights",
        message_name="Flight",
        columns=[
            ColumnToFieldMapping(col_name="a", proto_name="a", proto_type="int64", proto_tag=1)
        ],
        python_options=PythonOptions(module_name="flights_reader"),
    )


def test_without_template_returns_copy() -> None:
    inferred = _inferred()
    merged = merge(None, inferred)
    assert merged == inferred
    assert merged is not inferred
    assert merged.columns[0] is not inferred.columns[0]


def test_template_values_survive_where_inferred_is_empty() -> None:
    template = RecordProtoMapping(
        package_name="old",
        message_name="Old",
        columns=[
            ColumnToFieldMapping(col_name="z", proto_name="z", proto_type="string", proto_tag=9)
        ],
        python_options=PythonOptions(module_name="old_reader", proto_module="old_pb2"),
        extra_fields=[FieldDefinition(proto_name="source", proto_type="string", proto_tag=100)],
    )

    merged = merge(template, _inferred())

    assert merged.package_name == "flights"
    assert merged.message_name == "Flight"
    assert merged.columns == _inferred().columns
    assert merged.python_options == PythonOptions(
        module_name="flights_reader", proto_module="old_pb2"
    )
    assert merged.extra_fields == template.extra_fields
    assert merged.extra_fields[0] is not template.extra_fields[0]


def test_empty_inferred_values_do_not_clear_template() -> None:
    template = _inferred()
    inferred = RecordProtoMapping(package_name="", message_name="New")
    merged = merge(template, inferred)
    assert merged.package_name == "flights"
    assert merged.message_name == "New"
    assert merged.columns == template.columns


def test_extra_fields_are_merged_by_name() -> None:
    template = RecordProtoMapping(
        extra_fields=[
            FieldDefinition(proto_name="source", proto_type="string", proto_tag=100),
            FieldDefinition(proto_name="batch", proto_type="int64", proto_tag=101),
        ]
    )
    inferred = RecordProtoMapping(
        extra_fields=[
            FieldDefinition(proto_name="batch", proto_type="uint64", proto_tag=101),
            FieldDefinition(proto_name="loaded_at", proto_type="string", proto_tag=102),
        ]
    )

    merged = merge(template, inferred)

    assert [(f.proto_name, f.proto_type) for f in merged.extra_fields] == [
        ("source", "string"),
        ("batch", "uint64"),
        ("loaded_at", "string"),
    ]


def test_arguments_are_not_modified() -> None:
    template = RecordProtoMapping(
        package_name="old", python_options=PythonOptions(proto_module="x")
    )
    inferred = _inferred()
    merge(template, inferred)
    assert template == RecordProtoMapping(
        package_name="old", python_options=PythonOptions(proto_module="x")
    )
    assert inferred == _inferred()
