# recordproto:header:start
#
#   project      : RecordProto
#   file         : inferrer.py
#   file_relpath : src/recordproto/infer/inferrer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Inference of a proto message from the rows of a record file.

Typical usage:
    ```python
    options = InferOptions(message_name="Flight", package_name="flights")
    inferred = infer_proto(csv_text, options)
    print(inferred.code())
    print(inferred.formatted_mapping())
    ```
"""

from __future__ import annotations

import csv
import io
import json
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from recordproto.codegen import generate_code
from recordproto.config.logging import get_logger
from recordproto.csvcoder.timecoder import load_zone
from recordproto.infer.columns import STRING_COLUMN, ColumnType, candidate_column_types
from recordproto.infer.errors import InferenceError
from recordproto.infer.names import column_name_to_field_name
from recordproto.mapping import (
    ColumnToFieldMapping,
    PythonOptions,
    RecordProtoMapping,
    dumps_mapping,
    merge,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from recordproto.config.logging import RecordprotoLogger

logger: RecordprotoLogger = get_logger(__name__)

VALUES_IN_STATISTICAL_COMMENT: Final[int] = 5


@dataclass(frozen=True)
class InferOptions:
    """Options of an inference run.

    Attributes:
        message_name (str): Name of the proto message.
        package_name (str): Proto package of the message.
        module_name (str): Name of the generated Python converter module.
        proto_module (str): Import path of the protoc-generated module.
        time_zone (str): IANA zone used for timestamps without an offset.
    """

    message_name: str
    package_name: str
    module_name: str = ""
    proto_module: str = ""
    time_zone: str = ""


@dataclass(frozen=True)
class InferredColumn:
    """The inferred description of one column."""

    csv_column_name: str
    field_name: str
    column_type: ColumnType
    tag: int
    comment: str

    def mapping(self) -> ColumnToFieldMapping:
        col = ColumnToFieldMapping(
            column_index=self.tag - 1,
            col_name=self.csv_column_name,
            proto_name=self.field_name,
            proto_type=self.column_type.proto_type,
            proto_tag=self.tag,
            proto_imports=list(self.column_type.proto_imports),
            comment=self.comment,
        )
        self.column_type.update_mapping(col)
        return col


class InferredProto:
    """The result of inference: a message definition and its column mapping."""

    def __init__(
        self,
        package_name: str,
        message_name: str,
        columns: Sequence[InferredColumn],
        python_options: PythonOptions | None = None,
    ) -> None:
        self.package_name = package_name
        self.message_name = message_name
        self.columns: list[InferredColumn] = list(columns)
        self.python_options = python_options

    def mapping(self) -> RecordProtoMapping:
        """Return the mapping from columns to fields."""
        return RecordProtoMapping(
            package_name=self.package_name,
            message_name=self.message_name,
            columns=[col.mapping() for col in self.columns],
            python_options=self.python_options,
        )

    def code(self) -> str:
        """Return the ``.proto`` source of the inferred message."""
        return generate_code(self.mapping(), python=False).proto_code

    def formatted_mapping(self, template: RecordProtoMapping | None = None) -> str:
        """Return the mapping as a TOML document, laid over ``template`` if given."""
        mapping = merge(template, self.mapping())
        header = (
            "# recordproto mapping file\n"
            f"# message: {mapping.package_name}.{mapping.message_name}\n\n"
        )
        return header + dumps_mapping(mapping)


def statistical_comment(values: Sequence[str]) -> str:
    """Summarize the distinct values of a column, most common first."""
    counts = Counter(values)
    ordered = sorted(counts, key=lambda value: (-counts[value], value))
    shown = ordered[:VALUES_IN_STATISTICAL_COMMENT]
    listed = "; ".join(
        f"{json.dumps(value, ensure_ascii=False)} ({counts[value]})" for value in shown
    )
    return (
        f"Field type inferred from {len(counts)} unique values in {len(values)} rows; "
        f"{len(shown)} most common: {listed}"
    )


def infer_column_type(values: Sequence[str], candidates: Iterable[ColumnType]) -> ColumnType:
    """Return the first candidate accepting every value, or the string type."""
    for candidate in candidates:
        if values and all(candidate.accepts(value) for value in values):
            return candidate
    return STRING_COLUMN


class RecordBasedInferrer:
    """Accumulates rows (header first) and infers a message from them."""

    def __init__(self, options: InferOptions) -> None:
        self.options = options
        self._rows: list[list[str]] = []

    def add_row(self, row: Sequence[str]) -> None:
        """Add a row; the first row added is the header.

        Raises:
            InferenceError: If the row width differs from the header's.
        """
        if self._rows and len(row) != len(self._rows[0]):
            expected = len(self._rows[0])
            raise InferenceError(
                f"invalid row length; expected {expected} got {len(row)} for row {list(row)}"
            )
        self._rows.append(list(row))

    def build(self) -> InferredProto:
        """Infer the message from the rows added so far.

        Raises:
            InferenceError: With fewer than two rows, no columns, or an unknown time zone.
        """
        if len(self._rows) < 2:
            raise InferenceError(f"not enough rows to infer types: {len(self._rows)}")
        header, data = self._rows[0], self._rows[1:]
        if not header:
            raise InferenceError("not enough columns to infer types: 0")
        if self.options.time_zone:
            try:
                load_zone(self.options.time_zone)
            except ValueError as exc:
                raise InferenceError(str(exc)) from exc

        python_options: PythonOptions | None = None
        if self.options.module_name or self.options.proto_module:
            python_options = PythonOptions(
                module_name=self.options.module_name,
                proto_module=self.options.proto_module,
            )

        candidates = candidate_column_types(self.options.time_zone)
        columns: list[InferredColumn] = []
        for index, name in enumerate(header):
            values = [row[index] for row in data]
            column_type = infer_column_type(values, candidates)
            logger.debug("Column %r inferred as %s", name, column_type.proto_type)
            columns.append(
                InferredColumn(
                    csv_column_name=name,
                    field_name=column_name_to_field_name(name),
                    column_type=column_type,
                    tag=index + 1,
                    comment=statistical_comment(values),
                )
            )
        return InferredProto(
            self.options.package_name, self.options.message_name, columns, python_options
        )


def infer_proto(csv_text: str, options: InferOptions) -> InferredProto:
    """Infer a message from CSV text whose first row is a header.

    Raises:
        InferenceError: If the text is not valid CSV or cannot be inferred from.
    """
    inferrer = RecordBasedInferrer(options)
    try:
        for row in csv.reader(io.StringIO(csv_text, newline="")):
            inferrer.add_row(row)
    except csv.Error as exc:
        raise InferenceError(f"invalid CSV input: {exc}") from exc
    return inferrer.build()
