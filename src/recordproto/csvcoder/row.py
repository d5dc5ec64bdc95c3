# recordproto:header:start
#
#   project      : RecordProto
#   file         : row.py
#   file_relpath : src/recordproto/csvcoder/row.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Rows, headers and the dataclass row-type registry.

A row type is a dataclass whose fields name CSV columns. Each field is decoded
with the text coder registered for its annotated type:

```python
@dataclass
class Flight:
    origin: str = field(metadata={"csv": "Origin Airport"})
    distance: float = field(metadata={"csv": "Distance"})
    departed: datetime = field(metadata={"csv": "Departure", "time_layout": "%Y-%m-%d %H:%M"})
    note: str = field(default="", metadata={"csv_skip": True})
```

Field metadata keys:

- ``csv``: column name (default: the field name).
- ``csv_skip``: do not read the field from the row; it must have a default.
- ``time_layout`` / ``time_zone``: bound in the cell `Context` for timestamp coders.

Fields annotated ``T | None`` decode an empty cell as None.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from dataclasses import dataclass
from threading import RLock
from typing import TYPE_CHECKING, Any, Final, TypeVar

from recordproto.config.logging import get_logger
from recordproto.csvcoder.errors import CsvCoderError, RowError
from recordproto.csvcoder.positions import INVALID_COLUMN, INVALID_ROW, ColumnNumber, RowNumber
from recordproto.csvcoder.timecoder import TIME_LAYOUT_KEY, TIME_ZONE_KEY
from recordproto.textcoder import Ref, default_registry
from recordproto.textcoder.errors import type_name

if TYPE_CHECKING:
    from collections.abc import Sequence

    from recordproto.config.logging import RecordprotoLogger
    from recordproto.textcoder import Context, Decoder, Registry

logger: RecordprotoLogger = get_logger(__name__)

ROW_CONTEXT_KEY: Final[str] = "csvcoder.row"
"""Context name under which cell decoders find the `Row` being decoded."""

R = TypeVar("R")


class Header:
    """The header row of a CSV file."""

    def __init__(self, values: Sequence[str]) -> None:
        self._values: list[str] = list(values)
        self._index: dict[str, ColumnNumber] = {}
        for i, name in enumerate(self._values):
            self._index[name] = ColumnNumber(i)

    def column_index(self, name: str) -> ColumnNumber:
        """Return the index of column ``name``, or `INVALID_COLUMN`."""
        return self._index.get(name, INVALID_COLUMN)

    def column_names(self) -> list[str]:
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Header({self._values!r})"


class Row:
    """A single row of a CSV file along with its position."""

    def __init__(
        self,
        values: Sequence[str],
        header: Header | None,
        number: RowNumber = INVALID_ROW,
        path: str = "",
    ) -> None:
        self._values: list[str] = list(values)
        self.header = header
        self.number = number
        self.path = path

    def strings(self) -> list[str]:
        """Return the raw cell values."""
        return self._values

    def position_string(self) -> str:
        """Return ``path:ordinal`` (or just the ordinal when the path is unknown)."""
        parts: list[str] = []
        if self.path:
            parts.append(self.path)
        if self.number.is_valid():
            parts.append(str(self.number.ordinal()))
        else:
            parts.append("<unknown row number>")
        return ":".join(parts)

    def __repr__(self) -> str:
        return f"Row({self.position_string()}, {self._values!r})"


@dataclass(frozen=True)
class FieldBinding:
    """How one dataclass field is read from a row."""

    name: str
    column: str
    type: type
    decoder: Decoder
    optional: bool = False
    time_layout: str | None = None
    time_zone: str | None = None

    def decode(self, ctx: Context, row: Row) -> Any:
        header = row.header
        index = header.column_index(self.column) if header is not None else INVALID_COLUMN
        if not index.is_valid():
            raise CsvCoderError(f'csv file missing required column "{self.column}"')
        values = row.strings()
        if index.offset() >= len(values):
            raise CsvCoderError(f'csv row does not have a value for column "{self.column}"')
        text = values[index.offset()]
        if self.optional and text == "":
            return None
        if self.time_layout is not None:
            ctx = ctx.with_value(TIME_LAYOUT_KEY, self.time_layout)
        if self.time_zone is not None:
            ctx = ctx.with_value(TIME_ZONE_KEY, self.time_zone)
        out: Ref[Any] = Ref(type_=self.type)
        self.decoder.decode_text(ctx, text, out)
        return out.value


@dataclass(frozen=True)
class RowType:
    """A dataclass registered as a CSV row type."""

    cls: type
    fields: tuple[FieldBinding, ...]
    registry: Registry

    @property
    def required_columns(self) -> frozenset[str]:
        return frozenset(binding.column for binding in self.fields)

    def parse(self, row: Row) -> Any:
        """Decode ``row`` into a new instance of `cls`.

        Raises:
            RowError: If a cell cannot be decoded.
        """
        ctx = self.registry.new_context().with_value(ROW_CONTEXT_KEY, row)
        kwargs: dict[str, Any] = {}
        for binding in self.fields:
            try:
                kwargs[binding.name] = binding.decode(ctx, row)
            except Exception as exc:
                raise RowError(row, f"error parsing field {binding.name!r}: {exc}") from exc
        return self.cls(**kwargs)


# Keyed by (class, registry); the same class decodes differently under each registry.
_row_types: dict[tuple[type, Registry], RowType] = {}
_lock = RLock()


def _unwrap_optional(hint: Any) -> tuple[Any, bool]:
    origin = typing.get_origin(hint)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return args[0], True
    return hint, False


def _infer_row_type(cls: type, registry: Registry) -> RowType:
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise CsvCoderError(f"type {cls!r} is not a dataclass, so could not infer a CSV row parser")
    try:
        hints = typing.get_type_hints(cls)
    except NameError as exc:
        raise CsvCoderError(f"cannot resolve field annotations of {type_name(cls)}: {exc}") from exc

    bindings: list[FieldBinding] = []
    for fld in dataclasses.fields(cls):
        if not fld.init:
            continue
        if fld.metadata.get("csv_skip"):
            if fld.default is dataclasses.MISSING and fld.default_factory is dataclasses.MISSING:
                raise CsvCoderError(
                    f"field {type_name(cls)}.{fld.name} is skipped but has no default value"
                )
            continue
        field_type, optional = _unwrap_optional(hints[fld.name])
        if not isinstance(field_type, type):
            raise CsvCoderError(
                f"field {type_name(cls)}.{fld.name} has unsupported annotation {field_type!r}"
            )
        decoder = registry.get_decoder(field_type)
        if decoder is None:
            raise CsvCoderError(
                f"no text decoder registered for {type_name(field_type)} "
                f"(field {type_name(cls)}.{fld.name})"
            )
        bindings.append(
            FieldBinding(
                name=fld.name,
                column=fld.metadata.get("csv", fld.name),
                type=field_type,
                decoder=decoder,
                optional=optional,
                time_layout=fld.metadata.get("time_layout"),
                time_zone=fld.metadata.get("time_zone"),
            )
        )
    return RowType(cls, tuple(bindings), registry)


def register_row_type(cls: type, registry: Registry | None = None) -> RowType:
    """Register dataclass ``cls`` as a row type and return its description.

    Row types are kept per registry: registering an already registered class
    with the same registry returns the existing entry, while another registry
    gets its own entry built from its own decoders.

    Args:
        cls (type): The dataclass to describe.
        registry (Registry | None): Registry supplying the field decoders; the
            default registry if None.

    Raises:
        CsvCoderError: If ``cls`` is not a dataclass or a field type has no decoder.
    """
    if registry is None:
        registry = default_registry()
    existing = get_row_type(cls, registry)
    if existing is not None:
        return existing
    row_type = _infer_row_type(cls, registry)
    with _lock:
        row_type = _row_types.setdefault((cls, registry), row_type)
    logger.debug(
        "Registered CSV row type %s with columns %s",
        type_name(cls),
        [binding.column for binding in row_type.fields],
    )
    return row_type


def get_row_type(cls: type, registry: Registry | None = None) -> RowType | None:
    """Return the row type registered for ``cls`` with ``registry`` (default registry if None)."""
    if registry is None:
        registry = default_registry()
    return _row_types.get((cls, registry))


def parse_row(row: Row, cls: type[R]) -> R:
    """Decode ``row`` into a new ``cls`` instance.

    If ``cls`` defines a classmethod ``parse_csv_row(row)``, it takes over parsing.
    Otherwise ``cls`` is registered as a row type on first use.

    Raises:
        RowError: If the row cannot be decoded.
    """
    custom = getattr(cls, "parse_csv_row", None)
    if callable(custom):
        try:
            return custom(row)
        except RowError:
            raise
        except Exception as exc:
            raise RowError(row, str(exc)) from exc
    try:
        row_type = register_row_type(cls)
    except CsvCoderError as exc:
        raise RowError(row, f"failed to parse CSV row into {type_name(cls)}: {exc}") from exc
    return row_type.parse(row)
