# recordproto:header:start
#
#   project      : RecordProto
#   file         : file.py
#   file_relpath : src/recordproto/csvcoder/file.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Record-by-record decoding of a CSV file.

```python
with open("flights.csv", newline="", encoding="utf-8") as fh:
    parser = FileParser(csv.reader(fh), "flights.csv", Flight)
    for flight in parser:
        ...
```
"""

from __future__ import annotations

import csv
from typing import TYPE_CHECKING, Generic, TypeVar

from recordproto.config.logging import get_logger
from recordproto.csvcoder.errors import CsvCoderError, RowError
from recordproto.csvcoder.positions import RowNumber
from recordproto.csvcoder.row import Header, Row, register_row_type
from recordproto.textcoder.errors import type_name

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from recordproto.config.logging import RecordprotoLogger
    from recordproto.textcoder import Registry

logger: RecordprotoLogger = get_logger(__name__)

R = TypeVar("R")


class FileParser(Generic[R]):
    """Decodes the rows of a CSV file into instances of a row type.

    The header row is read and validated on construction.

    Args:
        reader (Iterable[list[str]]): Source of rows, typically a `csv.reader`.
        path (str): File path used in error messages.
        cls (type[R]): Dataclass row type (registered on first use).
        registry (Registry | None): Text coder registry; the default registry if None.

    Raises:
        CsvCoderError: If ``cls`` is not a valid row type, the header cannot be
            read, or required columns are missing from it.
    """

    def __init__(
        self,
        reader: Iterable[list[str]],
        path: str,
        cls: type[R],
        registry: Registry | None = None,
    ) -> None:
        try:
            self._row_type = register_row_type(cls, registry)
        except CsvCoderError as exc:
            raise CsvCoderError(
                f"could not find or infer coder for type {type_name(cls)}: {exc}"
            ) from exc
        self._rows: Iterator[list[str]] = iter(reader)
        self.path = path
        self.header = self._read_header()
        self._row_num = RowNumber(1)

    def _read_header(self) -> Header:
        try:
            values = next(self._rows)
        except StopIteration:
            raise CsvCoderError("error reading header row: no rows in input") from None
        except csv.Error as exc:
            raise CsvCoderError(f"error reading header row: {exc}") from exc
        header = Header(values)
        required = self._row_type.required_columns
        missing = sorted(col for col in required if not header.column_index(col).is_valid())
        if missing:
            quoted = ", ".join(f'"{col}"' for col in missing)
            raise CsvCoderError(f"header row is missing {len(missing)} columns: {quoted}")
        logger.debug("%s: header has %d columns", self.path or "<input>", len(header))
        return header

    def read(self) -> R:
        """Decode and return the next record.

        Raises:
            StopIteration: At the end of the input.
            RowError: If the row cannot be read or decoded.
        """
        number = self._row_num
        try:
            values = next(self._rows)
        except csv.Error as exc:
            empty = Row([], self.header, number, self.path)
            raise RowError(empty, f"csv reader error: {exc}") from exc
        self._row_num = RowNumber(number + 1)
        return self._row_type.parse(Row(values, self.header, number, self.path))

    def read_all(self) -> list[R]:
        """Decode all remaining records."""
        return list(self)

    def __iter__(self) -> FileParser[R]:
        return self

    def __next__(self) -> R:
        return self.read()
