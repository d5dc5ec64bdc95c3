# recordproto:header:start
#
#   project      : RecordProto
#   file         : scalars.py
#   file_relpath : src/recordproto/textcoder/scalars.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Fixed-width scalar types.

Python has a single arbitrary-precision `int` and a 64-bit `float`. Records
described by a `.proto` schema need narrower widths, so this module provides
`int` and `float` subclasses that enforce a width on construction:

- `Int8`, `Int16`, `Int32`, `Int64`: signed two's-complement ranges.
- `UInt8`, `UInt16`, `UInt32`, `UInt64`: unsigned ranges.
- `UInt`: unbounded, non-negative (the natural unsigned width).
- `Float32`: rounded to IEEE-754 single precision.
- `Float64`: IEEE-754 double precision (identical to `float`).

Values behave like plain numbers; arithmetic returns plain `int`/`float`.
Construction raises `OverflowError` when the value does not fit.
"""

from __future__ import annotations

import struct
from typing import ClassVar, Final, SupportsFloat, SupportsIndex, SupportsInt, Union

_IntLike = Union[str, bytes, SupportsInt, SupportsIndex]


class FixedInt(int):
    """Base class of the width-checked integer types."""

    bits: ClassVar[int | None] = None
    signed: ClassVar[bool] = True
    min_value: ClassVar[int | None] = None
    max_value: ClassVar[int | None] = None

    def __new__(cls, value: _IntLike = 0) -> FixedInt:  # noqa: D102
        number = int.__new__(cls, value)
        if not cls.fits(int(number)):
            raise OverflowError(f"{int(number)} is out of range for {cls.__name__}")
        return number

    @classmethod
    def fits(cls, number: int) -> bool:
        """Return True if ``number`` is representable by this type."""
        if cls.min_value is not None and number < cls.min_value:
            return False
        return cls.max_value is None or number <= cls.max_value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class Int8(FixedInt):
    """Signed 8-bit integer."""

    bits, signed, min_value, max_value = 8, True, -(1 << 7), (1 << 7) - 1


class Int16(FixedInt):
    """Signed 16-bit integer."""

    bits, signed, min_value, max_value = 16, True, -(1 << 15), (1 << 15) - 1


class Int32(FixedInt):
    """Signed 32-bit integer."""

    bits, signed, min_value, max_value = 32, True, -(1 << 31), (1 << 31) - 1


class Int64(FixedInt):
    """Signed 64-bit integer."""

    bits, signed, min_value, max_value = 64, True, -(1 << 63), (1 << 63) - 1


class UInt(FixedInt):
    """Unsigned integer of unbounded width."""

    bits, signed, min_value, max_value = None, False, 0, None


class UInt8(FixedInt):
    """Unsigned 8-bit integer."""

    bits, signed, min_value, max_value = 8, False, 0, (1 << 8) - 1


class UInt16(FixedInt):
    """Unsigned 16-bit integer."""

    bits, signed, min_value, max_value = 16, False, 0, (1 << 16) - 1


class UInt32(FixedInt):
    """Unsigned 32-bit integer."""

    bits, signed, min_value, max_value = 32, False, 0, (1 << 32) - 1


class UInt64(FixedInt):
    """Unsigned 64-bit integer."""

    bits, signed, min_value, max_value = 64, False, 0, (1 << 64) - 1


FLOAT32_MAX: Final[float] = struct.unpack("<f", b"\xff\xff\x7f\x7f")[0]


class Float32(float):
    """IEEE-754 single precision float.

    The value is rounded to the nearest single precision number on construction.
    Finite values that round to infinity raise `OverflowError`.
    """

    bits: ClassVar[int] = 32

    def __new__(cls, value: SupportsFloat | SupportsIndex | str = 0.0) -> Float32:  # noqa: D102
        # struct.pack raises OverflowError when a finite double rounds to +-inf.
        single: float = struct.unpack("<f", struct.pack("<f", float(value)))[0]
        return float.__new__(cls, single)

    def __repr__(self) -> str:
        return f"Float32({float(self)!r})"


class Float64(float):
    """IEEE-754 double precision float."""

    bits: ClassVar[int] = 64

    def __repr__(self) -> str:
        return f"Float64({float(self)!r})"


SIGNED_INT_TYPES: Final[tuple[type[int], ...]] = (int, Int8, Int16, Int32, Int64)
UNSIGNED_INT_TYPES: Final[tuple[type[int], ...]] = (UInt, UInt8, UInt16, UInt32, UInt64)
FLOAT_TYPES: Final[tuple[type[float], ...]] = (float, Float32, Float64)

PRIMITIVE_TYPES: Final[frozenset[type]] = frozenset(
    (bool, str, *SIGNED_INT_TYPES, *UNSIGNED_INT_TYPES, *FLOAT_TYPES)
)
"""Types a user-defined scalar may use as its underlying representation."""


def is_primitive(key: type) -> bool:
    """Return True if ``key`` is one of the recognized primitive scalar types."""
    return key in PRIMITIVE_TYPES
