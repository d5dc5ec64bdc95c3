# recordproto:header:start
#
#   project      : RecordProto
#   file         : builtins.py
#   file_relpath : src/recordproto/textcoder/builtins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Coders for the built-in scalar types.

Text forms:

| Type            | Encode                  | Decode accepts                               |
|-----------------|-------------------------|----------------------------------------------|
| signed ints     | ``-?[0-9]+``            | ``[+-]?[0-9]+`` fitting the width            |
| unsigned ints   | ``[0-9]+``              | ``[0-9]+`` fitting the width                 |
| floats          | ``"%f"`` (six decimals) | decimal, scientific, ``0x..p..``, inf, nan   |
| ``bool``        | ``true`` / ``false``    | case-insensitive true/false/1/0/on/off/yes/no |
| ``str``         | identity                | identity                                     |

Decoders never strip whitespace. Infinities and NaN encode as ``+Inf``, ``-Inf``
and ``NaN``; decoding accepts any case of ``inf``, ``infinity`` and ``nan``.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Any, Final

from recordproto.textcoder.errors import OutOfRangeError, ParseError, UnsupportedValueError
from recordproto.textcoder.scalars import (
    FLOAT_TYPES,
    SIGNED_INT_TYPES,
    UNSIGNED_INT_TYPES,
    FixedInt,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from recordproto.textcoder.ref import Ref
    from recordproto.textcoder.registry import Registry

_SIGNED_RE: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE: Final[re.Pattern[str]] = re.compile(r"[0-9]+")

BOOL_VALUES: Final[dict[str, bool]] = {
    "true": True,
    "false": False,
    "1": True,
    "0": False,
    "on": True,
    "off": False,
    "yes": True,
    "no": False,
}


def encode_bool(value: bool) -> str:
    return "true" if value else "false"


def decode_bool(text: str, out: Ref[bool]) -> None:
    try:
        out.value = BOOL_VALUES[text.lower()]
    except KeyError:
        raise UnsupportedValueError(text, "bool") from None


def encode_str(value: str) -> str:
    return str(value)


def decode_str(text: str, out: Ref[str]) -> None:
    out.value = text


def encode_int(value: int) -> str:
    return str(int(value))


def parse_int(text: str, cls: type[int], *, signed: bool = True) -> int:
    """Parse base-ten ``text`` as an instance of ``cls``.

    Raises:
        ParseError: If ``text`` is not a base-ten literal of the right sign.
        OutOfRangeError: If the number does not fit ``cls``.
    """
    pattern = _SIGNED_RE if signed else _UNSIGNED_RE
    if pattern.fullmatch(text) is None:
        raise ParseError(text)
    try:
        number = int(text, 10)
    except ValueError:
        # Exceeds the interpreter's integer string conversion limit.
        raise OutOfRangeError(text) from None
    if issubclass(cls, FixedInt):
        if not cls.fits(number):
            raise OutOfRangeError(text)
        return cls(number)
    return number


def _int_decoder(cls: type[int], *, signed: bool) -> Callable[[str, Ref[Any]], None]:
    def decode(text: str, out: Ref[Any]) -> None:
        out.value = parse_int(text, cls, signed=signed)

    decode.__qualname__ = f"decode_{cls.__name__.lower()}"
    return decode


def encode_float(value: float) -> str:
    number = float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "+Inf" if number > 0 else "-Inf"
    return "%f" % number


def parse_float(text: str, cls: type[float] = float) -> float:
    """Parse ``text`` as an instance of ``cls``.

    Raises:
        ParseError: If ``text`` is not a floating point literal.
        OutOfRangeError: If a finite literal overflows the destination width.
    """
    if not text or not text.isascii() or "_" in text or text != text.strip():
        raise ParseError(text)
    unsigned = text.lstrip("+-")
    is_hex = unsigned[:2].lower() == "0x"
    if is_hex and "p" not in unsigned.lower():
        # Hex mantissas need a binary exponent.
        raise ParseError(text)
    try:
        number = float.fromhex(text) if is_hex else float(text)
    except OverflowError:
        raise OutOfRangeError(text) from None
    except ValueError:
        raise ParseError(text) from None
    if math.isinf(number) and "inf" not in unsigned.lower():
        raise OutOfRangeError(text)
    if cls is float:
        return number
    try:
        return cls(number)
    except OverflowError:
        raise OutOfRangeError(text) from None


def _float_decoder(cls: type[float]) -> Callable[[str, Ref[Any]], None]:
    def decode(text: str, out: Ref[Any]) -> None:
        out.value = parse_float(text, cls)

    decode.__qualname__ = f"decode_{cls.__name__.lower()}"
    return decode


def register_basic_types(registry: Registry) -> None:
    """Register coders for ``str``, ``bool`` and every int and float scalar type."""
    registry.must_register(str, encode_str, decode_str)
    registry.must_register(bool, encode_bool, decode_bool)
    for cls in SIGNED_INT_TYPES:
        registry.must_register(cls, encode_int, _int_decoder(cls, signed=True))
    for cls in UNSIGNED_INT_TYPES:
        registry.must_register(cls, encode_int, _int_decoder(cls, signed=False))
    for cls in FLOAT_TYPES:
        registry.must_register(cls, encode_float, _float_decoder(cls))


__all__ = [
    "BOOL_VALUES",
    "encode_bool",
    "encode_float",
    "encode_int",
    "encode_str",
    "parse_float",
    "parse_int",
    "register_basic_types",
]
