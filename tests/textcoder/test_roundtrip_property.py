# recordproto:header:start
#
#   project      : RecordProto
#   file         : test_roundtrip_property.py
#   file_relpath : tests/textcoder/test_roundtrip_property.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Property tests: decoding an encoded built-in scalar gives back the value."""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from recordproto.textcoder import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Ref,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    marshal,
    unmarshal,
)
from recordproto.textcoder.scalars import FixedInt

_INT_TYPES: list[type[FixedInt]] = [Int8, Int16, Int32, Int64, UInt8, UInt16, UInt32, UInt64]


def _roundtrip(value: Any, cls: type) -> Any:
    out: Ref[Any] = Ref(type_=cls)
    unmarshal(marshal(value), out)
    return out.value


@st.composite
def fixed_ints(draw: st.DrawFn) -> FixedInt:
    cls = draw(st.sampled_from(_INT_TYPES))
    return cls(draw(st.integers(min_value=cls.min_value, max_value=cls.max_value)))


@given(fixed_ints())
def test_fixed_width_ints_roundtrip(value: FixedInt) -> None:
    decoded = _roundtrip(value, type(value))
    assert decoded == value
    assert type(decoded) is type(value)


@given(st.integers())
def test_plain_ints_roundtrip(value: int) -> None:
    assert _roundtrip(value, int) == value


@given(st.integers(min_value=0))
def test_unbounded_unsigned_roundtrip(value: int) -> None:
    assert _roundtrip(UInt(value), UInt) == value


@given(st.booleans())
def test_bools_roundtrip(value: bool) -> None:
    assert _roundtrip(value, bool) is value


@given(st.text())
def test_text_roundtrip(value: str) -> None:
    assert _roundtrip(value, str) == value


@given(st.floats(allow_nan=False, allow_infinity=False, min_value=-1e15, max_value=1e15))
def test_float64_roundtrip_to_six_fractional_digits(value: float) -> None:
    decoded = _roundtrip(Float64(value), Float64)
    assert abs(decoded - value) <= 5e-7 + abs(value) * 1e-15


@given(st.floats(width=32, allow_nan=False, allow_infinity=False))
def test_float32_roundtrip_to_six_fractional_digits(value: float) -> None:
    decoded = _roundtrip(Float32(value), Float32)
    assert type(decoded) is Float32
    # one float32 ulp plus the rounding of the six-digit form
    tolerance = 5e-7 + abs(value) * 2**-23
    assert abs(decoded - Float32(value)) <= tolerance


@pytest.mark.hypothesis_slow
@settings(max_examples=5000, deadline=None)
@given(st.integers(min_value=UInt64.min_value, max_value=UInt64.max_value))
def test_uint64_roundtrip_extended(value: int) -> None:
    assert _roundtrip(UInt64(value), UInt64) == value
