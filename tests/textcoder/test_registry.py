# recordproto:header:start
#
#   project      : RecordProto
#   file         : test_registry.py
#   file_relpath : tests/textcoder/test_registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Tests for `Registry`: registration, flavors, lookups and fallbacks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pytest

from recordproto.textcoder import (
    Context,
    Flavor,
    Float64,
    IllFormedSignatureError,
    Int8,
    NoCoderError,
    OutOfRangeError,
    Ref,
    Registry,
    marshal,
    marshal_context,
    register_basic_types,
    unmarshal,
    unmarshal_context,
)

if TYPE_CHECKING:
    from recordproto.textcoder import Decoder, Encoder


class Distance(Float64):
    pass


class Level(Int8):
    pass


class Celsius:
    def __init__(self, degrees: float) -> None:
        self.degrees = degrees

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Celsius) and other.degrees == self.degrees

    def __hash__(self) -> int:
        return hash(self.degrees)


class Color:
    """Uses the text protocol instead of a registration."""

    def __init__(self, name: str) -> None:
        self.name = name

    def to_text(self) -> str:
        return f"color:{self.name}"

    @classmethod
    def from_text(cls, text: str) -> Color:
        return cls(text.removeprefix("color:"))


class Opaque:
    pass


def _encode_celsius(value: Celsius) -> str:
    return f"{value.degrees}C"


def _decode_celsius(text: str, out: Ref[Celsius]) -> None:
    out.value = Celsius(float(text.rstrip("C")))


def _encode_celsius_ctx(ctx: Context, value: Celsius) -> str:
    return f"{value.degrees}{ctx.get('unit', 'C')}"


def _decode_celsius_ctx(ctx: Context, text: str, out: Ref[Celsius]) -> None:
    out.value = Celsius(float(text.rstrip(ctx.get("unit", "C"))))


# --- flavors ---


@pytest.mark.parametrize(
    "encode, decode, encode_flavor, decode_flavor",
    [
        (_encode_celsius, _decode_celsius, Flavor.PLAIN, Flavor.PLAIN),
        (_encode_celsius_ctx, _decode_celsius, Flavor.CONTEXTUAL, Flavor.PLAIN),
        (_encode_celsius, _decode_celsius_ctx, Flavor.PLAIN, Flavor.CONTEXTUAL),
        (_encode_celsius_ctx, _decode_celsius_ctx, Flavor.CONTEXTUAL, Flavor.CONTEXTUAL),
    ],
)
def test_all_four_flavor_combinations(
    registry: Registry,
    encode: Any,
    decode: Any,
    encode_flavor: Flavor,
    decode_flavor: Flavor,
) -> None:
    registry.register(Celsius, encode, decode)
    pair = registry.get_explicit(Celsius)
    assert pair is not None
    assert pair.encode_flavor is encode_flavor
    assert pair.decode_flavor is decode_flavor

    ctx = registry.new_context()
    assert marshal_context(ctx, Celsius(21.5)) == "21.5C"
    out = Ref(type_=Celsius)
    unmarshal_context(ctx, "21.5C", out)
    assert out.value == Celsius(21.5)


def test_contextual_coders_see_bindings(registry: Registry) -> None:
    registry.register(Celsius, _encode_celsius_ctx, _decode_celsius_ctx)
    ctx = registry.new_context().with_value("unit", "deg")
    assert marshal_context(ctx, Celsius(3.0)) == "3.0deg"
    out = Ref(type_=Celsius)
    unmarshal_context(ctx, "3.0deg", out)
    assert out.value == Celsius(3.0)


def test_lambdas_and_bound_methods_are_accepted(registry: Registry) -> None:
    class Codec:
        def encode(self, value: Celsius) -> str:
            return str(value.degrees)

        def decode(self, ctx: Context, text: str, out: Ref[Celsius]) -> None:
            out.value = Celsius(float(text))

    codec = Codec()
    registry.register(Celsius, codec.encode, codec.decode)
    pair = registry.get_explicit(Celsius)
    assert pair is not None
    assert pair.encode_flavor is Flavor.PLAIN
    assert pair.decode_flavor is Flavor.CONTEXTUAL

    registry.register(Celsius, lambda v: "x", lambda t, o: None)
    assert marshal_context(registry.new_context(), Celsius(1.0)) == "x"


# --- ill-formed signatures ---


@pytest.mark.parametrize(
    "encode, decode",
    [
        (None, _decode_celsius),
        (_encode_celsius, None),
        ("not callable", _decode_celsius),
        (lambda: "x", _decode_celsius),
        (lambda a, b, c: "x", _decode_celsius),
        (_encode_celsius, lambda text: None),
        (_encode_celsius, lambda a, b, c, d: None),
        (_encode_celsius, _encode_celsius),
    ],
)
def test_ill_formed_signatures_are_rejected(registry: Registry, encode: Any, decode: Any) -> None:
    with pytest.raises(IllFormedSignatureError):
        registry.register(Celsius, encode, decode)
    assert Celsius not in registry


def test_contextual_first_parameter_must_accept_context(registry: Registry) -> None:
    def encode(count: int, value: Celsius) -> str:
        return ""

    with pytest.raises(IllFormedSignatureError, match="want Context"):
        registry.register(Celsius, encode, _decode_celsius)


def test_required_keyword_only_parameter_is_rejected(registry: Registry) -> None:
    def encode(value: Celsius, *, unit: str) -> str:
        return unit

    with pytest.raises(IllFormedSignatureError, match="keyword-only"):
        registry.register(Celsius, encode, _decode_celsius)


def test_type_key_must_be_a_class(registry: Registry) -> None:
    with pytest.raises(IllFormedSignatureError):
        registry.register("Celsius", _encode_celsius, _decode_celsius)  # type: ignore[arg-type]


def test_failed_registration_keeps_previous_pair(registry: Registry) -> None:
    registry.register(Celsius, _encode_celsius, _decode_celsius)
    with pytest.raises(IllFormedSignatureError):
        registry.register(Celsius, lambda: "", _decode_celsius)
    assert marshal_context(registry.new_context(), Celsius(1.0)) == "1.0C"


def test_encoder_returning_non_text_is_reported(registry: Registry) -> None:
    registry.register(Celsius, lambda value: value.degrees, _decode_celsius)
    with pytest.raises(IllFormedSignatureError, match="want str"):
        marshal_context(registry.new_context(), Celsius(1.0))


def test_must_register_exits_on_failure(
    registry: Registry, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.CRITICAL), pytest.raises(SystemExit) as excinfo:
        registry.must_register(Celsius, None, _decode_celsius)  # type: ignore[arg-type]
    assert excinfo.value.code == 1
    assert "registration failed" in caplog.text


# --- replacement and isolation ---


def test_last_registration_wins(registry: Registry) -> None:
    registry.register(Celsius, lambda v: "first", _decode_celsius)
    registry.register(Celsius, lambda v: "second", _decode_celsius)
    encoder = registry.get_encoder(Celsius)
    assert encoder is not None
    assert encoder.encode_text(None, Celsius(0.0)) == "second"


def test_registries_are_isolated() -> None:
    first, second = Registry(), Registry()
    register_basic_types(first)
    register_basic_types(second)
    first.register(Celsius, _encode_celsius, _decode_celsius)
    first.register(int, lambda v: "overridden", lambda t, o: None)

    assert second.get_encoder(Celsius) is None
    encoder = second.get_encoder(int)
    assert encoder is not None
    assert encoder.encode_text(None, 5) == "5"
    assert marshal(5) == "5"


def test_unregister(registry: Registry) -> None:
    registry.register(Celsius, _encode_celsius, _decode_celsius)
    assert registry.unregister(Celsius) is True
    assert registry.unregister(Celsius) is False
    assert registry.get_coder(Celsius) is None


def test_introspection(empty_registry: Registry) -> None:
    assert len(empty_registry) == 0
    empty_registry.register(Celsius, _encode_celsius, _decode_celsius)
    assert list(empty_registry) == [Celsius]
    assert empty_registry.keys() == (Celsius,)
    assert Celsius in empty_registry


# --- lookups and fallbacks ---


def test_missing_coders(registry: Registry) -> None:
    assert registry.get_encoder(Opaque) is None
    assert registry.get_decoder(Opaque) is None
    ctx = registry.new_context()
    with pytest.raises(NoCoderError, match="no encoder registered"):
        marshal_context(ctx, Opaque())
    with pytest.raises(NoCoderError, match="no decoder registered"):
        unmarshal_context(ctx, "x", Ref(type_=Opaque))


def test_unmarshal_requires_a_ref() -> None:
    with pytest.raises(TypeError, match="must be a Ref"):
        unmarshal("1", [0])  # type: ignore[arg-type]


def test_user_scalar_falls_back_to_underlying_primitive() -> None:
    out = Ref(type_=Distance)
    unmarshal("1600", out)
    assert out.value == Distance(1600)
    assert type(out.value) is Distance
    assert marshal(Distance(1600)) == "1600.000000"


def test_fallback_keeps_range_checks_of_the_primitive(registry: Registry) -> None:
    decoder = registry.get_decoder(Level)
    assert decoder is not None
    out = Ref(type_=Level)
    with pytest.raises(OutOfRangeError):
        decoder.decode_text(None, "128", out)
    assert out.value is None
    decoder.decode_text(None, "-5", out)
    assert out.value == Level(-5)
    assert type(out.value) is Level


def test_fallback_matches_primitive_coder(registry: Registry) -> None:
    primitive = registry.get_coder(Float64)
    user = registry.get_coder(Distance)
    assert primitive is not None and user is not None
    for value in (0.0, 1.5, -1e10):
        assert user.encode_text(None, Distance(value)) == primitive.encode_text(None, value)


def test_explicit_entry_beats_fallback(registry: Registry) -> None:
    registry.register(Distance, lambda v: f"{float(v):g}m", lambda t, o: None)
    encoder = registry.get_encoder(Distance)
    assert encoder is not None
    assert encoder.encode_text(None, Distance(12)) == "12m"


def test_fallback_needs_registered_primitive(empty_registry: Registry) -> None:
    assert empty_registry.underlying_primitive(Distance) is None
    assert empty_registry.get_encoder(Distance) is None


def test_register_alias(registry: Registry) -> None:
    registry.register_alias(
        Celsius,
        float,
        to_primitive=lambda c: c.degrees,
        from_primitive=Celsius,
    )
    assert registry.underlying_primitive(Celsius) is float
    ctx = registry.new_context()
    assert marshal_context(ctx, Celsius(21.5)) == "21.500000"
    out = Ref(type_=Celsius)
    unmarshal_context(ctx, "-4", out)
    assert out.value == Celsius(-4.0)


def test_register_alias_requires_primitive(registry: Registry) -> None:
    with pytest.raises(IllFormedSignatureError, match="primitive"):
        registry.register_alias(Celsius, Opaque)


def test_text_protocol_without_registration(registry: Registry) -> None:
    ctx = registry.new_context()
    assert marshal_context(ctx, Color("red")) == "color:red"
    out = Ref(type_=Color)
    unmarshal_context(ctx, "color:blue", out)
    assert isinstance(out.value, Color)
    assert out.value.name == "blue"


def test_lookup_results_satisfy_protocols(registry: Registry) -> None:
    from recordproto.textcoder import Decoder, Encoder

    encoder: Encoder | None = registry.get_encoder(Distance)
    decoder: Decoder | None = registry.get_decoder(Color)
    assert isinstance(encoder, Encoder)
    assert isinstance(decoder, Decoder)


def test_user_coder_errors_propagate_unchanged(registry: Registry) -> None:
    class Boom(RuntimeError):
        pass

    def decode(text: str, out: Ref[Celsius]) -> None:
        raise Boom(text)

    registry.register(Celsius, _encode_celsius, decode)
    with pytest.raises(Boom, match="hot"):
        unmarshal_context(registry.new_context(), "hot", Ref(type_=Celsius))
