# recordproto:header:start
#
#   project      : RecordProto
#   file         : registry.py
#   file_relpath : src/recordproto/textcoder/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Type-keyed registry of text encoders and decoders.

A `Registry` maps a type (the *type key*) to a `CoderPair`: an encode function
producing text from a value, and a decode function writing a value parsed from
text into a caller-owned `Ref`.

Lookups with `Registry.get_encoder` / `Registry.get_decoder` resolve, in order:

1. the coder registered for exactly that type;
2. the text protocol: ``value.to_text()`` for encoding and the classmethod
   ``cls.from_text(text)`` for decoding;
3. the coder of the type's *underlying primitive*: the first recognized primitive
   (``bool``, ``int``, ``float``, ``str`` or a fixed-width scalar) in the class MRO,
   or the primitive given to `Registry.register_alias`. Values are converted to the
   primitive before encoding, and decoded primitives are converted back to the type.

An explicit entry always wins over a fallback.

Typical usage:
    ```python
    registry = Registry()
    register_basic_types(registry)

    class Distance(float):
        pass

    out = Ref(Distance(0))
    registry.get_decoder(Distance).decode_text(None, "1600", out)
    assert out.value == Distance(1600)
    ```

Warning:
    Registration is meant for a construction phase (typically import time). Once a
    registry is shared between threads, treat it as read-only; a late registration
    must be serialized by the caller. Lookups take no lock.
"""

from __future__ import annotations

from dataclasses import dataclass
from threading import RLock
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from recordproto.config.logging import get_logger
from recordproto.textcoder.context import Context
from recordproto.textcoder.errors import IllFormedSignatureError, TextcoderError, type_name
from recordproto.textcoder.ref import Ref
from recordproto.textcoder.scalars import is_primitive
from recordproto.textcoder.signatures import Flavor, adapt_decoder, adapt_encoder

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from recordproto.config.logging import RecordprotoLogger
    from recordproto.textcoder.signatures import DecodeFn, EncodeFn

logger: RecordprotoLogger = get_logger(__name__)


@runtime_checkable
class Encoder(Protocol):
    """Encodes values of one type to text."""

    def encode_text(self, ctx: Context | None, value: Any) -> str:
        """Return the textual form of ``value``."""
        ...


@runtime_checkable
class Decoder(Protocol):
    """Decodes text into a caller-owned `Ref`."""

    def decode_text(self, ctx: Context | None, text: str, out: Ref[Any]) -> None:
        """Parse ``text`` and store the result in ``out.value``."""
        ...


@dataclass(frozen=True)
class CoderPair:
    """Normalized encode/decode functions registered for one type key.

    Attributes:
        key (type): The type the pair was registered for.
        encode (EncodeFn): Normalized encoder ``(ctx, value) -> str``.
        decode (DecodeFn): Normalized decoder ``(ctx, text, out) -> None``.
        encode_flavor (Flavor): Calling convention of the user's encoder.
        decode_flavor (Flavor): Calling convention of the user's decoder.
    """

    key: type
    encode: EncodeFn
    decode: DecodeFn
    encode_flavor: Flavor
    decode_flavor: Flavor


class Coder:
    """Encoder and decoder bound to a single pair of functions.

    This is the object returned by the registry lookups; nested coders recurse
    through it, e.g. ``ctx.registry.get_encoder(type(item)).encode_text(ctx, item)``.
    """

    __slots__ = ("_decode", "_encode", "key")

    def __init__(self, key: type, encode: EncodeFn, decode: DecodeFn) -> None:
        self.key = key
        self._encode = encode
        self._decode = decode

    @classmethod
    def from_pair(cls, pair: CoderPair) -> Coder:
        """Return a coder calling through to ``pair``."""
        return cls(pair.key, pair.encode, pair.decode)

    def encode_text(self, ctx: Context | None, value: Any) -> str:
        """Return the textual form of ``value``.

        Exceptions raised by the registered encoder propagate unchanged.
        """
        return self._encode(ctx, value)

    def decode_text(self, ctx: Context | None, text: str, out: Ref[Any]) -> None:
        """Decode ``text`` into ``out.value``.

        Exceptions raised by the registered decoder propagate unchanged.
        """
        self._decode(ctx, text, out)

    def __repr__(self) -> str:
        return f"Coder({type_name(self.key)})"


@dataclass(frozen=True)
class _Alias:
    primitive: type
    to_primitive: Callable[[Any], Any]
    from_primitive: Callable[[Any], Any]


class Registry:
    """A set of text coders keyed by type.

    Most callers use the process-wide registry from
    `recordproto.textcoder.default_registry`; independent registries are fully
    supported and never affect each other.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._coders: dict[type, CoderPair] = {}
        self._aliases: dict[type, _Alias] = {}

    # --- registration ---

    def register(
        self,
        key: type,
        encode: Callable[..., Any],
        decode: Callable[..., Any],
    ) -> None:
        """Register an encoder and a decoder for values of type ``key``.

        Accepted signatures, where ``T`` is ``key``:

        - encoder: ``f(value: T) -> str`` or ``f(ctx: Context, value: T) -> str``
        - decoder: ``f(text: str, out: Ref[T]) -> None`` or
          ``f(ctx: Context, text: str, out: Ref[T]) -> None``

        Coders should take a `Context` if they make nested text coder calls.
        Registering a type again silently replaces the previous pair.

        Args:
            key (type): The type key.
            encode (Callable[..., Any]): The encoder.
            decode (Callable[..., Any]): The decoder.

        Raises:
            IllFormedSignatureError: If ``key`` is not a type, or either function
                matches no accepted signature. Nothing is registered in that case.
        """
        if not isinstance(key, type):
            raise IllFormedSignatureError(f"type key must be a class, got {key!r}")
        encode_fn, encode_flavor = adapt_encoder(encode, key)
        decode_fn, decode_flavor = adapt_decoder(decode, key)
        pair = CoderPair(key, encode_fn, decode_fn, encode_flavor, decode_flavor)
        with self._lock:
            replaced = key in self._coders
            self._coders[key] = pair
        logger.trace(
            "%s text coder for %s (encode=%s, decode=%s)",
            "Replaced" if replaced else "Registered",
            type_name(key),
            encode_flavor.value,
            decode_flavor.value,
        )

    def must_register(
        self,
        key: type,
        encode: Callable[..., Any],
        decode: Callable[..., Any],
    ) -> None:
        """Like `register`, but a failure terminates the process.

        Intended for import-time registration of coders that must exist.

        Raises:
            SystemExit: If registration fails.
        """
        try:
            self.register(key, encode, decode)
        except TextcoderError as exc:
            logger.critical("Text coder registration failed: %s", exc)
            raise SystemExit(1) from exc

    def register_alias(
        self,
        key: type,
        primitive: type,
        *,
        to_primitive: Callable[[Any], Any] | None = None,
        from_primitive: Callable[[Any], Any] | None = None,
    ) -> None:
        """Declare ``primitive`` as the underlying representation of ``key``.

        Use this for types that do not subclass a primitive. By default values are
        converted with ``primitive(value)`` and back with ``key(primitive_value)``.

        Raises:
            IllFormedSignatureError: If ``primitive`` is not a recognized primitive.
        """
        if not is_primitive(primitive):
            raise IllFormedSignatureError(
                f"alias target for {type_name(key)} must be a primitive scalar, "
                f"got {type_name(primitive)}"
            )
        alias = _Alias(primitive, to_primitive or primitive, from_primitive or key)
        with self._lock:
            self._aliases[key] = alias
        logger.trace("Aliased %s to %s", type_name(key), type_name(primitive))

    def unregister(self, key: type) -> bool:
        """Remove the explicit entry and alias for ``key``.

        Returns:
            bool: True if anything was removed.
        """
        with self._lock:
            removed_pair = self._coders.pop(key, None)
            removed_alias = self._aliases.pop(key, None)
        return removed_pair is not None or removed_alias is not None

    # --- lookup ---

    def get_explicit(self, key: type) -> CoderPair | None:
        """Return the pair registered for exactly ``key``, without any fallback."""
        return self._coders.get(key)

    def get_encoder(self, key: type) -> Encoder | None:
        """Return the encoder for ``key``, or None if none can be resolved."""
        pair = self.get_explicit(key)
        if pair is not None:
            return Coder.from_pair(pair)
        if callable(getattr(key, "to_text", None)):
            return _TextProtocolCoder(key)
        return self._underlying_coder(key)

    def get_decoder(self, key: type) -> Decoder | None:
        """Return the decoder for ``key``, or None if none can be resolved."""
        pair = self.get_explicit(key)
        if pair is not None:
            return Coder.from_pair(pair)
        if callable(getattr(key, "from_text", None)):
            return _TextProtocolCoder(key)
        return self._underlying_coder(key)

    def get_coder(self, key: type) -> Coder | None:
        """Return a coder for both directions, or None if either is missing."""
        pair = self.get_explicit(key)
        if pair is not None:
            return Coder.from_pair(pair)
        if callable(getattr(key, "to_text", None)) and callable(getattr(key, "from_text", None)):
            return _TextProtocolCoder(key)
        return self._underlying_coder(key)

    def underlying_primitive(self, key: type) -> type | None:
        """Return the registered primitive that ``key`` falls back to, if any."""
        alias = self._aliases.get(key)
        if alias is not None:
            return alias.primitive if alias.primitive in self._coders else None
        for base in key.__mro__[1:]:
            if is_primitive(base) and base in self._coders:
                return base
        return None

    def _underlying_coder(self, key: type) -> Coder | None:
        primitive = self.underlying_primitive(key)
        if primitive is None:
            return None
        alias = self._aliases.get(key)
        to_primitive: Callable[[Any], Any] = alias.to_primitive if alias else primitive
        from_primitive: Callable[[Any], Any] = alias.from_primitive if alias else key
        base = self._coders[primitive]
        logger.debug("Using %s coder for %s", type_name(primitive), type_name(key))

        def encode(ctx: Context | None, value: Any) -> str:
            return base.encode(ctx, to_primitive(value))

        def decode(ctx: Context | None, text: str, out: Ref[Any]) -> None:
            scratch: Ref[Any] = Ref(type_=primitive)
            base.decode(ctx, text, scratch)
            out.value = from_primitive(scratch.value)

        return Coder(key, encode, decode)

    # --- introspection ---

    def new_context(self) -> Context:
        """Return an empty context bound to this registry."""
        return Context(self)

    def keys(self) -> tuple[type, ...]:
        """Return the explicitly registered type keys."""
        return tuple(self._coders)

    def __contains__(self, key: object) -> bool:
        return key in self._coders

    def __iter__(self) -> Iterator[type]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._coders)


class _TextProtocolCoder(Coder):
    """Coder dispatching to ``to_text()`` / ``from_text()`` defined on the type."""

    __slots__ = ()

    def __init__(self, key: type) -> None:
        super().__init__(key, self._encode_value, self._decode_value)

    def _encode_value(self, _ctx: Context | None, value: Any) -> str:
        to_text = getattr(value, "to_text", None)
        if not callable(to_text):
            raise TypeError(f"value {value!r} of type {type_name(type(value))} has no to_text()")
        return to_text()

    def _decode_value(self, _ctx: Context | None, text: str, out: Ref[Any]) -> None:
        out.value = self.key.from_text(text)
