# recordproto:header:start
#
#   project      : RecordProto
#   file         : api.py
#   file_relpath : src/recordproto/textcoder/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Convenience functions over the process-wide default registry.

The default registry is created and populated with the built-in scalar coders when
this module is first imported. Additional coders are registered at import time of
the modules defining them:

```python
from recordproto import textcoder

class Celsius:
    def __init__(self, degrees: float) -> None:
        self.degrees = degrees

textcoder.must_register(
    Celsius,
    lambda c: f"{c.degrees}C",
    lambda text, out: setattr(out, "value", Celsius(float(text.rstrip("C")))),
)

assert textcoder.marshal(Celsius(21.5)) == "21.5C"
```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from recordproto.textcoder.builtins import register_basic_types
from recordproto.textcoder.context import Context
from recordproto.textcoder.errors import NoCoderError
from recordproto.textcoder.ref import Ref
from recordproto.textcoder.registry import Registry

if TYPE_CHECKING:
    from collections.abc import Callable

    from recordproto.textcoder.registry import Decoder, Encoder

_DEFAULT_REGISTRY: Registry = Registry()
register_basic_types(_DEFAULT_REGISTRY)


def default_registry() -> Registry:
    """Return the process-wide registry used by `marshal` and `unmarshal`."""
    return _DEFAULT_REGISTRY


def register(key: type, encode: Callable[..., Any], decode: Callable[..., Any]) -> None:
    """Register a coder pair in the default registry. See `Registry.register`."""
    _DEFAULT_REGISTRY.register(key, encode, decode)


def must_register(key: type, encode: Callable[..., Any], decode: Callable[..., Any]) -> None:
    """Register a coder pair in the default registry or terminate the process."""
    _DEFAULT_REGISTRY.must_register(key, encode, decode)


def register_alias(
    key: type,
    primitive: type,
    *,
    to_primitive: Callable[[Any], Any] | None = None,
    from_primitive: Callable[[Any], Any] | None = None,
) -> None:
    """Declare the underlying primitive of ``key`` in the default registry."""
    _DEFAULT_REGISTRY.register_alias(
        key, primitive, to_primitive=to_primitive, from_primitive=from_primitive
    )


def new_context() -> Context:
    """Return an empty context bound to the default registry."""
    return Context(_DEFAULT_REGISTRY)


def _encoder_for(registry: Registry, key: type) -> Encoder:
    encoder = registry.get_encoder(key)
    if encoder is None:
        raise NoCoderError("encoder", key)
    return encoder


def _decoder_for(registry: Registry, out: Ref[Any]) -> Decoder:
    if not isinstance(out, Ref):
        raise TypeError(f"unmarshal destination must be a Ref, got {type(out).__name__}")
    decoder = registry.get_decoder(out.type)
    if decoder is None:
        raise NoCoderError("decoder", out.type)
    return decoder


def marshal(value: Any) -> str:
    """Encode ``value`` to text with the coder registered for ``type(value)``.

    Raises:
        NoCoderError: If no encoder can be resolved.
    """
    return marshal_context(new_context(), value)


def marshal_context(ctx: Context, value: Any) -> str:
    """Like `marshal`, resolving the encoder in ``ctx.registry`` and passing ``ctx``."""
    return _encoder_for(ctx.registry, type(value)).encode_text(ctx, value)


def unmarshal(text: str, out: Ref[Any]) -> None:
    """Decode ``text`` into ``out.value`` with the coder registered for ``out.type``.

    Raises:
        TypeError: If ``out`` is not a `Ref`.
        NoCoderError: If no decoder can be resolved.
    """
    unmarshal_context(new_context(), text, out)


def unmarshal_context(ctx: Context, text: str, out: Ref[Any]) -> None:
    """Like `unmarshal`, resolving the decoder in ``ctx.registry`` and passing ``ctx``."""
    _decoder_for(ctx.registry, out).decode_text(ctx, text, out)
