# recordproto:header:start
#
#   project      : RecordProto
#   file         : signatures.py
#   file_relpath : src/recordproto/textcoder/signatures.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Validation and normalization of user-supplied coder functions.

Two calling conventions ("flavors") are accepted per direction:

| Direction | Plain               | Contextual               |
|-----------|---------------------|--------------------------|
| encode    | ``f(value) -> str`` | ``f(ctx, value) -> str`` |
| decode    | ``f(text, out)``    | ``f(ctx, text, out)``    |

The flavor is read from the function's positional parameters with
`inspect.signature`. Both flavors are normalized at registration time to the
contextual form, so call sites never dispatch on flavor.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from recordproto.textcoder.context import Context
from recordproto.textcoder.errors import IllFormedSignatureError, type_name

if TYPE_CHECKING:
    from recordproto.textcoder.ref import Ref

EncodeFn = Callable[[Context | None, Any], str]
"""Normalized encoder: ``(ctx, value) -> text``."""

DecodeFn = Callable[[Context | None, str, "Ref[Any]"], None]
"""Normalized decoder: ``(ctx, text, out) -> None``."""


class Flavor(str, Enum):
    """Calling convention of a user-supplied coder function."""

    PLAIN = "plain"
    CONTEXTUAL = "contextual"


@dataclass(frozen=True)
class _Shape:
    role: str
    plain_arity: int
    plain_form: str
    contextual_form: str


_ENCODER = _Shape("encoder", 1, "(value) -> str", "(ctx, value) -> str")
_DECODER = _Shape("decoder", 2, "(text, out) -> None", "(ctx, text, out) -> None")

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _mismatch(shape: _Shape, key: type, detail: str) -> IllFormedSignatureError:
    return IllFormedSignatureError(
        f"text {shape.role} for {type_name(key)} doesn't match any expected signature "
        f"{shape.plain_form} or {shape.contextual_form}: {detail}"
    )


def _accepts_context(annotation: Any) -> bool:
    if annotation is inspect.Parameter.empty:
        return True
    if isinstance(annotation, str):
        return "Context" in annotation
    if isinstance(annotation, type):
        return issubclass(Context, annotation)
    return "Context" in repr(annotation)


def detect_flavor(fn: object, key: type, shape: _Shape) -> Flavor:
    """Return the flavor of ``fn`` or raise `IllFormedSignatureError`."""
    if fn is None:
        raise IllFormedSignatureError(f"{shape.role} for {type_name(key)} is None")
    if not callable(fn):
        raise _mismatch(shape, key, f"{fn!r} is not callable")
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError) as exc:
        raise _mismatch(shape, key, f"signature of {fn!r} is not inspectable ({exc})") from exc

    required = 0
    maximum: int | None = 0
    positional: list[inspect.Parameter] = []
    for param in sig.parameters.values():
        if param.kind in _POSITIONAL:
            positional.append(param)
            if maximum is not None:
                maximum += 1
            if param.default is inspect.Parameter.empty:
                required += 1
        elif param.kind is inspect.Parameter.VAR_POSITIONAL:
            maximum = None
        elif param.kind is inspect.Parameter.KEYWORD_ONLY and param.default is param.empty:
            raise _mismatch(shape, key, f"required keyword-only parameter {param.name!r}")

    def accepts(arity: int) -> bool:
        return required <= arity and (maximum is None or arity <= maximum)

    contextual_arity = shape.plain_arity + 1
    arities = ((Flavor.PLAIN, shape.plain_arity), (Flavor.CONTEXTUAL, contextual_arity))
    candidates = [flavor for flavor, arity in arities if accepts(arity)]
    if not candidates:
        raise _mismatch(shape, key, f"got {sig}")
    flavor = candidates[0]
    if len(candidates) > 1 and required == contextual_arity:
        flavor = Flavor.CONTEXTUAL

    first = positional[0] if positional else None
    if flavor is Flavor.CONTEXTUAL and first is not None and not _accepts_context(first.annotation):
        raise _mismatch(
            shape,
            key,
            f"first parameter {first.name!r} is annotated {first.annotation!r}, want Context",
        )
    return flavor


def adapt_encoder(fn: Callable[..., Any], key: type) -> tuple[EncodeFn, Flavor]:
    """Validate ``fn`` as an encoder for ``key`` and normalize it to `EncodeFn`."""
    flavor = detect_flavor(fn, key, _ENCODER)

    def encode(ctx: Context | None, value: Any) -> str:
        text = fn(value) if flavor is Flavor.PLAIN else fn(ctx, value)
        if not isinstance(text, str):
            raise IllFormedSignatureError(
                f"text encoder for {type_name(key)} returned {type(text).__name__}, want str"
            )
        return text

    return encode, flavor


def adapt_decoder(fn: Callable[..., Any], key: type) -> tuple[DecodeFn, Flavor]:
    """Validate ``fn`` as a decoder for ``key`` and normalize it to `DecodeFn`."""
    flavor = detect_flavor(fn, key, _DECODER)
    if flavor is Flavor.CONTEXTUAL:
        return fn, flavor

    def decode(_ctx: Context | None, text: str, out: Ref[Any]) -> None:
        fn(text, out)

    return decode, flavor
