# recordproto:header:start
#
#   project      : RecordProto
#   file         : errors.py
#   file_relpath : src/recordproto/textcoder/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Exceptions raised by the text coder registry and the built-in coders.

Every error derives from `TextcoderError` and from the closest built-in
exception, so callers may catch either ``TextcoderError`` or e.g. ``ValueError``.

Exceptions raised by user-supplied coders are never wrapped; they propagate to the
caller unchanged.
"""

from __future__ import annotations


class TextcoderError(Exception):
    """Base class for all text coder errors."""


class IllFormedSignatureError(TextcoderError, TypeError):
    """An encoder or decoder does not match any accepted calling convention."""


class NoCoderError(TextcoderError, LookupError):
    """No coder is registered for a type, and no fallback applies."""

    def __init__(self, direction: str, key: type) -> None:
        self.direction = direction
        self.key = key
        super().__init__(f"no {direction} registered for type {type_name(key)}")


class ParseError(TextcoderError, ValueError):
    """A decoder could not interpret its text input."""

    def __init__(
        self,
        text: str,
        reason: str = "invalid syntax",
        message: str | None = None,
    ) -> None:
        self.text = text
        self.reason = reason
        super().__init__(message or f"parsing {_quote(text)}: {reason}")


class OutOfRangeError(ParseError):
    """The text is numerically valid but does not fit the destination width."""

    def __init__(self, text: str) -> None:
        super().__init__(text, "value out of range")


class UnsupportedValueError(ParseError):
    """The text is not one of the words accepted by an enumerated decoder."""

    def __init__(self, text: str, kind: str = "bool") -> None:
        self.kind = kind
        super().__init__(text, "unsupported value", f"unsupported {kind} value {_quote(text)}")


def _quote(text: str) -> str:
    """Return ``text`` in double quotes with backslash escapes."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def type_name(key: type) -> str:
    """Return a readable ``module.QualName`` for a type key."""
    module = getattr(key, "__module__", "")
    qualname = getattr(key, "__qualname__", repr(key))
    if module in ("", "builtins"):
        return qualname
    return f"{module}.{qualname}"
