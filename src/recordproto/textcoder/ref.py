# recordproto:header:start
#
#   project      : RecordProto
#   file         : ref.py
#   file_relpath : src/recordproto/textcoder/ref.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Caller-owned destination cells for decoders."""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class Ref(Generic[T]):
    """A mutable cell that a decoder writes its result into.

    The declared ``type`` selects the decoder; it defaults to the type of the
    initial value. Decoders assign ``value`` and must not keep the cell after
    they return.

    Example:
        ```python
        out = Ref(0)
        unmarshal("-7", out)
        assert out.value == -7

        when = Ref(type_=datetime)  # no initial value
        ```

    Attributes:
        value (T | None): The current value.
        type (type[T]): The declared destination type.
    """

    __slots__ = ("type", "value")

    def __init__(self, value: T | None = None, type_: type[T] | None = None) -> None:
        if type_ is None:
            if value is None:
                raise TypeError("Ref requires type_ when the initial value is None")
            type_ = type(value)
        self.value: T | None = value
        self.type: type[T] = type_

    def __repr__(self) -> str:
        return f"Ref({self.value!r}, type_={self.type.__qualname__})"
