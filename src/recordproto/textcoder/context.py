# recordproto:header:start
#
#   project      : RecordProto
#   file         : context.py
#   file_relpath : src/recordproto/textcoder/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Per-call state threaded through nested encoder and decoder calls.

A `Context` is an immutable chain of ``(name, value)`` bindings plus the
`Registry` that produced the current coder. Coders that format sub-values ask
``ctx.registry`` for the sub-value's coder and hand it a derived context:

```python
def encode_list(ctx: Context, items: BulletList) -> str:
    indent = ctx.get("indent", "")
    child = ctx.with_value("indent", indent + "  ")
    ...
```

Deriving never mutates the parent, so a caller sees its own bindings unchanged
after a nested call returns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from collections.abc import Iterator

    from recordproto.textcoder.registry import Registry

_ROOT: Final[object] = object()


class Context:
    """Immutable bag of named values bound to a `Registry`.

    Args:
        registry (Registry | None): Registry used for nested lookups. ``None`` selects
            the process-wide default registry.
    """

    __slots__ = ("_name", "_parent", "_registry", "_value")

    _name: object
    _parent: Context | None
    _registry: Registry
    _value: Any

    def __init__(self, registry: Registry | None = None) -> None:
        if registry is None:
            from recordproto.textcoder.api import default_registry

            registry = default_registry()
        self._registry = registry
        self._parent = None
        self._name = _ROOT
        self._value = None

    @classmethod
    def new(cls, registry: Registry | None = None) -> Context:
        """Return an empty context bound to ``registry`` (default registry if None)."""
        return cls(registry)

    def _derive(self, name: object, value: Any, registry: Registry) -> Context:
        child = object.__new__(Context)
        child._registry = registry
        child._parent = self
        child._name = name
        child._value = value
        return child

    @property
    def registry(self) -> Registry:
        """The registry to use for nested encoding and decoding."""
        return self._registry

    def with_value(self, name: object, value: Any) -> Context:
        """Return a child context in which ``name`` is bound to ``value``.

        The receiver is not modified.
        """
        return self._derive(name, value, self._registry)

    def with_registry(self, registry: Registry) -> Context:
        """Return a child context that keeps all bindings but uses ``registry``."""
        return self._derive(_ROOT, None, registry)

    def _chain(self) -> Iterator[Context]:
        node: Context | None = self
        while node is not None:
            yield node
            node = node._parent

    def value(self, name: object) -> tuple[Any, bool]:
        """Look up ``name``, most recent binding first.

        Returns:
            tuple[Any, bool]: ``(value, True)`` if bound, else ``(None, False)``.
        """
        for node in self._chain():
            if node._name is not _ROOT and node._name == name:
                return node._value, True
        return None, False

    def get(self, name: object, default: Any = None) -> Any:
        """Return the value bound to ``name`` or ``default``."""
        value, found = self.value(name)
        return value if found else default

    def __contains__(self, name: object) -> bool:
        return self.value(name)[1]

    def __repr__(self) -> str:
        names = [repr(node._name) for node in self._chain() if node._name is not _ROOT]
        return f"Context(names=[{', '.join(names)}])"
