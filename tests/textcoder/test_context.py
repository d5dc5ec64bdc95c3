# recordproto:header:start
#
#   project      : RecordProto
#   file         : test_context.py
#   file_relpath : tests/textcoder/test_context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Tests for `Context` and for coders that encode nested values through it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from recordproto.textcoder import Context, Ref, Registry, default_registry, marshal_context


def test_with_value_does_not_modify_parent(registry: Registry) -> None:
    ctx = registry.new_context().with_value("indent", "")
    child = ctx.with_value("indent", "  ")

    assert ctx.value("indent") == ("", True)
    assert child.value("indent") == ("  ", True)


def test_most_recent_binding_wins(registry: Registry) -> None:
    ctx = registry.new_context().with_value("a", 1).with_value("b", 2).with_value("a", 3)
    assert ctx.get("a") == 3
    assert ctx.get("b") == 2
    assert "a" in ctx
    assert "c" not in ctx


def test_missing_name(registry: Registry) -> None:
    ctx = registry.new_context()
    assert ctx.value("missing") == (None, False)
    assert ctx.get("missing", "fallback") == "fallback"


def test_none_is_a_valid_binding(registry: Registry) -> None:
    ctx = registry.new_context().with_value("key", None)
    assert ctx.value("key") == (None, True)


def test_registry_binding(registry: Registry, empty_registry: Registry) -> None:
    ctx = Context.new(registry).with_value("k", "v")
    swapped = ctx.with_registry(empty_registry)

    assert ctx.registry is registry
    assert swapped.registry is empty_registry
    assert swapped.get("k") == "v"
    assert Context().registry is default_registry()


@dataclass
class BulletList:
    bullet: str
    items: list[Any] = field(default_factory=list)


class NoCoderType:
    pass


def encode_bullet_list(ctx: Context, value: BulletList) -> str:
    indent: str = ctx.get("indent", "")
    child = ctx.with_value("indent", indent + "  ")
    lines: list[str] = []
    for item in value.items:
        encoder = ctx.registry.get_encoder(type(item))
        if encoder is None:
            lines.append(f"{indent}{value.bullet} missing encoder for <{type(item).__name__}>")
        elif isinstance(item, BulletList):
            lines.append(encoder.encode_text(child, item))
        else:
            lines.append(f"{indent}{value.bullet} {encoder.encode_text(child, item)}")
    return "\n".join(lines)


def decode_bullet_list(text: str, out: Ref[BulletList]) -> None:
    raise NotImplementedError("bullet lists are encode-only")


def test_nested_encoder_uses_context_registry_and_bindings(registry: Registry) -> None:
    registry.register(BulletList, encode_bullet_list, decode_bullet_list)
    value = BulletList(
        bullet="-",
        items=["a", "b", NoCoderType(), BulletList(bullet="*", items=["c", "d"])],
    )
    ctx = registry.new_context()

    text = marshal_context(ctx, value)

    assert text == "- a\n- b\n- missing encoder for <NoCoderType>\n  * c\n  * d"
    assert "indent" not in ctx


def test_nested_encoder_is_not_visible_in_other_registries(
    registry: Registry, empty_registry: Registry
) -> None:
    registry.register(BulletList, encode_bullet_list, decode_bullet_list)
    assert empty_registry.get_encoder(BulletList) is None
