# recordproto:header:start
#
#   project      : RecordProto
#   file         : __init__.py
#   file_relpath : src/recordproto/textcoder/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Type-keyed text encoding and decoding.

`textcoder` maps a Python type to a pair of functions converting values of that
type to and from text. Built-in coders cover ``str``, ``bool``, ``int``, ``float``
and the fixed-width scalars of `recordproto.textcoder.scalars`. User-defined
subclasses of those types are handled through their underlying primitive, and
classes defining ``to_text()`` / ``from_text()`` are handled without registration.

```python
from recordproto import textcoder
from recordproto.textcoder import Ref, Int8

assert textcoder.marshal(-7) == "-7"

out = Ref(type_=Int8)
textcoder.unmarshal("100", out)
assert out.value == Int8(100)
```
"""

from __future__ import annotations

from recordproto.textcoder.api import (
    default_registry,
    marshal,
    marshal_context,
    must_register,
    new_context,
    register,
    register_alias,
    unmarshal,
    unmarshal_context,
)
from recordproto.textcoder.builtins import register_basic_types
from recordproto.textcoder.context import Context
from recordproto.textcoder.errors import (
    IllFormedSignatureError,
    NoCoderError,
    OutOfRangeError,
    ParseError,
    TextcoderError,
    UnsupportedValueError,
)
from recordproto.textcoder.ref import Ref
from recordproto.textcoder.registry import Coder, CoderPair, Decoder, Encoder, Registry
from recordproto.textcoder.scalars import (
    FLOAT32_MAX,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)
from recordproto.textcoder.signatures import Flavor

__all__ = [
    "FLOAT32_MAX",
    "Coder",
    "CoderPair",
    "Context",
    "Decoder",
    "Encoder",
    "Flavor",
    "Float32",
    "Float64",
    "IllFormedSignatureError",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "NoCoderError",
    "OutOfRangeError",
    "ParseError",
    "Ref",
    "Registry",
    "TextcoderError",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "UnsupportedValueError",
    "default_registry",
    "marshal",
    "marshal_context",
    "must_register",
    "new_context",
    "register",
    "register_alias",
    "register_basic_types",
    "unmarshal",
    "unmarshal_context",
]
