# recordproto:header:start
#
#   project      : RecordProto
#   file         : __init__.py
#   file_relpath : src/recordproto/codegen/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Generation of ``.proto`` and Python converter sources from a mapping."""

from __future__ import annotations

from recordproto.codegen.errors import CodegenError
from recordproto.codegen.generate import GeneratedCode, generate_code, validate_mapping
from recordproto.codegen.proto import format_proto_comment, import_statements, render_proto
from recordproto.codegen.python import render_python

__all__ = [
    "CodegenError",
    "GeneratedCode",
    "format_proto_comment",
    "generate_code",
    "import_statements",
    "render_proto",
    "render_python",
    "validate_mapping",
]
