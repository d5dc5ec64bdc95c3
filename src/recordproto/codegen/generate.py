# recordproto:header:start
#
#   project      : RecordProto
#   file         : generate.py
#   file_relpath : src/recordproto/codegen/generate.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Entry point of code generation from a mapping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from recordproto.codegen.errors import CodegenError
from recordproto.codegen.proto import quote, render_proto
from recordproto.codegen.python import render_python
from recordproto.config.logging import get_logger

if TYPE_CHECKING:
    from recordproto.config.logging import RecordprotoLogger
    from recordproto.mapping import RecordProtoMapping

logger: RecordprotoLogger = get_logger(__name__)

MAX_PROTO_TAG: Final[int] = (1 << 29) - 1


@dataclass(frozen=True)
class GeneratedCode:
    """Sources produced by `generate_code`; an empty string when not requested."""

    proto_code: str = ""
    python_code: str = ""


def validate_mapping(mapping: RecordProtoMapping) -> None:
    """Check the parts of ``mapping`` that every generator relies on.

    Raises:
        CodegenError: On a missing name, or an invalid or duplicate field tag or name.
    """
    if not mapping.package_name:
        raise CodegenError("mapping has no package_name")
    if not mapping.message_name:
        raise CodegenError("mapping has no message_name")
    tags: dict[int, str] = {}
    names: set[str] = set()
    for definition in mapping.field_definitions():
        if not definition.proto_name or not definition.proto_type:
            raise CodegenError(
                f"field with tag {definition.proto_tag} needs proto_name and proto_type"
            )
        if not 1 <= definition.proto_tag <= MAX_PROTO_TAG:
            raise CodegenError(
                f"field {quote(definition.proto_name)} has invalid tag {definition.proto_tag}"
            )
        if definition.proto_tag in tags:
            raise CodegenError(
                f"fields {quote(tags[definition.proto_tag])} and {quote(definition.proto_name)} "
                f"share tag {definition.proto_tag}"
            )
        if definition.proto_name in names:
            raise CodegenError(f"duplicate field name {quote(definition.proto_name)}")
        tags[definition.proto_tag] = definition.proto_name
        names.add(definition.proto_name)


def generate_code(
    mapping: RecordProtoMapping,
    *,
    proto: bool = True,
    python: bool = True,
) -> GeneratedCode:
    """Generate the ``.proto`` file and/or the Python converter module.

    Args:
        mapping (RecordProtoMapping): The mapping to generate code for.
        proto (bool): Whether to render the ``.proto`` source.
        python (bool): Whether to render the Python converter source.

    Returns:
        GeneratedCode: The requested sources.

    Raises:
        CodegenError: If the mapping is incomplete or inconsistent.
    """
    validate_mapping(mapping)
    python_code = render_python(mapping) if python else ""
    proto_code = render_proto(mapping) if proto else ""
    logger.debug(
        "Generated code for %s.%s (proto=%s, python=%s)",
        mapping.package_name,
        mapping.message_name,
        proto,
        python,
    )
    return GeneratedCode(proto_code=proto_code, python_code=python_code)
