# recordproto:header:start
#
#   project      : RecordProto
#   file         : merge.py
#   file_relpath : src/recordproto/mapping/merge.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Overlaying an inferred mapping onto a hand-written template."""

from __future__ import annotations

import copy
from dataclasses import fields, is_dataclass
from typing import Any, TypeVar

from recordproto.mapping.model import FieldDefinition, RecordProtoMapping

T = TypeVar("T")


def _is_empty(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return value is None or value == "" or value == [] or value == 0


def _overlay(base: T, top: T) -> T:
    out = copy.deepcopy(base)
    for fld in fields(top):  # type: ignore[arg-type]
        value = getattr(top, fld.name)
        if _is_empty(value) or (isinstance(value, bool) and not value):
            continue
        current = getattr(out, fld.name)
        if is_dataclass(value) and current is not None:
            setattr(out, fld.name, _overlay(current, value))
        else:
            setattr(out, fld.name, copy.deepcopy(value))
    return out


def merge(template: RecordProtoMapping | None, inferred: RecordProtoMapping) -> RecordProtoMapping:
    """Return ``template`` with the non-empty values of ``inferred`` laid over it.

    - Scalar values set in ``inferred`` replace those of ``template``.
    - ``python_options`` are merged field by field.
    - ``columns`` of ``inferred`` replace the template columns when non-empty.
    - ``extra_fields`` are concatenated; an inferred field replaces a template
      field with the same ``proto_name``.

    Neither argument is modified.
    """
    if template is None:
        return copy.deepcopy(inferred)
    merged = _overlay(template, inferred)
    extras: dict[str, FieldDefinition] = {
        f.proto_name: copy.deepcopy(f) for f in template.extra_fields
    }
    for extra in inferred.extra_fields:
        extras[extra.proto_name] = copy.deepcopy(extra)
    merged.extra_fields = list(extras.values())
    return merged
