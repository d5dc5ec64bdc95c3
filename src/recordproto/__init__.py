# recordproto:header:start
#
#   project      : RecordProto
#   file         : __init__.py
#   file_relpath : src/recordproto/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""RecordProto package.

RecordProto converts between typed values and their text form (`textcoder`),
decodes CSV rows into dataclasses (`csvcoder`), infers protobuf messages from
CSV files (`infer`) and generates ``.proto`` files and Python readers from a
column mapping (`mapping`, `codegen`).
"""

from __future__ import annotations
