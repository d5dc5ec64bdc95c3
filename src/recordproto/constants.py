# recordproto:header:start
#
#   project      : RecordProto
#   file         : constants.py
#   file_relpath : src/recordproto/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""RecordProto Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

RECORDPROTO_VERSION: str = get_version("recordproto")
