# recordproto:header:start
#
#   project      : RecordProto
#   file         : __init__.py
#   file_relpath : src/recordproto/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Runtime configuration helpers (logging)."""

from __future__ import annotations

from recordproto.config import logging

__all__ = ["logging"]
