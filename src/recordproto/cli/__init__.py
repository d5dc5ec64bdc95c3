# recordproto:header:start
#
#   project      : RecordProto
#   file         : __init__.py
#   file_relpath : src/recordproto/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Click-based command-line interface of RecordProto."""
