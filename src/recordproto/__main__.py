# recordproto:header:start
#
#   project      : RecordProto
#   file         : __main__.py
#   file_relpath : src/recordproto/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Module entry point for running RecordProto via ``python -m recordproto``.

Examples:
    Infer a mapping using the module interface::

        python -m recordproto infer flights.csv --message-name Flight --package-name flights
"""

from __future__ import annotations

from recordproto.cli.main import cli

if __name__ == "__main__":
    cli()
