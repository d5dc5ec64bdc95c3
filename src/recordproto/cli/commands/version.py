# recordproto:header:start
#
#   project      : RecordProto
#   file         : version.py
#   file_relpath : src/recordproto/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""RecordProto `version` command.

Prints the current RecordProto version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from recordproto.constants import RECORDPROTO_VERSION

if TYPE_CHECKING:
    from recordproto.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of RecordProto.",
)
def version_command() -> None:
    """Show the current version of RecordProto."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    console.print(console.styled(RECORDPROTO_VERSION, bold=True))
