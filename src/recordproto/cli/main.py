# recordproto:header:start
#
#   project      : RecordProto
#   file         : main.py
#   file_relpath : src/recordproto/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""The ``recordproto`` command group.

The group callback resolves the shared options once and stores the results in
``ctx.obj``:

- ``verbosity_level``: console output level (see `resolve_verbosity`);
- ``log_level``: internal log level taken from ``RECORDPROTO_LOG_LEVEL`` (or None);
- ``color_enabled``: whether console output is colored;
- ``console``: the `ConsoleLike` commands print through.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from recordproto.cli.commands.generate import generate_command
from recordproto.cli.commands.infer import infer_command
from recordproto.cli.commands.version import version_command
from recordproto.cli.console import ClickConsole
from recordproto.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from recordproto.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from recordproto.config.logging import RecordprotoLogger

logger: RecordprotoLogger = get_logger(__name__)

HINT = "Hint: use 'recordproto infer CSV_PATH' to infer a mapping."


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Fill ``ctx.obj`` from the group options and configure logging.

    Raises:
        RecordprotoUsageError: If ``-v`` and ``-q`` are combined.
    """
    state: dict[str, object] = ctx.ensure_object(dict)
    state["verbosity_level"] = resolve_verbosity(verbose, quiet)

    log_level = resolve_env_log_level()
    state["log_level"] = log_level
    setup_logging(level=log_level)

    color_enabled = resolve_color_mode(cli_mode=ColorMode.from_flags(color_mode, no_color))
    state["color_enabled"] = color_enabled
    ctx.color = color_enabled
    state["console"] = ClickConsole(enable_color=color_enabled)
    logger.debug("CLI state: verbosity=%s color=%s", state["verbosity_level"], color_enabled)


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="RecordProto: infer protobuf messages from CSV files and generate readers for them.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Run a RecordProto command."""
    init_common_state(ctx, verbose=verbose, quiet=quiet, color_mode=color_mode, no_color=no_color)
    if ctx.invoked_subcommand is not None:
        return

    console: ClickConsole = ctx.obj["console"]
    console.print(HINT)
    console.print()
    console.print(ctx.get_help())


for _command in (infer_command, generate_command, version_command):
    cli.add_command(_command)
