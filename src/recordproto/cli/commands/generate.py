# recordproto:header:start
#
#   project      : RecordProto
#   file         : generate.py
#   file_relpath : src/recordproto/cli/commands/generate.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""RecordProto `generate` command.

Reads a TOML mapping file and generates the ``.proto`` definition and the Python
reader module it describes. Without ``--proto-out`` or ``--python-out`` both are
printed to stdout; otherwise only the requested files are written.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from recordproto.cli.errors import RecordprotoConfigError
from recordproto.cli.io import read_text_file, write_text_file
from recordproto.codegen import CodegenError, generate_code
from recordproto.config.logging import get_logger
from recordproto.mapping import MappingError, loads_mapping

if TYPE_CHECKING:
    from recordproto.cli.console import ConsoleLike
    from recordproto.config.logging import RecordprotoLogger

logger: RecordprotoLogger = get_logger(__name__)


@click.command(
    name="generate",
    help="Generate the .proto file and Python reader described by a mapping file.",
)
@click.argument("mapping_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--proto-out",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the .proto definition to this file.",
)
@click.option(
    "--python-out",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the Python reader module to this file.",
)
def generate_command(
    *,
    mapping_path: Path,
    proto_out: Path | None,
    python_out: Path | None,
) -> None:
    """Generate code from the mapping at ``mapping_path``.

    Args:
        mapping_path (Path): The TOML mapping file.
        proto_out (Path | None): Destination of the ``.proto`` file.
        python_out (Path | None): Destination of the Python module.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel: int = ctx.obj.get("verbosity_level", logging.WARNING)

    to_stdout = proto_out is None and python_out is None
    try:
        mapping = loads_mapping(read_text_file(mapping_path))
        # stdout mode prints the reader only when the mapping configures one
        code = generate_code(
            mapping,
            proto=to_stdout or proto_out is not None,
            python=python_out is not None or (to_stdout and mapping.python_options is not None),
        )
    except (MappingError, CodegenError) as exc:
        raise RecordprotoConfigError(str(exc), path=mapping_path) from exc

    if to_stdout:
        console.print(code.proto_code, nl=False)
        if code.python_code:
            console.print()
            console.print(code.python_code, nl=False)
        return

    for path, text in ((proto_out, code.proto_code), (python_out, code.python_code)):
        if path is None:
            continue
        write_text_file(path, text)
        if vlevel <= logging.WARNING:
            console.print(f"Wrote {path}")
