# recordproto:header:start
#
#   project      : RecordProto
#   file         : infer.py
#   file_relpath : src/recordproto/cli/commands/infer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""RecordProto `infer` command.

Reads a CSV file whose first row is a header, infers a proto message from its
values and prints (or writes) the resulting TOML mapping file. With
``--template``, hand-edited settings of an existing mapping are kept.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from recordproto.cli.errors import RecordprotoConfigError, RecordprotoDataError
from recordproto.cli.io import read_text_file, write_text_file
from recordproto.config.logging import get_logger
from recordproto.infer import InferenceError, InferOptions, infer_proto
from recordproto.mapping import MappingError, loads_mapping

if TYPE_CHECKING:
    from recordproto.cli.console import ConsoleLike
    from recordproto.config.logging import RecordprotoLogger
    from recordproto.mapping import RecordProtoMapping

logger: RecordprotoLogger = get_logger(__name__)


def _load_template(path: Path) -> RecordProtoMapping:
    try:
        return loads_mapping(read_text_file(path))
    except MappingError as exc:
        raise RecordprotoConfigError(str(exc), path=path) from exc


@click.command(
    name="infer",
    help="Infer a proto message and its column mapping from a CSV file.",
)
@click.argument("csv_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--message-name", required=True, help="Name of the proto message.")
@click.option("--package-name", required=True, help="Proto package of the message.")
@click.option("--module-name", default="", help="Name of the generated Python reader module.")
@click.option(
    "--proto-module",
    default="",
    help="Import path of the protoc-generated module, e.g. 'flights_pb2'.",
)
@click.option(
    "--time-zone",
    default="",
    help="IANA time zone for timestamps without an offset, e.g. 'America/New_York'.",
)
@click.option(
    "--template",
    "template_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Existing mapping whose settings are kept where inference has nothing to add.",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the mapping to this file instead of stdout.",
)
def infer_command(
    *,
    csv_path: Path,
    message_name: str,
    package_name: str,
    module_name: str,
    proto_module: str,
    time_zone: str,
    template_path: Path | None,
    output_path: Path | None,
) -> None:
    """Infer a mapping from ``csv_path``.

    Args:
        csv_path (Path): The CSV file to read.
        message_name (str): Name of the proto message.
        package_name (str): Proto package of the message.
        module_name (str): Name of the generated Python reader module.
        proto_module (str): Import path of the protoc-generated module.
        time_zone (str): IANA zone used for timestamps without an offset.
        template_path (Path | None): Mapping to lay the inferred mapping over.
        output_path (Path | None): Destination file; stdout if None.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel: int = ctx.obj.get("verbosity_level", logging.WARNING)

    options = InferOptions(
        message_name=message_name,
        package_name=package_name,
        module_name=module_name,
        proto_module=proto_module,
        time_zone=time_zone,
    )
    csv_text = read_text_file(csv_path)
    template = _load_template(template_path) if template_path is not None else None

    try:
        inferred = infer_proto(csv_text, options)
    except InferenceError as exc:
        raise RecordprotoDataError(str(exc), path=csv_path) from exc
    logger.debug("Inferred %d columns from %s", len(inferred.columns), csv_path)

    text = inferred.formatted_mapping(template)
    if output_path is None:
        console.print(text, nl=False)
        return

    write_text_file(output_path, text)
    if vlevel <= logging.INFO:
        for col in inferred.columns:
            proto_type = col.column_type.proto_type
            console.print(f"  {col.csv_column_name} -> {col.field_name}: {proto_type}")
    if vlevel <= logging.WARNING:
        console.print(f"Wrote mapping for {package_name}.{message_name} to {output_path}")
