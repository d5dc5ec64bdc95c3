# recordproto:header:start
#
#   project      : RecordProto
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""CLI test helpers for running RecordProto in a controlled working directory.

`run_cli_in()` changes the process working directory to the given `tmp_path`
before invoking the Click CLI, so that relative CSV and mapping paths resolve
against the temporary test directory.
"""

from __future__ import annotations

import os
from typing import IO, TYPE_CHECKING, Any

from click.testing import CliRunner, Result

from recordproto.cli.exit_codes import ExitCode
from recordproto.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

FLIGHTS_CSV = (
    "Origin,Departure,Distance,Delayed\n"
    "JFK,2024-03-01 07:45:00,2475,true\n"
    "LAX,2024-03-02 08:00:00,2475,false\n"
    "JFK,2024-03-02 09:15:00,187,false\n"
)


def run_cli_in(
    tmp_path: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Pytest-provided temporary directory used as the CWD for the
            command invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g.
            ``["infer", "flights.csv", "--message-name", "Flight", ...]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input to pass to the command.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv, input=input_text, obj={})
    finally:
        os.chdir(cwd)


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory.

    Use this helper when the test does not depend on files created in
    ``tmp_path`` (e.g., ``--help`` / ``version``) or when all provided paths are
    absolute.
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text, obj={})


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64)."""
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_DATA_ERROR(result: Result) -> None:
    """Assert that the command exited with DATA_ERROR (code 65)."""
    assert result.exit_code == ExitCode.DATA_ERROR, result.output


def assert_FILE_NOT_FOUND(result: Result) -> None:
    """Assert that the command exited with FILE_NOT_FOUND (code 66)."""
    assert result.exit_code == ExitCode.FILE_NOT_FOUND, result.output


def assert_CONFIG_ERROR(result: Result) -> None:
    """Assert that the command exited with CONFIG_ERROR (code 78)."""
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output
