# recordproto:header:start
#
#   project      : RecordProto
#   file         : test_main.py
#   file_relpath : tests/cli/test_main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""CLI tests: group-level behavior (help, verbosity and color options)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from recordproto.cli.errors import RecordprotoUsageError
from recordproto.cli.exit_codes import ExitCode
from recordproto.cli.options import ColorMode, resolve_color_mode, resolve_verbosity
from recordproto.config.logging import TRACE_LEVEL
from tests.cli.conftest import assert_SUCCESS, assert_USAGE_ERROR, run_cli

if TYPE_CHECKING:
    from pathlib import Path


def test_no_subcommand_prints_hint_and_help() -> None:
    result = run_cli(["--no-color"])

    assert_SUCCESS(result)
    assert "Hint: use 'recordproto infer CSV_PATH'" in result.output
    assert "Commands:" in result.output
    for name in ("infer", "generate", "version"):
        assert name in result.output


def test_verbose_and_quiet_conflict() -> None:
    result = run_cli(["-v", "-q", "version"])

    assert_USAGE_ERROR(result)
    assert "--verbose" in result.output


@pytest.mark.parametrize(
    "verbose, quiet, expected",
    [
        (0, 0, logging.WARNING),
        (1, 0, logging.INFO),
        (2, 0, logging.DEBUG),
        (3, 0, TRACE_LEVEL),
        (0, 1, logging.ERROR),
        (0, 2, logging.ERROR),
    ],
)
def test_resolve_verbosity(verbose: int, quiet: int, expected: int) -> None:
    assert resolve_verbosity(verbose, quiet) == expected


def test_resolve_verbosity_rejects_both() -> None:
    with pytest.raises(RecordprotoUsageError):
        resolve_verbosity(1, 1)


def test_resolve_color_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)

    assert resolve_color_mode(cli_mode=ColorMode.ALWAYS, stdout_isatty=False) is True
    assert resolve_color_mode(cli_mode=ColorMode.NEVER, stdout_isatty=True) is False
    assert resolve_color_mode(cli_mode=ColorMode.AUTO, stdout_isatty=True) is True
    assert resolve_color_mode(cli_mode=ColorMode.AUTO, stdout_isatty=False) is False


def test_resolve_color_mode_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    assert resolve_color_mode(cli_mode=ColorMode.AUTO, stdout_isatty=True) is False
    monkeypatch.delenv("NO_COLOR")
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert resolve_color_mode(cli_mode=ColorMode.AUTO, stdout_isatty=False) is True


@pytest.mark.parametrize(
    "color, no_color, expected",
    [
        (None, False, ColorMode.AUTO),
        ("always", False, ColorMode.ALWAYS),
        ("always", True, ColorMode.NEVER),
        ("never", False, ColorMode.NEVER),
    ],
)
def test_color_mode_from_flags(color: str | None, no_color: bool, expected: ColorMode) -> None:
    assert ColorMode.from_flags(color, no_color) is expected


def test_always_color_styles_errors(tmp_path: Path) -> None:
    result = run_cli(["--color", "always", "generate", str(tmp_path / "missing.toml")])

    assert result.exit_code == ExitCode.FILE_NOT_FOUND
    assert "\x1b[" in result.output
