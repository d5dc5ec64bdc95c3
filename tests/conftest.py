# recordproto:header:start
#
#   project      : RecordProto
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Pytest configuration for the RecordProto test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Tests that register coders should use a private `Registry` (see the ``registry``
    fixture) instead of the process-wide default registry, so that registrations
    never leak between tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from recordproto.config import logging
from recordproto.textcoder import Registry, register_basic_types

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture(autouse=True)
def silence_recordproto_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure RecordProto's runtime log level is not forced via env during tests.

    This avoids accidental DEBUG/TRACE noise when the developer has exported
    RECORDPROTO_LOG_LEVEL in their shell.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("RECORDPROTO_LOG_LEVEL", raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure logging at TRACE level for the test suite.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def registry() -> Registry:
    """Return a fresh registry populated with the built-in scalar coders."""
    reg = Registry()
    register_basic_types(reg)
    return reg


@pytest.fixture
def empty_registry() -> Registry:
    """Return a registry without any coders."""
    return Registry()


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing UTF-8 text files below ``tmp_path``."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
