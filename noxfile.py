# recordproto:header:start
#
#   project      : RecordProto
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""RecordProto project automation via Nox (using uv-backed virtualenvs).

Sessions:
  - `lint`: Ruff static analysis.
  - `lint_fixall`: Ruff lint autofix.
  - `format_check`: Verify formatting (ruff).
  - `format`: Apply formatting (ruff).
  - `qa`: Per-Python session that runs pytest and pyright.
  - `property_test`: Long-running property tests (opt-in).

Common invocations:
  - `nox -s lint`
  - `nox -s qa` (runs for all configured Python versions)
"""

from __future__ import annotations

import pathlib
import sys
import warnings
from typing import Any, cast

import nox

CURRENT_PYTHON_VERSION: str = f"{sys.version_info[0]}.{sys.version_info[1]}"

CLASSIFIER_PREFIX = "Programming Language :: Python :: "


def _parse_pyproject_toml() -> dict[str, Any]:
    """Parse `pyproject.toml` using stdlib TOML parsing.

    This runs at **noxfile import time**, so it must not depend on project
    runtime dependencies. Interpreters without `tomllib` get an empty document.
    """
    path: pathlib.Path = pathlib.Path(__file__).parent / "pyproject.toml"
    if not path.exists() or sys.version_info < (3, 11):
        return {}

    import tomllib

    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError:
        return {}


def get_supported_pythons() -> list[str]:
    """Resolve supported Python versions from `pyproject.toml` classifiers.

    Returns:
        list[str]: Supported versions like ["3.10", "3.11", ...], sorted.
    """
    project_any = _parse_pyproject_toml().get("project")
    classifiers_any: object = (
        cast("dict[str, Any]", project_any).get("classifiers")
        if isinstance(project_any, dict)
        else None
    )

    versions: set[tuple[int, int]] = set()
    for c in cast("list[str]", classifiers_any) if isinstance(classifiers_any, list) else []:
        parts: list[str] = c.removeprefix(CLASSIFIER_PREFIX).strip().split(".")
        # Accept only X.Y numeric versions.
        if c.startswith(CLASSIFIER_PREFIX) and len(parts) == 2 and all(p.isdigit() for p in parts):
            versions.add((int(parts[0]), int(parts[1])))

    if versions:
        return [f"{major}.{minor}" for major, minor in sorted(versions)]

    warnings.warn(
        "No Python versions found in pyproject.toml classifiers. "
        f"Falling back to Python {CURRENT_PYTHON_VERSION}.",
        RuntimeWarning,
        stacklevel=2,
    )
    return [CURRENT_PYTHON_VERSION]


PYTHONS: list[str] = get_supported_pythons()

nox.options.sessions = ["lint", "format_check"]
nox.options.default_venv_backend = "uv"


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run tests + pyright (per Python version)."""
    session.log("Supported Python versions: " + ", ".join(PYTHONS))

    session.install("-e", ".[test,dev]")

    session.run("pytest", "-q", "tests", "-m", "not hypothesis_slow", *session.posargs)

    py_ver = session.python
    if not isinstance(py_ver, str) or not py_ver:
        raise RuntimeError(f"Unexpected session.python value: {py_ver!r}")

    session.run("pyright", "--pythonversion", py_ver)


@nox.session
def lint(session: nox.Session) -> None:
    """Static analysis."""
    session.install("-e", ".[dev]")
    session.run("ruff", "check", ".")


@nox.session
def lint_fixall(session: nox.Session) -> None:
    """Apply Ruff lint autofixes."""
    session.install("-e", ".[dev]")
    session.run("ruff", "check", "--fix", ".")


@nox.session
def format_check(session: nox.Session) -> None:
    """Verify formatting without modifying files."""
    session.install("-e", ".[dev]")
    session.run("ruff", "format", "--check", ".")


@nox.session
def format(session: nox.Session) -> None:
    """Apply formatting."""
    session.install("-e", ".[dev]")
    session.run("ruff", "format", ".")


@nox.session
def property_test(session: nox.Session) -> None:
    """Run the long-running property tests."""
    session.install("-e", ".[test]")
    session.run("pytest", "-vv", "-m", "hypothesis_slow", "tests", *session.posargs)
