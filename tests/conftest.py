"""Shared test fixtures for kep.

Provides an isolated cache environment, settings pointing at it, a helper
that builds shell commands counting their own executions, and the Typer CLI
runner. These fixtures are automatically discovered by pytest.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from kep.models import Settings
from kep.output import reset_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager binds its Rich console to sys.stderr at creation
    time. When Typer's CliRunner redirects the streams during a test and
    the test finishes, the cached reference becomes stale. Resetting forces
    a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Cache isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_cache(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate the platform cache and data directories to tmp_path.

    Forces XDG resolution, points XDG_CACHE_HOME and XDG_DATA_HOME at
    subdirectories of tmp_path, clears KEP_VERBOSE and NO_COLOR, and
    changes the working directory to tmp_path.

    Returns:
        The cache root kep will use (``<tmp_path>/cache/kep``).
    """
    monkeypatch.setattr("kep.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("KEP_VERBOSE", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path / "cache" / "kep"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings whose cache root is a fresh directory under tmp_path."""
    return Settings(cache_root=tmp_path / "kep-cache")


# ---------------------------------------------------------------------------
# Execution counting
# ---------------------------------------------------------------------------


class Counter:
    """A file that a test command appends one line to per execution."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @property
    def count(self) -> int:
        if not self.path.exists():
            return 0
        return len(self.path.read_text().splitlines())

    def command(self, output: str = "hello") -> list[str]:
        """Tokens for a command that records a run and prints *output*."""
        return [f"echo run >> '{self.path}';", "echo", output]


@pytest.fixture
def counter(tmp_path: Path) -> Counter:
    """A fresh execution counter under tmp_path."""
    return Counter(tmp_path / "counter.txt")


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner with stdout and stderr captured separately."""
    from typer.testing import CliRunner

    return CliRunner()
