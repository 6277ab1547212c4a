"""Output relay with strict stdout/stderr discipline.

* **stdout** -- only the command's payload, byte for byte, whether it came
  from the cache or from a live run. Nothing kep says about itself ever goes
  here, so a cache hit is indistinguishable from a miss.
* **stderr** -- the command's own stderr (live runs only) followed by kep's
  diagnostics: errors always, debug messages when verbose.
* **Colour control** -- respects ``NO_COLOR`` and ``TERM=dumb``.

The module exposes two layers:

1. :class:`OutputManager` -- holds the Rich stderr console and the
   verbose flag. Created by :func:`~kep.app.run` and installed via
   :func:`set_output`.
2. Module-level convenience functions (:func:`error`, :func:`debug`, ...)
   that delegate to the global ``OutputManager`` so callers such as the
   cache store do not need to pass the manager around.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape


class OutputManager:
    """Central manager for all process output.

    Payload bytes are written through :func:`typer.echo`, which routes
    ``bytes`` to the binary layer of the stream untouched. Diagnostics go
    through a Rich :class:`~rich.console.Console` bound to stderr.

    Args:
        no_color: Disable all colour and Rich markup.
        verbose: Enable debug-level messages on stderr.
    """

    def __init__(self, no_color: bool = False, verbose: bool = False) -> None:
        self._no_color = no_color or _should_disable_color()
        self._verbose = verbose
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
        )

    @property
    def is_verbose(self) -> bool:
        """Whether verbose mode is enabled."""
        return self._verbose

    # ------------------------------------------------------------------ #
    # Payload relay
    # ------------------------------------------------------------------ #

    def write_stdout(self, data: bytes) -> None:
        """Write raw payload bytes to stdout verbatim."""
        if data:
            typer.echo(data, nl=False)

    def write_stderr(self, data: bytes) -> None:
        """Write the command's raw stderr bytes to stderr verbatim."""
        if data:
            typer.echo(data, nl=False, err=True)

    def print_usage(self, text: str) -> None:
        """Print usage text to stdout."""
        typer.echo(text)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def error(self, message: str) -> None:
        """Print a bold-red error to stderr. Never suppressed.

        Args:
            message: The error text.
        """
        if self._no_color:
            print(f"Error: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {escape(message)}", markup=True)

    def debug(self, message: str) -> None:
        """Print a debug message to stderr. Only shown when verbose.

        Args:
            message: The debug text (prefixed with ``[debug]`` on output).
        """
        if self._verbose:
            if self._no_color:
                print(f"[debug] {message}", file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[dim]\\[debug] {escape(message)}[/dim]", markup=True)


# ------------------------------------------------------------------ #
# Module-level helpers
# ------------------------------------------------------------------ #


def _should_disable_color() -> bool:
    """Check if color should be disabled.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


# ------------------------------------------------------------------ #
# Global output instance (set during startup)
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager` instance.

    If no instance has been installed via :func:`set_output`, a default
    non-verbose ``OutputManager`` is created lazily.
    """
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None


# ------------------------------------------------------------------ #
# Convenience functions that use the global instance
# ------------------------------------------------------------------ #


def write_stdout(data: bytes) -> None:
    """Relay payload bytes to stdout via the global OutputManager."""
    get_output().write_stdout(data)


def write_stderr(data: bytes) -> None:
    """Relay command stderr bytes via the global OutputManager."""
    get_output().write_stderr(data)


def error(message: str) -> None:
    """Print error to stderr via the global OutputManager."""
    get_output().error(message)


def debug(message: str) -> None:
    """Print debug message to stderr via the global OutputManager."""
    get_output().debug(message)
