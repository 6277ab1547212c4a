"""Typer application and CLI entry point for kep.

The command line is ``kep [duration] <command...>``. Everything after the
first positional token is passed through untouched, so flags meant for the
wrapped command (``kep curl --help``) never reach kep's own parser. Help and
version are therefore recognised only as the first argument and are handled
here rather than by Click.

:func:`run` is the pipeline itself: split off the duration, derive the cache
key, serve a fresh entry or execute the command, store its stdout and relay
both streams. :func:`main` is the console-script entry point declared in
``pyproject.toml``; it installs signal handling and turns unexpected
exceptions into a crash log.

See Also:
    :mod:`kep.config`: Cache root resolution.
    :mod:`kep.output`: stdout/stderr relay initialised in :func:`kep_command`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, List, Optional, Sequence

import click
import typer
from typer.core import TyperCommand

from kep import __version__
from kep.cache import CacheStore, derive_key
from kep.duration import split_duration
from kep.exceptions import KepError, MissingCommandError
from kep.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED, EXIT_SUCCESS
from kep.models import Invocation, Settings
from kep.output import (
    OutputManager,
    debug,
    error,
    get_output,
    set_output,
    write_stderr,
    write_stdout,
)
from kep.runner import run_command

HELP = """\
Cache any command output.

Usage: kep [duration] <command...>

Examples:
  kep curl google.com      # cached for 1h (default)
  kep 7d curl google.com   # cached for 7 days
  kep 30m echo hello       # cached for 30 minutes

Duration suffixes: s (seconds), m (minutes), h (hours), d (days)"""

_HELP_FLAGS = ("-h", "--help")


app = typer.Typer(
    name="kep",
    help="Cache any command output.",
    add_completion=False,
)


class PassthroughCommand(TyperCommand):
    """Command whose arguments reach :func:`run` exactly as typed.

    Click treats a leading ``--`` as its own end-of-options marker and drops
    it. Doubling it leaves the original token in the argument list.
    """

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        if args and args[0] == "--":
            args = ["--", *args]
        return super().parse_args(ctx, args)


def run(args: Sequence[str], settings: Settings) -> int:
    """Serve *args* from the cache or execute it, and relay its output.

    Args:
        args: Command-line tokens after the program name, optionally
            starting with a duration such as ``30m``.
        settings: Resolved settings; ``cache_root`` selects the store.

    Returns:
        The process exit code: ``0`` on a cache hit, otherwise the executed
        command's own exit code.

    Raises:
        MissingCommandError: If nothing follows the duration token.
        InvalidDurationError: If the duration is too large to represent.
        ShellLaunchError: If the shell cannot be started.
    """
    ttl, tokens = split_duration(args, default_ttl=settings.default_ttl_seconds)
    if not tokens:
        raise MissingCommandError()
    invocation = Invocation(tokens=tuple(tokens), ttl_seconds=ttl)

    store = CacheStore(settings.cache_root)
    key = derive_key(invocation.tokens)
    debug(f"Cache key {key} (ttl {invocation.ttl_seconds}s) under {store.root}")

    cached = store.read(key, invocation.ttl_seconds)
    if cached is not None:
        debug("Cache hit")
        write_stdout(cached)
        return EXIT_SUCCESS

    debug("Cache miss")
    result = run_command(invocation.command, shell=settings.shell)
    store.write(key, result.stdout)

    write_stdout(result.stdout)
    write_stderr(result.stderr)
    return result.exit_code


@app.command(
    cls=PassthroughCommand,
    add_help_option=False,
    context_settings={
        "allow_interspersed_args": False,
        "ignore_unknown_options": True,
    },
)
def kep_command(
    args: Optional[List[str]] = typer.Argument(
        None,
        metavar="[DURATION] COMMAND...",
        help="Optional TTL such as 30m or 7d, then the command to run.",
    ),
) -> None:
    """Cache any command output."""
    from kep.config import load_settings

    tokens = list(args or [])
    if not tokens or tokens[0] in _HELP_FLAGS:
        get_output().print_usage(HELP)
        raise typer.Exit()
    if tokens[0] == "--version":
        get_output().print_usage(f"kep {__version__}")
        raise typer.Exit()

    try:
        settings = load_settings()
        set_output(OutputManager(verbose=settings.verbose))
        code = run(tokens, settings)
    except KepError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    raise typer.Exit(code=code)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path.

    Args:
        exc: The unhandled exception to log.

    Returns:
        Absolute path to the written crash log file.
    """
    from kep.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``kep`` console script.

    Installs the SIGINT handler and invokes the Typer application. Errors
    that reach this level are unexpected: the traceback is written to a
    crash log (when that is possible) and the process exits with
    :data:`~kep.exit_codes.EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        try:
            log_path = _write_crash_log(exc)
        except OSError:
            error(f"Unexpected error: {exc}")
        else:
            error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
