"""Shell execution of the cached command.

The command string is handed to ``<shell> -c`` so pipes, globs and other
shell syntax behave exactly as typed. Stdout and stderr are captured as
separate byte buffers; stdin is inherited from kep. No timeout is applied.
"""

from __future__ import annotations

import subprocess

from kep.exceptions import ShellLaunchError
from kep.exit_codes import EXIT_GENERIC_FAILURE
from kep.models import CommandResult
from kep.output import debug


def run_command(command: str, shell: str = "sh") -> CommandResult:
    """Run *command* through *shell* and capture its output.

    Args:
        command: The full command line.
        shell: Interpreter invoked as ``<shell> -c <command>``.

    Returns:
        The captured streams. ``exit_code`` is the child's return code, or
        :data:`~kep.exit_codes.EXIT_GENERIC_FAILURE` when the child was
        terminated by a signal.

    Raises:
        ShellLaunchError: If *shell* cannot be started at all.
    """
    debug(f"Running: {shell} -c {command!r}")
    try:
        proc = subprocess.run(
            [shell, "-c", command],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        raise ShellLaunchError(f"Failed to execute command: {exc}") from exc

    # A negative return code means the child died from that signal.
    exit_code = proc.returncode if proc.returncode >= 0 else EXIT_GENERIC_FAILURE
    debug(f"Command exited with status {proc.returncode}")
    return CommandResult(stdout=proc.stdout, stderr=proc.stderr, exit_code=exit_code)
