"""Exception hierarchy for kep.

All exceptions inherit from :class:`KepError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`kep.exit_codes`.
The top-level error handler in :func:`kep.app.main` catches ``KepError``
and exits with the appropriate code, while unexpected exceptions produce a
crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Cache failures are deliberately absent: a failed read is a miss and a failed
write is ignored, so neither ever becomes an exception at this level.

Subclass hierarchy::

    KepError (exit 1)
    +-- InvalidUsageError        (exit 2)
    |   +-- MissingCommandError  (exit 1)
    |   +-- InvalidDurationError (exit 2)
    +-- ShellLaunchError         (exit 127)
    +-- ConfigError              (exit 1)
"""

from kep.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SHELL_LAUNCH_FAILURE,
)


class KepError(Exception):
    """Base exception for all kep errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(KepError):
    """Raised when the command line cannot be interpreted."""

    exit_code = EXIT_INVALID_USAGE


class MissingCommandError(InvalidUsageError):
    """Raised when a duration was given but no command follows it."""

    exit_code = EXIT_GENERIC_FAILURE

    def __init__(self, message: str = "No command provided", exit_code: int | None = None):
        super().__init__(message, exit_code)


class InvalidDurationError(InvalidUsageError):
    """Raised when a duration token is well-formed but too large to represent."""

    exit_code = EXIT_INVALID_USAGE


class ShellLaunchError(KepError):
    """Raised when the shell interpreter itself cannot be spawned.

    This is an environment problem rather than a command failure, so the
    program stops instead of caching or relaying anything.
    """

    exit_code = EXIT_SHELL_LAUNCH_FAILURE


class ConfigError(KepError):
    """Raised for invalid runtime settings."""

    exit_code = EXIT_GENERIC_FAILURE
