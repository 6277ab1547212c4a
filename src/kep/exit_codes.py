"""Numeric process exit codes used by kep itself.

When a command is actually executed, kep exits with that command's own exit
code instead; the constants here only cover kep's own outcomes.

Example::

    $ kep 1h
    Error: No command provided
    $ echo $?
    1   # EXIT_GENERIC_FAILURE
"""

EXIT_SUCCESS = 0
"""Help was shown or a cached payload was served."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred, or the command's exit status was indeterminate."""

EXIT_INVALID_USAGE = 2
"""The command line could not be interpreted (e.g. an out-of-range duration)."""

EXIT_SHELL_LAUNCH_FAILURE = 127
"""The shell interpreter could not be started."""

EXIT_INTERRUPTED = 130
"""Interrupted by SIGINT (Ctrl-C)."""
