"""kep -- Cache any command output.

This package wraps an arbitrary shell command and stores its standard-output
bytes on disk, keyed by the exact command line. Running the same command again
within the time-to-live replays the stored bytes instead of re-executing.

Typical usage::

    kep curl google.com      # cached for 1h (default)
    kep 7d curl google.com   # cached for 7 days
    kep 30m echo hello       # cached for 30 minutes

Modules:
    app: Typer application and console-script entry point.
    duration: Parsing of ``<n>{s|m|h|d}`` TTL tokens.
    cache: Cache-key derivation and the file-per-command store.
    runner: Shell subprocess execution.
    models: Pydantic models shared across the package.
    config: Platform-aware cache and data directory resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr relay and diagnostics.
"""

__version__ = "0.1.0"
