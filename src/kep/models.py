"""Canonical Pydantic models shared across kep modules.

* :class:`Invocation` -- the command tokens and TTL for one run.
* :class:`CommandResult` -- what the shell subprocess produced.
* :class:`Settings` -- runtime settings resolved by :mod:`kep.config`.

All models use Pydantic v2. ``Invocation`` and ``CommandResult`` are frozen
so that nothing downstream can alter what was parsed or captured.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Invocation(BaseModel):
    """The user-supplied command tokens after any leading duration is removed.

    The token tuple is both the cache-key input and, joined with single
    spaces, the string handed to the shell.

    Example::

        Invocation(tokens=("echo", "hello"), ttl_seconds=1800).command
        # 'echo hello'
    """

    model_config = ConfigDict(frozen=True)

    tokens: tuple[str, ...] = Field(min_length=1, description="Command tokens, in order")
    ttl_seconds: int = Field(ge=0, description="Maximum age of a servable cache entry")

    @property
    def command(self) -> str:
        """The shell command line: tokens joined with single spaces."""
        return " ".join(self.tokens)


class CommandResult(BaseModel):
    """Captured output streams and exit status of one shell execution."""

    model_config = ConfigDict(frozen=True)

    stdout: bytes = b""
    stderr: bytes = b""
    exit_code: int = Field(ge=0, description="Exit status, 1 when indeterminate")


class Settings(BaseModel):
    """Runtime settings for a single kep process.

    Built by :func:`kep.config.load_settings`. Tests construct it directly
    to point the cache at an isolated directory.
    """

    cache_root: Path = Field(description="Directory holding one file per cached command")
    default_ttl_seconds: int = Field(default=3600, ge=0)
    shell: str = Field(default="sh", description="Interpreter invoked as `<shell> -c <command>`")
    verbose: bool = Field(default=False, description="Emit debug diagnostics on stderr")

    @field_validator("cache_root")
    @classmethod
    def _absolute_root(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError(f"cache root must be an absolute path, got {value}")
        return value
