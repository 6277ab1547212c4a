"""Parsing of human-readable TTL tokens such as ``30m`` or ``7d``.

A token is a duration only if it is one or more ASCII digits followed by a
single unit character. Anything else is "not a duration" and the caller
treats it as the first word of the command.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Optional, Sequence

from kep.exceptions import InvalidDurationError

DEFAULT_TTL_SECONDS = 3600

UNIT_SECONDS: dict[str, int] = {
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
}

# Whole days only, so the value always converts back into a timedelta.
MAX_DURATION_SECONDS = timedelta.max.days * UNIT_SECONDS["d"]


def parse_duration(token: str) -> Optional[int]:
    """Convert a ``<n><unit>`` token into seconds.

    Args:
        token: Candidate duration such as ``"90s"`` or ``"2h"``.

    Returns:
        The span in seconds, or ``None`` when *token* is not a duration.

    Raises:
        InvalidDurationError: If *token* is a well-formed duration whose
            value exceeds :data:`MAX_DURATION_SECONDS`.
    """
    if len(token) < 2:
        return None
    number, unit = token[:-1], token[-1]
    multiplier = UNIT_SECONDS.get(unit)
    if multiplier is None:
        return None
    # str.isdigit() accepts non-ASCII digits, which int() would also take.
    if not (number.isascii() and number.isdigit()):
        return None

    try:
        seconds = int(number) * multiplier
    except ValueError as exc:
        # Exceeds the interpreter's integer string conversion limit.
        raise InvalidDurationError(f"Duration '{token}' is too large") from exc
    if seconds > MAX_DURATION_SECONDS:
        raise InvalidDurationError(
            f"Duration '{token}' is too large (maximum is {MAX_DURATION_SECONDS}s)"
        )
    return seconds


def split_duration(
    args: Sequence[str], default_ttl: int = DEFAULT_TTL_SECONDS
) -> tuple[int, list[str]]:
    """Separate an optional leading duration token from the command tokens.

    Returns:
        ``(ttl_seconds, command_tokens)``. When the first token is not a
        duration, the TTL is *default_ttl* and every token belongs to the
        command.
    """
    if args:
        seconds = parse_duration(args[0])
        if seconds is not None:
            return seconds, list(args[1:])
    return default_ttl, list(args)
