"""Cache-key derivation from command tokens.

Keys are SHA-256 digests over the token count followed by each token as an
8-byte big-endian length prefix and its UTF-8 bytes. The length prefixes
make ``["echo", "a b"]`` and ``["echo", "a", "b"]`` hash differently even
though both join to the same command line.
"""

from __future__ import annotations

import hashlib
from typing import Sequence

KEY_LENGTH = hashlib.sha256().digest_size * 2


def _frame(value: int) -> bytes:
    return value.to_bytes(8, "big")


def derive_key(tokens: Sequence[str]) -> str:
    """Return the 64-character lowercase hex key for *tokens*.

    Args:
        tokens: Command tokens in invocation order.

    Returns:
        A digest that is identical across processes for identical
        sequences and differs for any change in order or boundaries.
    """
    digest = hashlib.sha256()
    digest.update(_frame(len(tokens)))
    for token in tokens:
        # surrogateescape round-trips undecodable argv bytes from the OS.
        raw = token.encode("utf-8", "surrogateescape")
        digest.update(_frame(len(raw)))
        digest.update(raw)
    return digest.hexdigest()
