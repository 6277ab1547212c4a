"""File-per-command output caching for kep.

This package provides :func:`derive_key`, which maps a command-token
sequence to a fixed-width hexadecimal name, and :class:`CacheStore`, which
keeps one raw payload file per key under an injected root directory and
judges freshness from the file's modification time.

The store is consumed by :func:`kep.app.run`; its root comes from
:func:`kep.config.get_cache_root` unless a caller supplies another.
"""

from kep.cache.keys import derive_key
from kep.cache.store import CacheStore

__all__ = ["CacheStore", "derive_key"]
