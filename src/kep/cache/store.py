"""Disk storage of raw command output, one file per cache key.

Each entry is a regular file named by its key whose content is exactly the
captured stdout bytes. There is no metadata: the file's modification time is
the only freshness signal, so an entry is served while
``now - mtime <= ttl``.

Reads and writes never raise. A missing, stale or unreadable entry is a
miss; a failed write is reported as a debug diagnostic and otherwise
ignored, because the live output has already been captured.

See Also:
    :func:`kep.cache.keys.derive_key` -- produces the entry names.
"""

from __future__ import annotations

import os
import tempfile
import time
from pathlib import Path
from typing import Callable, Optional

from kep.output import debug


class CacheStore:
    """Directory of cached stdout payloads keyed by command hash.

    Args:
        root: Directory that holds the entries. Created on first write.
        now: Clock returning seconds since the epoch, injectable for tests.

    Example::

        from kep.cache import CacheStore, derive_key

        store = CacheStore(Path("/tmp/kep-test"))
        key = derive_key(["echo", "hello"])
        store.write(key, b"hello\\n")
        store.read(key, ttl_seconds=60)  # b"hello\\n"
    """

    def __init__(self, root: str | Path, now: Callable[[], float] = time.time) -> None:
        self._root = Path(root)
        self._now = now

    @property
    def root(self) -> Path:
        """The directory holding the entries."""
        return self._root

    def path_for(self, key: str) -> Path:
        """Return the entry path for *key*."""
        return self._root / key

    def read(self, key: str, ttl_seconds: float) -> Optional[bytes]:
        """Return the payload for *key* if it exists and is fresh.

        Args:
            key: Cache key from :func:`~kep.cache.keys.derive_key`.
            ttl_seconds: Maximum age, in seconds, of a servable entry.

        Returns:
            The full entry content, or ``None`` on a miss: no entry,
            unreadable metadata, an mtime in the future, an entry older than
            *ttl_seconds*, or any I/O error while reading.
        """
        path = self.path_for(key)
        try:
            mtime = path.stat().st_mtime
        except OSError:
            return None

        age = self._now() - mtime
        if age < 0:
            debug(f"Ignoring cache entry {key} with a modification time in the future")
            return None
        if age > ttl_seconds:
            debug(f"Cache entry {key} is stale ({age:.0f}s old, ttl {ttl_seconds}s)")
            return None

        try:
            return path.read_bytes()
        except OSError as exc:
            debug(f"Cannot read cache entry {path}: {exc}")
            return None

    def write(self, key: str, data: bytes) -> bool:
        """Store *data* as the entry for *key*, replacing any previous payload.

        The bytes go to a temp file in the root directory which is then
        renamed over the entry, so readers never observe a partial payload.

        Returns:
            ``True`` if the entry was written, ``False`` if the write failed
            (the failure is swallowed).
        """
        path = self.path_for(key)
        tmp_path: Optional[str] = None
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self._root, prefix=f".{key}.", suffix=".tmp")
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as exc:
            debug(f"Cannot write cache entry {path}: {exc}")
            return False
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
        return True
