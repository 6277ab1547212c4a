"""Directory resolution and runtime settings.

* **Cache root** -- ``<platform-cache-dir>/kep/``. The platform cache
  directory is ``$XDG_CACHE_HOME`` (default ``~/.cache``) on Linux/BSD,
  ``~/Library/Caches`` on macOS and ``%LOCALAPPDATA%`` on Windows. When it
  cannot be determined the root falls back to ``<tempdir>/kep/``.
* **Data directory** -- ``$XDG_DATA_HOME/kep/`` (or the platform
  equivalent), used only for crash logs.
* **Settings** -- :func:`load_settings` assembles a validated
  :class:`~kep.models.Settings` from the above and the environment.

Nothing here creates the cache root: the store creates it on first write, so
a read-only lookup leaves the filesystem untouched.
"""

from __future__ import annotations

import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from kep.exceptions import ConfigError
from kep.models import Settings

_APP_NAME = "kep"
_VERBOSE_ENV = "KEP_VERBOSE"


# --- Platform path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _home() -> Optional[Path]:
    """Return the user's home directory, or ``None`` if it cannot be determined.

    A relative ``$HOME`` counts as undeterminable.
    """
    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        return None
    return home if home.is_absolute() else None


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Optional[Path]:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME.

    Relative values are ignored, as the XDG Base Directory spec requires.
    """
    env_value = os.environ.get(env_var, "")
    if env_value and os.path.isabs(env_value):
        return Path(env_value)
    base = _home()
    if base is None:
        return None
    for seg in default_segments:
        base = base / seg
    return base


def get_platform_cache_dir() -> Optional[Path]:
    """Return the user-level cache directory for this platform.

    Returns:
        The directory path, or ``None`` if the platform gives no way to
        determine it.
    """
    if _is_xdg_platform():
        return _xdg_base("XDG_CACHE_HOME", (".cache",))
    system = platform.system()
    if system == "Darwin":
        home = _home()
        return home / "Library" / "Caches" if home is not None else None
    if system == "Windows":
        local = os.environ.get("LOCALAPPDATA", "")
        return Path(local) if local and os.path.isabs(local) else None
    return None


def get_cache_root() -> Path:
    """Return the directory that holds cache entries.

    ``<platform-cache-dir>/kep`` when the platform cache directory is known,
    otherwise ``<tempdir>/kep``. The directory is not created.
    """
    base = get_platform_cache_dir()
    if base is None:
        base = Path(tempfile.gettempdir())
    return base / _APP_NAME


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/kep/`` (default ``~/.local/share/kep/``).
    Elsewhere, or without a home directory: ``<cache-root>/../kep-data``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    base = _xdg_base("XDG_DATA_HOME", (".local", "share")) if _is_xdg_platform() else None
    if base is not None:
        path = base / _APP_NAME
    else:
        path = get_cache_root().parent / f"{_APP_NAME}-data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Settings ---


def _verbose_from_env() -> bool:
    """Read ``KEP_VERBOSE`` as a boolean, treating unrecognised values as off."""
    value = os.environ.get(_VERBOSE_ENV, "").strip()
    if not value:
        return False
    try:
        return TypeAdapter(bool).validate_python(value)
    except ValidationError:
        return False


def load_settings(cache_root: Optional[Path] = None) -> Settings:
    """Build the effective :class:`~kep.models.Settings` for this process.

    Args:
        cache_root: Explicit cache directory. Defaults to
            :func:`get_cache_root`.

    Returns:
        Validated settings.

    ``KEP_VERBOSE`` accepts ``1``/``0``, ``true``/``false``, ``yes``/``no``
    and ``on``/``off``. Any other value leaves diagnostics off.

    Raises:
        ConfigError: If an explicit *cache_root* is not absolute.
    """
    data: dict[str, object] = {
        "cache_root": cache_root if cache_root is not None else get_cache_root(),
        "verbose": _verbose_from_env(),
    }
    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc
