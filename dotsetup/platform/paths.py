"""Platform-aware user directories.

The installer scripts are downloaded once into the user cache directory
when no local script directory is configured.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from .detection import is_macos, is_windows

__all__ = [
    "home",
    "user_cache_dir",
    "clear_caches",
]

APP_NAME = "dotsetup"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get user's home directory.

    Uses USERPROFILE on Windows, HOME on Unix.
    Falls back to Path.home() which handles edge cases.
    """
    if is_windows():
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile)
    else:
        home_env = os.environ.get("HOME")
        if home_env:
            return Path(home_env)

    return Path.home()


@lru_cache(maxsize=1)
def user_cache_dir() -> Path:
    """Get the user-level cache directory.

    Location: %LOCALAPPDATA%/dotsetup (Windows), ~/Library/Caches/dotsetup
    (macOS), $XDG_CACHE_HOME/dotsetup or ~/.cache/dotsetup (Linux).
    """
    if is_windows():
        local_app_data = os.environ.get("LOCALAPPDATA")
        if local_app_data:
            return Path(local_app_data) / APP_NAME
        return home() / "AppData" / "Local" / APP_NAME

    if is_macos():
        return home() / "Library" / "Caches" / APP_NAME

    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache) / APP_NAME
    return home() / ".cache" / APP_NAME


def clear_caches() -> None:
    """Clear all cached paths.

    Useful for testing when environment variables change.
    """
    home.cache_clear()
    user_cache_dir.cache_clear()
