"""Operating system detection.

Only the OS family matters here: it selects the installer script, the flag
style and the default install root (see profile.py).
"""

from __future__ import annotations

import sys as _sys
from enum import Enum, auto
from functools import lru_cache

__all__ = [
    "Platform",
    "detect_platform",
    "is_windows",
    "is_macos",
]


class Platform(Enum):
    """OS family of the runner."""

    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def from_sys_platform(cls, value: str) -> Platform:
        """Map a `sys.platform` string to a Platform.

        Cygwin and MSYS count as Windows: the PowerShell installer is used there.
        """
        system = value.lower()
        if system.startswith("linux"):
            return cls.LINUX
        if system.startswith("darwin"):
            return cls.MACOS
        if system.startswith(("win32", "cygwin", "msys")):
            return cls.WINDOWS
        return cls.UNKNOWN


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current OS family (cached)."""
    # NOTE: avoid platform.system() on Windows, it may query WMI.
    return Platform.from_sys_platform(_sys.platform)


def is_windows() -> bool:
    return detect_platform() == Platform.WINDOWS


def is_macos() -> bool:
    return detect_platform() == Platform.MACOS
