"""Platform profile: everything OS-specific about running the installer.

A PlatformProfile is selected once at startup and passed explicitly to the
directory selector and the argument builder, so no other module branches on
the OS family.
"""

from __future__ import annotations

import ntpath
import posixpath
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from .detection import Platform
from .paths import home

if TYPE_CHECKING:
    from dotsetup.core.config import EnvSettings

__all__ = [
    "FlagStyle",
    "PlatformProfile",
    "profile_for",
    "LINUX_ROOT",
    "WINDOWS_FALLBACK_PROGRAM_FILES",
]

LINUX_ROOT = "/usr/share/dotnet"
WINDOWS_FALLBACK_PROGRAM_FILES = "C:\\Program Files"


class FlagStyle(Enum):
    """How installer flags are spelled."""

    POSIX = auto()  # --skip-non-versioned-files
    POWERSHELL = auto()  # -SkipNonVersionedFiles

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class PlatformProfile:
    """Immutable description of the installer on one OS family.

    Attributes:
        platform: OS family this profile was built for
        script_name: Installer script file name
        flag_style: Flag spelling used by the script
        path_separator: Separator used to join the install directory
        default_root: Install root used when no override is set
    """

    platform: Platform
    script_name: str
    flag_style: FlagStyle
    path_separator: str
    default_root: str

    @property
    def is_windows(self) -> bool:
        return self.platform == Platform.WINDOWS

    def flag(self, name: str) -> str:
        """Spell a kebab-case flag name for this platform.

        Example: flag("skip-non-versioned-files") -> "--skip-non-versioned-files"
        on Unix, "-SkipNonVersionedFiles" on Windows.
        """
        if self.flag_style == FlagStyle.POWERSHELL:
            return "-" + "".join(part.capitalize() for part in name.split("-"))
        return f"--{name}"

    def join(self, *parts: str) -> str:
        """Join path parts with this platform's separator."""
        if self.path_separator == "\\":
            return ntpath.join(*parts)
        return posixpath.join(*parts)


def profile_for(platform: Platform, env: EnvSettings) -> PlatformProfile:
    """Build the profile for an OS family.

    Anything that is neither Windows nor Linux gets the macOS layout
    (~/.dotnet), matching what the installer script does there.
    """
    if platform == Platform.WINDOWS:
        program_files = env.program_files or WINDOWS_FALLBACK_PROGRAM_FILES
        return PlatformProfile(
            platform=platform,
            script_name="dotnet-install.ps1",
            flag_style=FlagStyle.POWERSHELL,
            path_separator="\\",
            default_root=ntpath.join(program_files, "dotnet"),
        )

    if platform == Platform.LINUX:
        return PlatformProfile(
            platform=platform,
            script_name="dotnet-install.sh",
            flag_style=FlagStyle.POSIX,
            path_separator="/",
            default_root=LINUX_ROOT,
        )

    home_dir = env.home or str(home())
    return PlatformProfile(
        platform=platform,
        script_name="dotnet-install.sh",
        flag_style=FlagStyle.POSIX,
        path_separator="/",
        default_root=posixpath.join(home_dir, ".dotnet"),
    )
