"""Install directory selection.

Each major SDK line gets its own directory under the platform root
(/usr/share/dotnet/8, ~/.dotnet/8, C:\\Program Files\\dotnet\\8) unless
an override is set, in which case the override wins for the whole run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dotsetup.platform.profile import PlatformProfile

__all__ = ["INSTALL_DIR_ENV", "major_component", "select_directory"]

# Variable the installer script reads its target directory from
INSTALL_DIR_ENV = "DOTNET_INSTALL_DIR"


def major_component(version: str) -> str:
    """First dot-separated component of a specifier ("8.0.100" -> "8")."""
    return version.strip().split(".")[0]


def select_directory(
    major_version: str,
    profile: PlatformProfile,
    override: str | None = None,
) -> str:
    """Select the install directory for a major version.

    Args:
        major_version: Major component of the specifier (e.g. "8")
        profile: Platform profile supplying the root and separator
        override: Pre-set directory (DOTNET_INSTALL_DIR or --install-dir)

    Returns:
        The override unchanged if set, else "<default_root><sep><major>"
    """
    if override:
        return override
    return profile.join(profile.default_root, major_version)
