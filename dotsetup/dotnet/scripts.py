"""Installer script resolution.

The installer scripts (dotnet-install.sh / dotnet-install.ps1) are not part
of this package. They are looked up in a configured directory first and
otherwise downloaded once from the official location into the user cache.
"""

from __future__ import annotations

import shutil
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from dotsetup.core.result import Err, Ok, Result
from dotsetup.dotnet.errors import ScriptNotFound

if TYPE_CHECKING:
    from dotsetup.dotnet.http import HttpClient
    from dotsetup.platform.profile import PlatformProfile

__all__ = [
    "InstallerScript",
    "POWERSHELL_HOSTS",
    "ScriptLocator",
    "find_powershell",
]

POWERSHELL_HOSTS = ("pwsh", "powershell")


@dataclass(frozen=True, slots=True)
class InstallerScript:
    """A resolved installer script.

    Attributes:
        path: Script location on disk
        downloaded: True if fetched into the cache during this run
    """

    path: Path
    downloaded: bool = False


def find_powershell() -> Result[Path, ScriptNotFound]:
    """Find a PowerShell host, preferring PowerShell 7 (pwsh)."""
    for name in POWERSHELL_HOSTS:
        found = shutil.which(name)
        if found:
            return Ok(Path(found))
    return Err(
        ScriptNotFound(
            name="powershell",
            hint="Install PowerShell 7 (pwsh) or make powershell.exe available on PATH",
        )
    )


def make_executable(path: Path) -> None:
    """Add execute permission for everyone (chmod a+x)."""
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


class ScriptLocator:
    """Locates (or downloads) the installer script for a platform.

    Usage:
        locator = ScriptLocator(http, cache_dir, base_url, script_dir=None)
        result = locator.locate(profile)
    """

    def __init__(
        self,
        http: HttpClient,
        cache_dir: Path,
        base_url: str,
        *,
        script_dir: Path | None = None,
    ) -> None:
        self._http = http
        self._cache_dir = cache_dir
        self._base_url = base_url.rstrip("/")
        self._script_dir = script_dir

    def script_url(self, profile: PlatformProfile) -> str:
        return f"{self._base_url}/{profile.script_name}"

    def locate(self, profile: PlatformProfile) -> Result[InstallerScript, ScriptNotFound]:
        """Find the installer script for profile.

        Order: configured script_dir, then the cache, then a fresh download.

        Args:
            profile: Platform profile (selects .sh or .ps1)

        Returns:
            Ok(InstallerScript), or Err(ScriptNotFound)
        """
        if self._script_dir is not None:
            local = self._script_dir / profile.script_name
            if local.is_file():
                return Ok(InstallerScript(path=local))
            return Err(
                ScriptNotFound(
                    name=str(local),
                    hint="Check --script-dir / [install] script_dir",
                )
            )

        cached = self._cache_dir / profile.script_name
        if cached.is_file():
            return Ok(InstallerScript(path=cached))

        url = self.script_url(profile)
        result = self._http.download(url, cached)
        if isinstance(result, Err):
            if cached.exists():
                cached.unlink()
            return Err(
                ScriptNotFound(
                    name=profile.script_name,
                    hint=f"download failed: {result.error}",
                )
            )
        return Ok(InstallerScript(path=result.value, downloaded=True))
