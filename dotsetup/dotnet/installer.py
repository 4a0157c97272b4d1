"""SDK installation: installer arguments, installer run, installed-version scan.

Flow for one specifier:
1. build_script_arguments(): directive + quality -> installer flags
2. build_command(): wrap the flags for the platform (pwsh -Command / direct exec)
3. run the script with DOTNET_INSTALL_DIR set to the selected directory
4. installed_version(): pick the newest <install_dir>/sdk/<version> matching the directive
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

import semantic_version

from dotsetup.core.result import Err, Ok, Result
from dotsetup.dotnet.errors import InstallationFailed, InstallError, VersionNotFound
from dotsetup.dotnet.install_dir import INSTALL_DIR_ENV
from dotsetup.dotnet.models import QUALITY_MIN_MAJOR, DirectiveKind, Quality, ResolvedDirective
from dotsetup.dotnet.scripts import find_powershell, make_executable
from dotsetup.dotnet.versions import clean_version, is_numeric_tag
from dotsetup.output.console import Style
from dotsetup.platform.process import ProcessError, run_streaming

if TYPE_CHECKING:
    from dotsetup.core.config import EnvSettings
    from dotsetup.dotnet.errors import ScriptNotFound
    from dotsetup.dotnet.scripts import ScriptLocator
    from dotsetup.output.console import ConsoleProtocol
    from dotsetup.platform.profile import PlatformProfile

__all__ = [
    "DotnetInstaller",
    "WINDOWS_HOST_OPTIONS",
    "build_command",
    "build_script_arguments",
    "installed_version",
]

WINDOWS_HOST_OPTIONS = (
    "-NoLogo",
    "-Sta",
    "-NoProfile",
    "-NonInteractive",
    "-ExecutionPolicy",
    "Unrestricted",
    "-Command",
)

Runner = Callable[[list[str], Mapping[str, str]], Result[None, ProcessError]]


def build_script_arguments(
    directive: ResolvedDirective,
    quality: Quality | None,
    profile: PlatformProfile,
    env: EnvSettings,
    console: ConsoleProtocol,
    *,
    requested: str,
) -> list[str]:
    """Build the installer script's own arguments.

    Args:
        directive: Resolved directive
        quality: Requested quality, or None
        profile: Platform profile (flag spelling, Windows-only proxy flags)
        env: Environment snapshot (proxy values)
        console: Receives the warning when quality has to be dropped
        requested: Specifier as given by the user, for messages

    Returns:
        Argument list, not including the script itself
    """
    args = [profile.flag("skip-non-versioned-files")]

    flag_name = directive.kind.flag_name
    if flag_name is not None:
        args.extend([profile.flag(flag_name), directive.value])

    if quality is not None:
        if directive.supports_quality:
            args.extend([profile.flag("quality"), str(quality)])
        else:
            console.warning(
                "'dotnet-quality' input can be used only with .NET SDK version in A.B, A.B.x, "
                f"A and A.x formats where the major tag is higher than {QUALITY_MIN_MAJOR - 1}. "
                f"You specified: {requested}. 'dotnet-quality' input is ignored."
            )

    if profile.is_windows:
        # Passed as single tokens: PowerShell re-parses everything after -Command
        if env.https_proxy is not None:
            args.append(f"{profile.flag('proxy-address')} {env.https_proxy}")
        if env.no_proxy is not None:
            args.append(f"{profile.flag('proxy-bypass-list')} {env.no_proxy}")

    return args


def build_command(
    script: Path,
    script_args: list[str],
    profile: PlatformProfile,
    powershell: Path | None = None,
) -> list[str]:
    """Wrap script arguments into the full command line.

    On Windows the script runs inside `<powershell> ... -Command & '<script>' <args>`;
    elsewhere the script is executed directly.
    """
    if profile.is_windows:
        if powershell is None:
            raise ValueError("a PowerShell host is required on Windows")
        escaped = str(script).replace("'", "''")
        return [str(powershell), *WINDOWS_HOST_OPTIONS, "&", f"'{escaped}'", *script_args]
    return [str(script), *script_args]


def _channel_bounds(channel: str) -> tuple[semantic_version.Version, semantic_version.Version] | None:
    """[A.B.0, A.(B+1).0-0) for channel "A.B", the npm range with prereleases included."""
    major, _, minor = channel.partition(".")
    if not (is_numeric_tag(major) and is_numeric_tag(minor)):
        return None
    return (
        semantic_version.Version(f"{int(major)}.{int(minor)}.0"),
        semantic_version.Version(f"{int(major)}.{int(minor) + 1}.0-0"),
    )


def _matches(directive: ResolvedDirective, version: semantic_version.Version) -> bool:
    if directive.kind == DirectiveKind.NONE or not directive.value:
        return True
    if directive.kind == DirectiveKind.EXACT:
        return version == semantic_version.Version(clean_version(directive.value))
    bounds = _channel_bounds(directive.value)
    if bounds is None:
        return semantic_version.NpmSpec(directive.value).match(version)
    lower, upper = bounds
    # 8.0.100-rc.1 belongs to channel 8.0, 8.0.0-preview.1 does not
    return lower <= version < upper


def installed_version(
    install_dir: str | Path, directive: ResolvedDirective
) -> Result[str, VersionNotFound]:
    """Find the installed SDK version for a directive.

    Lists <install_dir>/sdk and returns the highest directory name that
    satisfies the directive's value as a version range. Entries that are not
    semantic versions are ignored.

    Returns:
        Ok(version directory name), or Err(VersionNotFound)
    """
    sdk_dir = Path(install_dir) / "sdk"
    not_found = Err(VersionNotFound(version=directive.value, sdk_dir=sdk_dir))

    try:
        names = [p.name for p in sdk_dir.iterdir() if p.is_dir()]
    except OSError:
        return not_found

    best: tuple[semantic_version.Version, str] | None = None
    for name in names:
        try:
            version = semantic_version.Version(name)
        except ValueError:
            continue
        if not _matches(directive, version):
            continue
        if best is None or version > best[0]:
            best = (version, name)

    if best is None:
        return not_found
    return Ok(best[1])


class DotnetInstaller:
    """Runs the platform installer for a resolved directive.

    Usage:
        installer = DotnetInstaller(profile=profile, env=env, scripts=locator, console=console)
        result = installer.install(directive, Quality.GA, install_dir="/usr/share/dotnet/8", requested="8")
    """

    def __init__(
        self,
        *,
        profile: PlatformProfile,
        env: EnvSettings,
        scripts: ScriptLocator,
        console: ConsoleProtocol,
        runner: Runner = run_streaming,
        powershell_finder: Callable[[], Result[Path, ScriptNotFound]] = find_powershell,
        base_environ: Mapping[str, str] | None = None,
    ) -> None:
        self._profile = profile
        self._env = env
        self._scripts = scripts
        self._console = console
        self._runner = runner
        self._powershell_finder = powershell_finder
        self._base_environ = base_environ

    def _child_env(self, install_dir: str) -> dict[str, str]:
        base = os.environ if self._base_environ is None else self._base_environ
        env = dict(base)
        env[INSTALL_DIR_ENV] = install_dir
        return env

    def install(
        self,
        directive: ResolvedDirective,
        quality: Quality | None,
        *,
        install_dir: str,
        requested: str,
    ) -> Result[str, InstallError]:
        """Install the SDK described by directive into install_dir.

        Args:
            directive: Resolved directive
            quality: Optional quality filter (dropped with a warning if unsupported)
            install_dir: Directory selected by select_directory()
            requested: Specifier as given by the user, for messages

        Returns:
            Ok(installed version), or Err(ScriptNotFound | InstallationFailed | VersionNotFound)
        """
        script = self._scripts.locate(self._profile)
        if isinstance(script, Err):
            return script
        if script.value.downloaded:
            self._console.print(f"downloaded {script.value.path.name}", Style.DIM)

        script_args = build_script_arguments(
            directive,
            quality,
            self._profile,
            self._env,
            self._console,
            requested=requested,
        )

        if self._profile.is_windows:
            host = self._powershell_finder()
            if isinstance(host, Err):
                return host
            command = build_command(script.value.path, script_args, self._profile, host.value)
        else:
            make_executable(script.value.path)
            command = build_command(script.value.path, script_args, self._profile)

        self._console.print(" ".join(command), Style.DIM)
        ran = self._runner(command, self._child_env(install_dir))
        if isinstance(ran, Err):
            return Err(InstallationFailed(exit_code=ran.error.returncode, stderr=ran.error.stderr))

        return installed_version(install_dir, directive)
