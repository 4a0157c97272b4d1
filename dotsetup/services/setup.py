from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from dotsetup.ci.github import GitHubExporter
from dotsetup.core.result import Err, Ok, Result
from dotsetup.dotnet.errors import InvalidQuality
from dotsetup.dotnet.install_dir import major_component, select_directory
from dotsetup.dotnet.models import DirectiveKind, Quality, ResolvedDirective
from dotsetup.dotnet.versions import VersionResolver
from dotsetup.output.console import Style

if TYPE_CHECKING:
    from dotsetup.core.config import Config, EnvSettings
    from dotsetup.dotnet.http import HttpClient
    from dotsetup.dotnet.installer import DotnetInstaller
    from dotsetup.output.console import ConsoleProtocol
    from dotsetup.output.errors import AppError
    from dotsetup.platform.profile import PlatformProfile


DOTNET_VERSION_OUTPUT = "dotnet-version"


@dataclass(frozen=True, slots=True)
class SetupRequest:
    """What the user asked for.

    Attributes:
        versions: Version specifiers, installed in order
        quality: Raw quality name, or None
        install_dir: Explicit install directory (wins over DOTNET_INSTALL_DIR)
        export: Export DOTNET_ROOT / PATH / outputs for later CI steps
    """

    versions: tuple[str, ...]
    quality: str | None = None
    install_dir: str | None = None
    export: bool = True


@dataclass(frozen=True, slots=True)
class InstalledSdk:
    requested: str
    directive: ResolvedDirective
    version: str


@dataclass(frozen=True, slots=True)
class SetupOutcome:
    install_dir: str
    installed: tuple[InstalledSdk, ...]

    @property
    def dotnet_version(self) -> str | None:
        """Version installed for the last specifier."""
        return self.installed[-1].version if self.installed else None


def parse_quality(raw: str | None) -> Result[Quality | None, InvalidQuality]:
    if raw is None or not raw.strip():
        return Ok(None)
    quality = Quality.parse(raw)
    if quality is None:
        return Err(InvalidQuality(raw=raw, allowed=tuple(q.value for q in Quality)))
    return Ok(quality)


class SetupService:
    def __init__(
        self,
        *,
        profile: PlatformProfile,
        env: EnvSettings,
        config: Config,
        console: ConsoleProtocol,
        http: HttpClient,
        installer: DotnetInstaller,
        exporter: GitHubExporter | None = None,
    ) -> None:
        self._profile = profile
        self._env = env
        self._console = console
        self._installer = installer
        self._resolver = VersionResolver(http, config.index.url)
        self._exporter = exporter or GitHubExporter(env, console)

    def setup(self, request: SetupRequest) -> Result[SetupOutcome, AppError]:
        """Resolve and install every requested version, then export the results.

        The first selected install directory is kept for the remaining
        versions, so every SDK of one run lands in the same dotnet root.
        """
        quality = parse_quality(request.quality)
        if isinstance(quality, Err):
            return quality

        override = request.install_dir or self._env.install_dir
        installed: list[InstalledSdk] = []

        for raw in request.versions:
            requested = raw.strip()
            resolved = self._resolver.resolve(requested)
            if isinstance(resolved, Err):
                return resolved
            directive = resolved.value

            if directive.kind == DirectiveKind.NONE:
                self._console.warning(
                    f"'{requested}' does not name a major version; "
                    "the installer will pick its default (latest LTS) SDK"
                )

            install_dir = select_directory(major_component(requested), self._profile, override)
            override = install_dir

            self._console.header(f"Installing .NET SDK {requested}")
            self._console.print(f"directive: {directive}", Style.DIM)
            self._console.print(f"install dir: {install_dir}", Style.DIM)

            result = self._installer.install(
                directive,
                quality.value,
                install_dir=install_dir,
                requested=requested,
            )
            if isinstance(result, Err):
                return result

            installed.append(InstalledSdk(requested=requested, directive=directive, version=result.value))
            self._console.success(f".NET SDK {result.value} installed")

        if not installed or override is None:
            # No versions requested: nothing was selected, nothing to export
            return Ok(SetupOutcome(install_dir=override or "", installed=()))

        outcome = SetupOutcome(install_dir=override, installed=tuple(installed))
        if request.export:
            exported = self._export(outcome)
            if isinstance(exported, Err):
                return exported
        return Ok(outcome)

    def _export(self, outcome: SetupOutcome) -> Result[None, AppError]:
        result = self._exporter.add_path(outcome.install_dir)
        if isinstance(result, Err):
            return result

        result = self._exporter.export_variable("DOTNET_ROOT", outcome.install_dir)
        if isinstance(result, Err):
            return result

        if outcome.dotnet_version is not None:
            result = self._exporter.set_output(DOTNET_VERSION_OUTPUT, outcome.dotnet_version)
            if isinstance(result, Err):
                return result
        return Ok(None)
