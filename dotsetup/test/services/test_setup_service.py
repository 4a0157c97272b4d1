"""Tests for dotsetup.services.setup module."""

from __future__ import annotations

from pathlib import Path

from dotsetup.core.config import Config, EnvSettings, IndexConfig
from dotsetup.core.result import Err, Ok, Result
from dotsetup.dotnet.errors import (
    ChannelNotFound,
    InstallationFailed,
    InstallError,
    InvalidFormat,
    InvalidQuality,
)
from dotsetup.dotnet.http import MockHttpClient
from dotsetup.dotnet.models import DirectiveKind, Quality, ResolvedDirective
from dotsetup.output.console import MockConsole
from dotsetup.platform.detection import Platform
from dotsetup.platform.profile import profile_for
from dotsetup.services.setup import SetupRequest, SetupService, parse_quality

INDEX_URL = "https://example.test/releases-index.json"
INDEX = {
    "releases-index": [
        {"channel-version": "9.0"},
        {"channel-version": "8.0"},
        {"channel-version": "6.0"},
    ]
}


class FakeInstaller:
    """Stands in for DotnetInstaller; answers with a fixed version per channel."""

    def __init__(self, versions: dict[str, str] | None = None, fail: InstallError | None = None) -> None:
        self._versions = versions or {}
        self._fail = fail
        self.calls: list[tuple[ResolvedDirective, Quality | None, str]] = []

    def install(
        self,
        directive: ResolvedDirective,
        quality: Quality | None,
        *,
        install_dir: str,
        requested: str,
    ) -> Result[str, InstallError]:
        self.calls.append((directive, quality, install_dir))
        if self._fail is not None:
            return Err(self._fail)
        return Ok(self._versions.get(directive.value, directive.value))


def _service(
    installer: FakeInstaller,
    *,
    env: EnvSettings | None = None,
    console: MockConsole | None = None,
) -> SetupService:
    http = MockHttpClient()
    http.set_json(INDEX_URL, INDEX)
    env = env or EnvSettings()
    return SetupService(
        profile=profile_for(Platform.LINUX, env),
        env=env,
        config=Config(index=IndexConfig(url=INDEX_URL)),
        console=console or MockConsole(),
        http=http,
        installer=installer,  # type: ignore[arg-type]
    )


# =============================================================================
# parse_quality
# =============================================================================


class TestParseQuality:
    def test_none_and_blank(self) -> None:
        assert parse_quality(None) == Ok(None)
        assert parse_quality("  ") == Ok(None)

    def test_valid(self) -> None:
        assert parse_quality("GA") == Ok(Quality.GA)

    def test_invalid(self) -> None:
        result = parse_quality("nightly")

        assert isinstance(result, Err)
        assert result.error.raw == "nightly"
        assert "preview" in result.error.allowed


# =============================================================================
# setup
# =============================================================================


class TestSetup:
    def test_single_channel(self) -> None:
        installer = FakeInstaller({"8.0": "8.0.404"})
        console = MockConsole()
        service = _service(installer, console=console)

        result = service.setup(SetupRequest(versions=("8.0",), quality="ga"))

        assert isinstance(result, Ok)
        assert result.value.install_dir == "/usr/share/dotnet/8"
        assert result.value.dotnet_version == "8.0.404"
        directive, quality, install_dir = installer.calls[0]
        assert directive == ResolvedDirective(DirectiveKind.CHANNEL, "8.0", True)
        assert quality == Quality.GA
        assert install_dir == "/usr/share/dotnet/8"
        assert console.find("OK .NET SDK 8.0.404 installed")

    def test_major_only_uses_index(self) -> None:
        installer = FakeInstaller({"9.0": "9.0.101"})

        result = _service(installer).setup(SetupRequest(versions=("9",)))

        assert isinstance(result, Ok)
        assert installer.calls[0][0].value == "9.0"

    def test_first_directory_pins_later_versions(self) -> None:
        installer = FakeInstaller({"6.0": "6.0.428", "8.0": "8.0.404"})

        result = _service(installer).setup(SetupRequest(versions=("6.0", "8.0")))

        assert isinstance(result, Ok)
        assert [c[2] for c in installer.calls] == ["/usr/share/dotnet/6", "/usr/share/dotnet/6"]
        assert result.value.install_dir == "/usr/share/dotnet/6"
        assert result.value.dotnet_version == "8.0.404"
        assert [s.version for s in result.value.installed] == ["6.0.428", "8.0.404"]

    def test_explicit_install_dir_wins(self) -> None:
        installer = FakeInstaller()
        env = EnvSettings(install_dir="/from/env")

        _service(installer, env=env).setup(SetupRequest(versions=("8.0",), install_dir="/explicit"))

        assert installer.calls[0][2] == "/explicit"

    def test_env_install_dir(self) -> None:
        installer = FakeInstaller()
        env = EnvSettings(install_dir="/from/env")

        _service(installer, env=env).setup(SetupRequest(versions=("8.0",)))

        assert installer.calls[0][2] == "/from/env"

    def test_none_directive_warns(self) -> None:
        console = MockConsole()
        installer = FakeInstaller({"": "8.0.404"})

        result = _service(installer, console=console).setup(SetupRequest(versions=("*",)))

        assert isinstance(result, Ok)
        assert installer.calls[0][0].kind == DirectiveKind.NONE
        assert console.has_warning()

    def test_prefixed_exact_version(self) -> None:
        installer = FakeInstaller({"v8.0.100": "8.0.100"})

        result = _service(installer).setup(SetupRequest(versions=("v8.0.100",)))

        assert isinstance(result, Ok)
        assert installer.calls[0][0] == ResolvedDirective(DirectiveKind.EXACT, "v8.0.100", False)
        assert result.value.dotnet_version == "8.0.100"

    def test_invalid_quality_stops_before_install(self) -> None:
        installer = FakeInstaller()

        result = _service(installer).setup(SetupRequest(versions=("8.0",), quality="nightly"))

        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidQuality)
        assert installer.calls == []

    def test_invalid_version(self) -> None:
        installer = FakeInstaller()

        result = _service(installer).setup(SetupRequest(versions=("latest",)))

        assert result == Err(InvalidFormat(raw="latest"))
        assert installer.calls == []

    def test_unknown_channel(self) -> None:
        result = _service(FakeInstaller()).setup(SetupRequest(versions=("42",)))

        assert result == Err(ChannelNotFound(version="42", index_url=INDEX_URL))

    def test_install_failure_stops_run(self) -> None:
        failure = InstallationFailed(exit_code=1, stderr="")
        installer = FakeInstaller(fail=failure)

        result = _service(installer).setup(SetupRequest(versions=("6.0", "8.0")))

        assert result == Err(failure)
        assert len(installer.calls) == 1

    def test_no_versions(self) -> None:
        installer = FakeInstaller()

        result = _service(installer).setup(SetupRequest(versions=()))

        assert isinstance(result, Ok)
        assert result.value.installed == ()
        assert result.value.dotnet_version is None


class TestExport:
    def test_writes_github_files(self, tmp_path: Path) -> None:
        env = EnvSettings(
            github_env=tmp_path / "env",
            github_path=tmp_path / "path",
            github_output=tmp_path / "output",
        )

        result = _service(FakeInstaller({"8.0": "8.0.404"}), env=env).setup(
            SetupRequest(versions=("8.0",))
        )

        assert isinstance(result, Ok)
        assert (tmp_path / "path").read_text() == "/usr/share/dotnet/8\n"
        assert "DOTNET_ROOT<<" in (tmp_path / "env").read_text()
        output = (tmp_path / "output").read_text()
        assert output.startswith("dotnet-version<<")
        assert "\n8.0.404\n" in output

    def test_no_export(self, tmp_path: Path) -> None:
        env = EnvSettings(github_path=tmp_path / "path")

        _service(FakeInstaller(), env=env).setup(SetupRequest(versions=("8.0",), export=False))

        assert not (tmp_path / "path").exists()

    def test_export_failure(self, tmp_path: Path) -> None:
        env = EnvSettings(github_path=tmp_path / "missing" / "path")

        result = _service(FakeInstaller(), env=env).setup(SetupRequest(versions=("8.0",)))

        assert isinstance(result, Err)
        assert result.error.path == tmp_path / "missing" / "path"  # type: ignore[union-attr]

