"""Tests for dotnet/scripts.py - installer script lookup and download."""

from pathlib import Path
from unittest.mock import patch

from dotsetup.core.config import EnvSettings
from dotsetup.core.result import Err, Ok
from dotsetup.dotnet.errors import ScriptNotFound
from dotsetup.dotnet.http import HttpError, MockHttpClient
from dotsetup.dotnet.scripts import InstallerScript, ScriptLocator, find_powershell
from dotsetup.platform.detection import Platform
from dotsetup.platform.profile import profile_for

BASE_URL = "https://dot.net/v1"
LINUX = profile_for(Platform.LINUX, EnvSettings())
WINDOWS = profile_for(Platform.WINDOWS, EnvSettings())


class TestScriptUrl:
    def test_per_platform(self) -> None:
        locator = ScriptLocator(MockHttpClient(), Path("/cache"), BASE_URL)

        assert locator.script_url(LINUX) == "https://dot.net/v1/dotnet-install.sh"
        assert locator.script_url(WINDOWS) == "https://dot.net/v1/dotnet-install.ps1"

    def test_trailing_slash_stripped(self) -> None:
        locator = ScriptLocator(MockHttpClient(), Path("/cache"), "https://mirror.local/v1/")
        assert locator.script_url(LINUX) == "https://mirror.local/v1/dotnet-install.sh"


class TestLocate:
    def test_script_dir(self, tmp_path: Path) -> None:
        (tmp_path / "dotnet-install.sh").write_text("#!/bin/sh\n")
        http = MockHttpClient()
        locator = ScriptLocator(http, tmp_path / "cache", BASE_URL, script_dir=tmp_path)

        result = locator.locate(LINUX)

        assert result == Ok(InstallerScript(path=tmp_path / "dotnet-install.sh"))
        assert http.calls == []

    def test_script_dir_missing_script(self, tmp_path: Path) -> None:
        http = MockHttpClient()
        locator = ScriptLocator(http, tmp_path / "cache", BASE_URL, script_dir=tmp_path)

        result = locator.locate(WINDOWS)

        assert isinstance(result, Err)
        assert result.error.name == str(tmp_path / "dotnet-install.ps1")
        assert http.calls == []

    def test_downloads_into_cache(self, tmp_path: Path) -> None:
        http = MockHttpClient()
        http.set_download(f"{BASE_URL}/dotnet-install.sh", b"#!/bin/sh\necho install\n")
        cache = tmp_path / "cache"
        locator = ScriptLocator(http, cache, BASE_URL)

        result = locator.locate(LINUX)

        assert result == Ok(InstallerScript(path=cache / "dotnet-install.sh", downloaded=True))
        assert (cache / "dotnet-install.sh").read_bytes() == b"#!/bin/sh\necho install\n"

    def test_cached_copy_reused(self, tmp_path: Path) -> None:
        cache = tmp_path / "cache"
        cache.mkdir()
        (cache / "dotnet-install.sh").write_text("#!/bin/sh\n")
        http = MockHttpClient()
        locator = ScriptLocator(http, cache, BASE_URL)

        result = locator.locate(LINUX)

        assert result == Ok(InstallerScript(path=cache / "dotnet-install.sh", downloaded=False))
        assert http.calls == []

    def test_download_failure(self, tmp_path: Path) -> None:
        http = MockHttpClient()
        http.set_download(
            f"{BASE_URL}/dotnet-install.sh",
            HttpError(url=f"{BASE_URL}/dotnet-install.sh", status=503, message="unavailable"),
        )
        cache = tmp_path / "cache"
        locator = ScriptLocator(http, cache, BASE_URL)

        result = locator.locate(LINUX)

        assert isinstance(result, Err)
        assert isinstance(result.error, ScriptNotFound)
        assert result.error.name == "dotnet-install.sh"
        assert "download failed" in result.error.hint
        assert not (cache / "dotnet-install.sh").exists()


class TestFindPowershell:
    def test_prefers_pwsh(self) -> None:
        found = {"pwsh": "/usr/bin/pwsh", "powershell": "/usr/bin/powershell"}
        with patch("dotsetup.dotnet.scripts.shutil.which", side_effect=found.get):
            assert find_powershell() == Ok(Path("/usr/bin/pwsh"))

    def test_falls_back_to_windows_powershell(self) -> None:
        found = {"powershell": "C:/Windows/powershell.exe"}
        with patch("dotsetup.dotnet.scripts.shutil.which", side_effect=found.get):
            assert find_powershell() == Ok(Path("C:/Windows/powershell.exe"))

    def test_none_available(self) -> None:
        with patch("dotsetup.dotnet.scripts.shutil.which", return_value=None):
            result = find_powershell()

        assert isinstance(result, Err)
        assert result.error.name == "powershell"
