from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

SUPPORTED_SYNTAX = "A.B.C, A.B, A.B.x, A, A.x"


@dataclass(frozen=True, slots=True)
class InvalidFormat:
    raw: str

    @property
    def message(self) -> str:
        return (
            f"'dotnet-version' was supplied in invalid format: {self.raw}! "
            f"Supported syntax: {SUPPORTED_SYNTAX}"
        )


@dataclass(frozen=True, slots=True)
class InvalidQuality:
    raw: str
    allowed: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"invalid 'dotnet-quality': {self.raw!r} (expected one of: {', '.join(self.allowed)})"


@dataclass(frozen=True, slots=True)
class ChannelNotFound:
    version: str
    index_url: str

    @property
    def message(self) -> str:
        return f"Could not find info for version {self.version} at {self.index_url}"


@dataclass(frozen=True, slots=True)
class IndexFetchFailed:
    url: str
    reason: str

    @property
    def message(self) -> str:
        return f"failed to fetch release index {self.url}: {self.reason}"


@dataclass(frozen=True, slots=True)
class ScriptNotFound:
    name: str
    hint: str

    @property
    def message(self) -> str:
        return f"installer not available: {self.name}"


@dataclass(frozen=True, slots=True)
class InstallationFailed:
    exit_code: int
    stderr: str

    @property
    def message(self) -> str:
        return f"Failed to install dotnet, exit code: {self.exit_code}. {self.stderr}".rstrip()


@dataclass(frozen=True, slots=True)
class VersionNotFound:
    version: str
    sdk_dir: Path

    @property
    def message(self) -> str:
        wanted = self.version or "any version"
        return f"no installed SDK matching {wanted} in {self.sdk_dir}"


ResolveError = InvalidFormat | ChannelNotFound | IndexFetchFailed

InstallError = ScriptNotFound | InstallationFailed | VersionNotFound

SetupError = ResolveError | InstallError | InvalidQuality
