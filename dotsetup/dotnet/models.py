"""Value types shared by the resolver and the installer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

__all__ = [
    "DirectiveKind",
    "Quality",
    "ReleaseIndexEntry",
    "ResolvedDirective",
    "QUALITY_MIN_MAJOR",
]

# Quality filtering only exists for channel installs from .NET 6 on
QUALITY_MIN_MAJOR = 6


class DirectiveKind(Enum):
    """What the installer is asked to install."""

    EXACT = auto()  # --version A.B.C
    CHANNEL = auto()  # --channel A.B
    NONE = auto()  # no version flag at all, installer picks its default

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def flag_name(self) -> str | None:
        """Kebab-case installer flag for this kind (None for NONE)."""
        return {
            DirectiveKind.EXACT: "version",
            DirectiveKind.CHANNEL: "channel",
            DirectiveKind.NONE: None,
        }[self]


@dataclass(frozen=True, slots=True)
class ResolvedDirective:
    """Installer-ready form of a version specifier.

    Attributes:
        kind: EXACT, CHANNEL or NONE
        value: Exact version ("8.0.100") or channel ("8.0"); empty for NONE
        supports_quality: True iff CHANNEL with major >= 6
    """

    kind: DirectiveKind
    value: str
    supports_quality: bool = False

    @classmethod
    def exact(cls, version: str) -> ResolvedDirective:
        return cls(DirectiveKind.EXACT, version, False)

    @classmethod
    def channel(cls, major: str, channel: str) -> ResolvedDirective:
        return cls(DirectiveKind.CHANNEL, channel, int(major) >= QUALITY_MIN_MAJOR)

    @classmethod
    def none(cls) -> ResolvedDirective:
        return cls(DirectiveKind.NONE, "", False)

    def __str__(self) -> str:
        if self.kind == DirectiveKind.NONE:
            return "none"
        return f"{self.kind} {self.value}"


class Quality(Enum):
    """Build quality within a channel, as accepted by the installer."""

    DAILY = "daily"
    SIGNED = "signed"
    VALIDATED = "validated"
    PREVIEW = "preview"
    GA = "ga"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: str) -> Quality | None:
        """Parse a quality name (case-insensitive), None if unknown."""
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class ReleaseIndexEntry:
    """One entry of the release index.

    Attributes:
        channel_version: "A.B" channel (e.g. "8.0")
    """

    channel_version: str

    @property
    def major(self) -> str:
        return self.channel_version.split(".")[0]
