"""Version specifier resolution.

Turns the user's version specifier into a ResolvedDirective:

    "8.0.100"        -> EXACT   8.0.100
    "8.0", "8.0.x"   -> CHANNEL 8.0       (no network)
    "8", "8.x"       -> CHANNEL <latest 8.B from the release index>
    ">=8"            -> NONE              (valid range, but no usable major)

Validation follows npm-style semantic versioning: anything that is neither
a valid version nor a valid range is rejected with InvalidFormat.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import semantic_version

from dotsetup.core.config import DEFAULT_INDEX_URL
from dotsetup.core.result import Err, Ok, Result
from dotsetup.dotnet.errors import InvalidFormat, ResolveError
from dotsetup.dotnet.models import ResolvedDirective
from dotsetup.dotnet.release_index import latest_channel

if TYPE_CHECKING:
    from dotsetup.dotnet.http import HttpClient

__all__ = [
    "VersionResolver",
    "clean_version",
    "is_numeric_tag",
    "is_valid_range",
    "is_valid_version",
]

_NUMERIC_RE = re.compile(r"^\d+$", re.ASCII)


def clean_version(raw: str) -> str:
    """Drop one leading "v" or "=", as npm does ("v8.0.100" -> "8.0.100")."""
    return raw[1:] if raw[:1] in ("v", "=") else raw


def is_valid_version(raw: str) -> bool:
    """True for a complete semantic version (A.B.C, optionally with prerelease)."""
    try:
        semantic_version.Version(clean_version(raw))
    except ValueError:
        return False
    return True


def is_valid_range(raw: str) -> bool:
    """True for anything npm would accept as a version range ("8", "8.x", "^8.0.1", ...)."""
    try:
        semantic_version.NpmSpec(raw)
    except ValueError:
        return False
    return True


def is_numeric_tag(tag: str | None) -> bool:
    return tag is not None and _NUMERIC_RE.match(tag) is not None


class VersionResolver:
    """Resolves version specifiers into installer directives.

    Usage:
        resolver = VersionResolver(http)
        result = resolver.resolve("8.x")
        if is_ok(result):
            print(result.value.value)  # e.g. "8.0"
    """

    def __init__(self, http: HttpClient, index_url: str = DEFAULT_INDEX_URL) -> None:
        """Initialize resolver.

        Args:
            http: HTTP client used for the release index (only for bare majors)
            index_url: Release index URL
        """
        self._http = http
        self._index_url = index_url

    @property
    def index_url(self) -> str:
        return self._index_url

    def resolve(self, raw: str) -> Result[ResolvedDirective, ResolveError]:
        """Resolve a version specifier.

        Args:
            raw: Specifier as typed by the user (surrounding whitespace ignored)

        Returns:
            Ok(ResolvedDirective), or Err(InvalidFormat | ChannelNotFound | IndexFetchFailed)
        """
        version = raw.strip()
        if not version or not is_valid_range(version):
            return Err(InvalidFormat(raw=version))

        if is_valid_version(version):
            return Ok(ResolvedDirective.exact(version))

        parts = version.split(".")
        major = parts[0]
        minor = parts[1] if len(parts) > 1 else None

        if not is_numeric_tag(major):
            return Ok(ResolvedDirective.none())

        if is_numeric_tag(minor):
            return Ok(ResolvedDirective.channel(major, f"{major}.{minor}"))

        # Bare major ("8") or wildcard minor ("8.x"): ask the release index
        channel = latest_channel(self._http, self._index_url, parts[:2])
        if isinstance(channel, Err):
            return channel
        return Ok(ResolvedDirective.channel(major, channel.value))
