"""Release index lookup.

The release index lists the published .NET channels, newest first:

    {"releases-index": [{"channel-version": "9.0", ...}, {"channel-version": "8.0", ...}]}

It is only consulted to expand a bare major ("8", "8.x") into its channel.
The index is fetched on every lookup, nothing is cached.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dotsetup.core.result import Err, Ok, Result
from dotsetup.core.structured import as_obj_list, as_str_dict, get_str
from dotsetup.dotnet.errors import ChannelNotFound, IndexFetchFailed, ResolveError
from dotsetup.dotnet.models import ReleaseIndexEntry

if TYPE_CHECKING:
    from dotsetup.dotnet.http import HttpClient

__all__ = ["fetch_release_index", "find_channel", "latest_channel"]


def fetch_release_index(
    http: HttpClient, url: str
) -> Result[list[ReleaseIndexEntry], IndexFetchFailed]:
    """Fetch and parse the release index.

    Entries without a string channel-version are skipped.

    Args:
        http: HTTP client (carries the retry policy)
        url: Release index URL

    Returns:
        Ok with entries in index order, or Err(IndexFetchFailed)
    """
    result = http.get_json(url)
    if isinstance(result, Err):
        return Err(IndexFetchFailed(url=url, reason=str(result.error)))

    releases = as_obj_list(result.value.get("releases-index"))
    if releases is None:
        return Err(IndexFetchFailed(url=url, reason="missing 'releases-index' list"))

    entries: list[ReleaseIndexEntry] = []
    for item in releases:
        data = as_str_dict(item)
        if data is None:
            continue
        channel = get_str(data, "channel-version")
        if channel is None:
            continue
        entries.append(ReleaseIndexEntry(channel_version=channel))
    return Ok(entries)


def find_channel(entries: list[ReleaseIndexEntry], major: str) -> ReleaseIndexEntry | None:
    """Return the first entry whose major component equals major."""
    for entry in entries:
        if entry.major == major:
            return entry
    return None


def latest_channel(
    http: HttpClient, url: str, version_parts: list[str]
) -> Result[str, ResolveError]:
    """Resolve a bare major to its latest "A.B" channel.

    Args:
        http: HTTP client
        url: Release index URL
        version_parts: The specifier split on "." (["8"] or ["8", "x"])

    Returns:
        Ok("A.B"), Err(ChannelNotFound) when no channel has that major,
        or Err(IndexFetchFailed)
    """
    fetched = fetch_release_index(http, url)
    if isinstance(fetched, Err):
        return fetched

    entry = find_channel(fetched.value, version_parts[0])
    if entry is None:
        return Err(ChannelNotFound(version=".".join(version_parts), index_url=url))
    return Ok(entry.channel_version)
