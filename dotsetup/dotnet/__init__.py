""".NET SDK resolution and installation.

- Version specifier resolution (versions.py, release_index.py)
- Install directory selection (install_dir.py)
- Installer script lookup (scripts.py)
- Installer run and installed-version scan (installer.py)
- HTTP client with retry policy (http.py)
"""

from dotsetup.dotnet.errors import (
    ChannelNotFound,
    IndexFetchFailed,
    InstallationFailed,
    InstallError,
    InvalidFormat,
    InvalidQuality,
    ResolveError,
    ScriptNotFound,
    SetupError,
    VersionNotFound,
)
from dotsetup.dotnet.http import (
    HttpClient,
    HttpError,
    MockHttpClient,
    RealHttpClient,
    RetryPolicy,
)
from dotsetup.dotnet.install_dir import major_component, select_directory
from dotsetup.dotnet.installer import DotnetInstaller, installed_version
from dotsetup.dotnet.models import DirectiveKind, Quality, ReleaseIndexEntry, ResolvedDirective
from dotsetup.dotnet.scripts import ScriptLocator
from dotsetup.dotnet.versions import VersionResolver

__all__ = [
    # Errors
    "ChannelNotFound",
    "IndexFetchFailed",
    "InstallationFailed",
    "InstallError",
    "InvalidFormat",
    "InvalidQuality",
    "ResolveError",
    "ScriptNotFound",
    "SetupError",
    "VersionNotFound",
    # HTTP
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    "RetryPolicy",
    # Models
    "DirectiveKind",
    "Quality",
    "ReleaseIndexEntry",
    "ResolvedDirective",
    # Resolution / install
    "VersionResolver",
    "select_directory",
    "major_component",
    "ScriptLocator",
    "DotnetInstaller",
    "installed_version",
]
