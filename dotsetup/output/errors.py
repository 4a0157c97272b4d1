"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dotsetup.ci.github import ExportError
from dotsetup.core.config import ConfigError
from dotsetup.core.errors import ErrorCode
from dotsetup.dotnet.errors import (
    ChannelNotFound,
    IndexFetchFailed,
    InstallationFailed,
    InvalidFormat,
    InvalidQuality,
    ScriptNotFound,
    SetupError,
    VersionNotFound,
)
from dotsetup.output.console import Style

if TYPE_CHECKING:
    from dotsetup.output.console import ConsoleProtocol

__all__ = ["AppError", "print_error", "error_exit_code"]

AppError = SetupError | ConfigError | ExportError


def print_error(error: AppError, console: ConsoleProtocol) -> None:
    """Print an error to the console with appropriate formatting."""
    match error:
        case InvalidFormat() | InvalidQuality():
            console.error(error.message)
        case ChannelNotFound():
            console.error(error.message)
            console.print("hint: check the major version against the release index", Style.DIM)
        case IndexFetchFailed():
            console.error(error.message)
            console.print("hint: pin a full channel (A.B) to skip the index lookup", Style.DIM)
        case ScriptNotFound(hint=hint):
            console.error(error.message)
            console.print(f"hint: {hint}", Style.DIM)
        case InstallationFailed():
            console.error(error.message)
        case VersionNotFound():
            console.error(error.message)
            console.print("hint: the installer exited cleanly but installed nothing", Style.DIM)
        case ConfigError() | ExportError():
            console.error(error.message)


def error_exit_code(error: AppError) -> int:
    """Get exit code for an error."""
    match error:
        case InvalidFormat() | InvalidQuality() | ChannelNotFound() | ConfigError():
            return int(ErrorCode.USER_ERROR)
        case ScriptNotFound():
            return int(ErrorCode.ENV_ERROR)
        case InstallationFailed() | VersionNotFound():
            return int(ErrorCode.INSTALL_ERROR)
        case IndexFetchFailed():
            return int(ErrorCode.NETWORK_ERROR)
        case ExportError():
            return int(ErrorCode.IO_ERROR)
    return int(ErrorCode.USER_ERROR)
