"""Application services."""

from .setup import (
    InstalledSdk,
    SetupOutcome,
    SetupRequest,
    SetupService,
    parse_quality,
)

__all__ = [
    "InstalledSdk",
    "SetupOutcome",
    "SetupRequest",
    "SetupService",
    "parse_quality",
]
