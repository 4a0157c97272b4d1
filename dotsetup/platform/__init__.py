"""Platform abstraction layer."""

from .detection import (
    Platform,
    detect_platform,
    is_macos,
    is_windows,
)
from .paths import (
    home,
    user_cache_dir,
)
from .process import (
    ProcessError,
    run_streaming,
)
from .profile import (
    FlagStyle,
    PlatformProfile,
    profile_for,
)

__all__ = [
    # detection
    "Platform",
    "detect_platform",
    "is_macos",
    "is_windows",
    # paths
    "home",
    "user_cache_dir",
    # process
    "ProcessError",
    "run_streaming",
    # profile
    "FlagStyle",
    "PlatformProfile",
    "profile_for",
]
