"""Error codes for CLI exit status.

These values are used as process exit codes and should remain stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (bad version specifier, bad quality, unknown channel, bad config)
    - 2: Environment error (installer script or PowerShell host missing)
    - 3: Install error (installer script failed, SDK not found afterwards)
    - 4: Network error (release index unreachable after retries)
    - 5: I/O error (cannot write CI export files)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    INSTALL_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
