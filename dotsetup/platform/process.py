"""Subprocess execution with Result-based error handling.

The installer script writes its progress to stdout; we let that stream
straight to the terminal and only capture stderr, which goes into the
error on failure.

Usage:
    result = run_streaming(["bash", "dotnet-install.sh", "--channel", "8.0"], env=env)
    match result:
        case Ok(_):
            ...
        case Err(error):
            print(error.returncode, error.stderr)
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dotsetup.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = ["ProcessError", "run_streaming"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code (-1 if the process could not be started).
        stderr: Captured standard error.
    """

    command: tuple[str, ...]
    returncode: int
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run_streaming(
    cmd: list[str],
    env: Mapping[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command, streaming stdout and capturing stderr.

    Args:
        cmd: Command and arguments to execute.
        env: Full environment for the child (current env if None).

    Returns:
        Ok(None) on exit code 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            env=dict(env) if env is not None else None,
            stdout=None,
            stderr=subprocess.PIPE,
            text=True,
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stderr=proc.stderr or "",
            )
        )

    return Ok(None)
