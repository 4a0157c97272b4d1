"""GitHub Actions file commands.

Later workflow steps pick up exported variables, PATH entries and step
outputs through the files named by GITHUB_ENV, GITHUB_PATH and
GITHUB_OUTPUT. Outside of Actions those variables are unset and the values
are printed instead, so a local run shows what would have been exported.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from dotsetup.core.result import Err, Ok, Result
from dotsetup.output.console import Style

if TYPE_CHECKING:
    from dotsetup.core.config import EnvSettings
    from dotsetup.output.console import ConsoleProtocol

__all__ = ["ExportError", "GitHubExporter", "format_key_value"]


@dataclass(frozen=True, slots=True)
class ExportError:
    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f"cannot write {self.path}: {self.reason}"


def format_key_value(name: str, value: str, delimiter: str | None = None) -> str:
    """Format one `name<<delimiter` block as used by GITHUB_ENV / GITHUB_OUTPUT.

    Raises:
        ValueError: If name or value contains the delimiter.
    """
    delim = delimiter or f"ghadelimiter_{uuid.uuid4()}"
    if delim in name:
        raise ValueError(f"Unexpected input: name should not contain the delimiter {delim!r}")
    if delim in value:
        raise ValueError(f"Unexpected input: value should not contain the delimiter {delim!r}")
    return f"{name}<<{delim}\n{value}\n{delim}\n"


def _append(path: Path, content: str) -> Result[None, ExportError]:
    try:
        with path.open("a", encoding="utf-8") as handle:
            handle.write(content)
    except OSError as e:
        return Err(ExportError(path=path, reason=str(e)))
    return Ok(None)


class GitHubExporter:
    """Exports variables, PATH entries and outputs to later workflow steps."""

    def __init__(self, env: EnvSettings, console: ConsoleProtocol) -> None:
        self._env = env
        self._console = console

    def export_variable(self, name: str, value: str) -> Result[None, ExportError]:
        if self._env.github_env is None:
            self._console.print(f"{name}={value}", Style.DIM)
            return Ok(None)
        return _append(self._env.github_env, format_key_value(name, value))

    def add_path(self, path: str) -> Result[None, ExportError]:
        if self._env.github_path is None:
            self._console.print(f"PATH+={path}", Style.DIM)
            return Ok(None)
        return _append(self._env.github_path, f"{path}\n")

    def set_output(self, name: str, value: str) -> Result[None, ExportError]:
        if self._env.github_output is None:
            self._console.print(f"output {name}={value}", Style.DIM)
            return Ok(None)
        return _append(self._env.github_output, format_key_value(name, value))
