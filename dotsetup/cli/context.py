from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from dotsetup.core.config import CONFIG_FILENAME, Config, EnvSettings, load_config, load_config_or_default
from dotsetup.core.result import Err
from dotsetup.output.console import ConsoleProtocol, RichConsole
from dotsetup.output.errors import error_exit_code, print_error
from dotsetup.platform.detection import detect_platform
from dotsetup.platform.profile import PlatformProfile, profile_for


@dataclass(frozen=True, slots=True)
class CLIContext:
    profile: PlatformProfile
    env: EnvSettings
    config: Config
    console: ConsoleProtocol


def build_context(config_path: Path | None = None, *, stderr: bool = False) -> CLIContext:
    """Capture environment, platform and config once for the whole command.

    An explicit config path must exist; the default dotsetup.toml in the
    current directory is optional.
    """
    console = RichConsole(stderr=stderr)

    if config_path is not None:
        config_result = load_config(config_path)
    else:
        config_result = load_config_or_default(Path.cwd() / CONFIG_FILENAME)
    if isinstance(config_result, Err):
        print_error(config_result.error, console)
        raise typer.Exit(code=error_exit_code(config_result.error))

    env = EnvSettings.from_env()
    return CLIContext(
        profile=profile_for(detect_platform(), env),
        env=env,
        config=config_result.value,
        console=console,
    )
