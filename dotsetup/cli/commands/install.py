from __future__ import annotations

from pathlib import Path

import typer

from dotsetup.cli.commands._helpers import exit_with_error, http_client
from dotsetup.cli.context import build_context
from dotsetup.core.result import Err
from dotsetup.dotnet.installer import DotnetInstaller
from dotsetup.dotnet.scripts import ScriptLocator
from dotsetup.output.console import Style
from dotsetup.platform.paths import user_cache_dir
from dotsetup.services.setup import SetupRequest, SetupService


def split_versions(values: list[str]) -> tuple[str, ...]:
    """Flatten multi-line arguments ("6.0\\n8.0", as CI inputs are often passed)."""
    out: list[str] = []
    for value in values:
        out.extend(line.strip() for line in value.splitlines() if line.strip())
    return tuple(out)


def install(
    versions: list[str] = typer.Argument(
        ...,
        help="SDK versions to install: A.B.C, A.B, A.B.x, A or A.x",
        show_default=False,
    ),
    quality: str | None = typer.Option(
        None,
        "--quality",
        "-q",
        help="Build quality for channel installs (daily, signed, validated, preview, ga).",
    ),
    install_dir: str | None = typer.Option(
        None,
        "--install-dir",
        help="Install directory (default: DOTNET_INSTALL_DIR, else <platform root>/<major>).",
    ),
    script_dir: Path | None = typer.Option(
        None,
        "--script-dir",
        help="Directory containing dotnet-install.sh / dotnet-install.ps1.",
    ),
    config: Path | None = typer.Option(None, "--config", help="Path to dotsetup.toml."),
    no_export: bool = typer.Option(
        False,
        "--no-export",
        help="Do not export DOTNET_ROOT, PATH or step outputs.",
    ),
) -> None:
    """Install one or more .NET SDKs."""
    ctx = build_context(config)
    http = http_client(ctx)

    configured_dir = ctx.config.install.script_dir
    locator = ScriptLocator(
        http,
        user_cache_dir() / "scripts",
        ctx.config.install.script_base_url,
        script_dir=script_dir or (Path(configured_dir) if configured_dir else None),
    )
    installer = DotnetInstaller(
        profile=ctx.profile,
        env=ctx.env,
        scripts=locator,
        console=ctx.console,
    )
    service = SetupService(
        profile=ctx.profile,
        env=ctx.env,
        config=ctx.config,
        console=ctx.console,
        http=http,
        installer=installer,
    )

    result = service.setup(
        SetupRequest(
            versions=split_versions(versions),
            quality=quality,
            install_dir=install_dir,
            export=not no_export,
        )
    )
    if isinstance(result, Err):
        exit_with_error(result.error, ctx)

    outcome = result.value
    ctx.console.print(f"DOTNET_ROOT: {outcome.install_dir}", Style.DIM)
    if outcome.dotnet_version is not None:
        ctx.console.print(f"dotnet-version: {outcome.dotnet_version}")
