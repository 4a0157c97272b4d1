from __future__ import annotations

import json
from pathlib import Path

import typer

from dotsetup.cli.commands._helpers import exit_with_error, http_client
from dotsetup.cli.context import build_context
from dotsetup.core.result import Err
from dotsetup.dotnet.versions import VersionResolver
from dotsetup.output.console import Style


def resolve(
    version: str = typer.Argument(..., help="Version specifier to resolve.", show_default=False),
    as_json: bool = typer.Option(False, "--json", help="Print the directive as JSON on stdout."),
    config: Path | None = typer.Option(None, "--config", help="Path to dotsetup.toml."),
) -> None:
    """Show how a version specifier resolves, without installing."""
    ctx = build_context(config, stderr=as_json)
    resolver = VersionResolver(http_client(ctx), ctx.config.index.url)

    result = resolver.resolve(version)
    if isinstance(result, Err):
        exit_with_error(result.error, ctx)

    directive = result.value
    flag = directive.kind.flag_name
    if as_json:
        typer.echo(
            json.dumps(
                {
                    "kind": str(directive.kind),
                    "value": directive.value,
                    "supports_quality": directive.supports_quality,
                    "flag": ctx.profile.flag(flag) if flag else None,
                }
            )
        )
        return

    ctx.console.print(f"kind: {directive.kind}")
    ctx.console.print(f"value: {directive.value or '-'}")
    ctx.console.print(f"quality: {'supported' if directive.supports_quality else 'not supported'}")
    if flag:
        ctx.console.print(f"installer flag: {ctx.profile.flag(flag)} {directive.value}", Style.DIM)
