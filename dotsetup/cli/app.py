from __future__ import annotations

import typer

from dotsetup import __version__
from dotsetup.cli.commands.install import install
from dotsetup.cli.commands.resolve import resolve


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(install)
app.command()(resolve)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    """Install .NET SDKs on CI runners."""


def main() -> None:
    app()
