"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from dotsetup.dotnet.http import HttpError, RealHttpClient, RetryPolicy
from dotsetup.output.errors import error_exit_code, print_error

if TYPE_CHECKING:
    from dotsetup.cli.context import CLIContext
    from dotsetup.output.errors import AppError


def exit_with_error(error: AppError, ctx: CLIContext) -> NoReturn:
    """Print error and exit with its mapped code."""
    print_error(error, ctx.console)
    raise typer.Exit(code=error_exit_code(error))


def http_client(ctx: CLIContext) -> RealHttpClient:
    """HTTP client honouring the configured retry policy; retries are reported as warnings."""
    policy = RetryPolicy(
        max_retries=ctx.config.retry.max_retries,
        backoff=ctx.config.retry.backoff,
    )

    def on_retry(attempt: int, error: HttpError) -> None:
        ctx.console.warning(f"{error} (retry {attempt}/{policy.max_retries})")

    return RealHttpClient(retry=policy, on_retry=on_retry)
