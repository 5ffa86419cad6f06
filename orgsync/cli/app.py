from __future__ import annotations

import os
from pathlib import Path

import typer

from orgsync import __version__
from orgsync.cli.context import build_context
from orgsync.core.config import (
    CONFIG_FILENAME,
    TOKEN_ENV,
    ConfigError,
    SyncConfig,
    load_config,
    load_config_if_present,
    read_token,
)
from orgsync.core.errors import ErrorCode
from orgsync.core.result import Err, Result
from orgsync.output.errors import print_listing_error, run_exit_code
from orgsync.output.report import render_summary
from orgsync.sync.engine import OrgSyncService

USAGE = "Usage: orgsync <github-organization> [-v|--verbose]"

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)


def _resolve_config(
    config_path: Path | None,
    *,
    jobs: int | None,
    exclude: list[str],
) -> Result[SyncConfig, ConfigError]:
    if config_path is not None:
        loaded = load_config(config_path)
    else:
        loaded = load_config_if_present(Path.cwd() / CONFIG_FILENAME)
    if isinstance(loaded, Err):
        return loaded

    with_env = loaded.value.with_environment(os.environ)
    if isinstance(with_env, Err):
        return with_env

    return with_env.value.with_overrides(max_parallel_jobs=jobs, exclude=exclude)


@app.command()
def sync(
    organization: str | None = typer.Argument(
        None,
        help="GitHub organization whose repositories are cloned or updated.",
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show git output and per-step details."
    ),
    jobs: int | None = typer.Option(
        None,
        "--jobs",
        "-j",
        help="Maximum parallel repository operations (default: $MAX_PARALLEL_JOBS or 5).",
        show_default=False,
    ),
    exclude: list[str] | None = typer.Option(
        None,
        "--exclude",
        "-x",
        help="Repository name to skip (exact match, repeatable).",
        show_default=False,
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help=f"Config file (default: ./{CONFIG_FILENAME} if present).",
        show_default=False,
    ),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Directory holding the organization folder (default: current directory).",
        show_default=False,
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Clone missing repositories of an organization and pull the others."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if organization is None or not organization.strip():
        typer.echo(USAGE, err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    org = organization.strip()

    token = read_token(os.environ)
    if token is None:
        typer.echo(f"Error: {TOKEN_ENV} is not set in the environment.", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config_result = _resolve_config(config_path, jobs=jobs, exclude=exclude or [])
    if isinstance(config_result, Err):
        error = config_result.error
        where = f" ({error.path})" if error.path else ""
        typer.echo(f"Error: {error.message}{where}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    config = config_result.value

    base = (root or Path.cwd()).expanduser()
    ctx = build_context()
    service = OrgSyncService(
        org=org,
        root=base / org,
        token=token,
        config=config,
        http=ctx.http,
        console=ctx.console,
        verbose=verbose,
    )

    try:
        report = service.run()
    except OSError as e:
        ctx.console.error(f"Cannot use {base / org}: {e}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if report.listing_error is not None:
        print_listing_error(report.listing_error, ctx.console)
    render_summary(
        report.summary,
        ctx.console,
        verbose=verbose,
        listing_failed=report.listing_error is not None,
    )

    code = run_exit_code(report)
    if code:
        raise typer.Exit(code=code)


def main() -> None:
    app()
