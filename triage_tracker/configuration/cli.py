"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import sys

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from triage_tracker.closings.driver import run_closings_workflow
from triage_tracker.configuration.env import settings
from triage_tracker.configuration.exceptions import GitHubAuthenticationConfigurationUndefinedError, InvalidArgumentError
from triage_tracker.configuration.models import BaseConfig
from triage_tracker.configuration.reconcile import (
    reconcile_date_window,
    reconcile_triage_query,
    validate_github_authentication_configuration,
)
from triage_tracker.github.exceptions import UpstreamError
from triage_tracker.reporting.formatter import format_closings, format_stale_issues
from triage_tracker.triage.driver import run_triaged_workflow
from triage_tracker.utils.constants import TARGET_REPOSITORY
from triage_tracker.utils.dates import utc_today
from triage_tracker.utils.logging_setup import configure_logging

load_dotenv()

typer_app = typer.Typer(
    pretty_exceptions_show_locals=False,
    no_args_is_help=True,
    help=f"Track issue closings and stale issues in {TARGET_REPOSITORY}.",
)


@typer_app.callback()
def main_callback(
    ctx: typer.Context,
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    github_api_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")] = False,
) -> None:
    """Store the GitHub connection settings for the invoked command."""
    configure_logging(debug=debug or settings.DEBUG)
    ctx.ensure_object(dict)
    ctx.obj["github_pat_token"] = github_pat_token or settings.GITHUB_PAT_TOKEN
    ctx.obj["github_api_url"] = github_api_url or settings.GITHUB_API_URL
    ctx.obj["debug"] = debug or settings.DEBUG


def _get_config(ctx: typer.Context) -> BaseConfig:
    """Validate authentication and build the configuration for a workflow run."""
    try:
        github_pat_token = asyncio.run(validate_github_authentication_configuration(ctx.obj["github_pat_token"]))
    except GitHubAuthenticationConfigurationUndefinedError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc
    return BaseConfig(
        github_pat_token=github_pat_token,
        github_api_url=ctx.obj["github_api_url"],
        debug=ctx.obj["debug"],
    )


def _run_closings(ctx: typer.Context, date_value: str | None, start: str | None, end: str | None) -> None:
    """Validate the requested window, run the closings workflow, and print the report."""
    try:
        window = reconcile_date_window(date_value, start, end, today=utc_today())
    except InvalidArgumentError as exc:
        raise typer.BadParameter(str(exc), ctx=ctx, param_hint=exc.param_hint) from exc

    config = _get_config(ctx)
    try:
        daily_changes = asyncio.run(run_closings_workflow(config, window))
    except UpstreamError as exc:
        typer.echo(f"Error: {exc}", err=True)
        if exc.__cause__ is not None:
            typer.echo(f"Caused by: {exc.__cause__}", err=True)
        sys.exit(1)

    typer.echo(format_closings(daily_changes, single_day=date_value is not None))


# --- Typer group for closings commands ---
closings_app = typer.Typer(help="Track net closings of issues.")


@closings_app.callback(invoke_without_command=True)
def closings_callback(
    ctx: typer.Context,
    date_value: Annotated[str | None, Option("--date", "-d", help="Single date (YYYY-MM-DD).")] = None,
    start: Annotated[str | None, Option("--start", "-s", help="First date of the range (YYYY-MM-DD).")] = None,
    end: Annotated[str | None, Option("--end", "-e", help="Last date of the range (YYYY-MM-DD).")] = None,
) -> None:
    """Print the net change in open issues for a date (--date) or an inclusive range (--start/--end)."""
    if ctx.invoked_subcommand is not None:
        if date_value is not None or start is not None or end is not None:
            raise typer.BadParameter(
                f"--date/--start/--end cannot be combined with the '{ctx.invoked_subcommand}' subcommand",
                ctx=ctx,
            )
        return
    _run_closings(ctx, date_value, start, end)


@closings_app.command(name="date")
def closings_date_cli(
    ctx: typer.Context,
    day: Annotated[str, Argument(metavar="DATE", help="Date to report on (YYYY-MM-DD).")],
) -> None:
    """Print the issues opened and closed on a specific date."""
    _run_closings(ctx, day, None, None)


@closings_app.command(name="range")
def closings_range_cli(
    ctx: typer.Context,
    start: Annotated[str, Option("--start", "-s", help="First date of the range (YYYY-MM-DD).")],
    end: Annotated[str, Option("--end", "-e", help="Last date of the range (YYYY-MM-DD).")],
) -> None:
    """Print the daily net change in open issues for an inclusive range of dates."""
    _run_closings(ctx, None, start, end)


typer_app.add_typer(closings_app, name="closings")


@typer_app.command(name="triaged")
def triaged_cli(
    ctx: typer.Context,
    labels: Annotated[list[str] | None, Argument(metavar="[LABEL]...", help="Only consider open issues carrying these labels.")] = None,
    since: Annotated[str | None, Option("--since", help="Cutoff date (YYYY-MM-DD). Defaults to one year ago.")] = None,
    limit: Annotated[int | None, Option("--limit", help="Examine at most this many open issues.")] = None,
) -> None:
    """Print open issues without comment activity since the cutoff date."""
    try:
        query = reconcile_triage_query(labels, since, limit, today=utc_today())
    except InvalidArgumentError as exc:
        raise typer.BadParameter(str(exc), ctx=ctx, param_hint=exc.param_hint) from exc

    config = _get_config(ctx)
    try:
        stale_issues = asyncio.run(run_triaged_workflow(config, query))
    except UpstreamError as exc:
        typer.echo(f"Error: {exc}", err=True)
        if exc.__cause__ is not None:
            typer.echo(f"Caused by: {exc.__cause__}", err=True)
        sys.exit(1)

    typer.echo(format_stale_issues(stale_issues, query.cutoff, repository=config.repo))


if __name__ == "__main__":
    typer_app()
