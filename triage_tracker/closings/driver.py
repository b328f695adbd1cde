"""Orchestrates the closings workflow."""

import time

import structlog

from triage_tracker.closings.calculator import calculate_closings
from triage_tracker.closings.results import DailyChange
from triage_tracker.configuration.models import BaseConfig
from triage_tracker.github.adapter import GitHubKitAdapter
from triage_tracker.schemas.queries import DateWindow

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def run_closings_workflow(config: BaseConfig, window: DateWindow) -> list[DailyChange]:
    """Run the closings workflow: connect to GitHub and compute the daily net change over the window."""
    github_adapter = await GitHubKitAdapter.create(
        repo=config.repo,
        github_pat_token=config.github_pat_token,
        github_api_url=config.github_api_url,
    )

    start_time = time.time()
    logger.info("Calculating closings", repo=config.repo, start=str(window.start), end=str(window.end))
    daily_changes = await calculate_closings(github_adapter, window)
    logger.info("Calculated closings", duration=round(time.time() - start_time, 2), days=len(daily_changes))
    return daily_changes
