"""Orchestrates the stale issue workflow."""

import time

import structlog

from triage_tracker.configuration.models import BaseConfig
from triage_tracker.github.adapter import GitHubKitAdapter
from triage_tracker.schemas.queries import TriageQuery
from triage_tracker.triage.finder import find_stale_issues
from triage_tracker.triage.results import StaleIssue

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def run_triaged_workflow(config: BaseConfig, query: TriageQuery) -> list[StaleIssue]:
    """Run the triaged workflow: connect to GitHub and find open issues without recent activity."""
    github_adapter = await GitHubKitAdapter.create(
        repo=config.repo,
        github_pat_token=config.github_pat_token,
        github_api_url=config.github_api_url,
    )

    start_time = time.time()
    logger.info("Finding stale issues", repo=config.repo, labels=list(query.labels), cutoff=str(query.cutoff))
    stale_issues = await find_stale_issues(github_adapter, query)
    logger.info("Found stale issues", duration=round(time.time() - start_time, 2), stale_issues=len(stale_issues))
    return stale_issues
