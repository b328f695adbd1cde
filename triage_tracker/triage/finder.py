"""Finds open issues that nobody has commented on since a cutoff date."""

from contextlib import aclosing
from datetime import date, datetime

import structlog

from triage_tracker.github.abc import GitHubClientBase
from triage_tracker.schemas.github import Issue
from triage_tracker.schemas.queries import TriageQuery
from triage_tracker.triage.results import StaleIssue
from triage_tracker.utils.dates import utc_date

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def is_stale(last_activity_at: datetime, cutoff: date) -> bool:
    """Activity strictly before the cutoff day is stale; activity on the cutoff day is recent."""
    return utc_date(last_activity_at) < cutoff


async def latest_activity(client: GitHubClientBase, issue: Issue) -> datetime:
    """Return the latest comment timestamp of an issue, or its creation time when it has no comments."""
    if issue.comments == 0:
        return issue.created_at
    comments = await client.list_issue_comments(issue.number)
    if not comments:
        return issue.created_at
    return max(comment.created_at for comment in comments)


async def find_stale_issues(client: GitHubClientBase, query: TriageQuery) -> list[StaleIssue]:
    """Return the open issues matching the query's labels whose latest activity predates the cutoff.

    Issues are returned in API order (oldest created first), and paging stops
    once ``limit`` candidates have been collected. Issues with at
    least one comment cost one comments request each; issues without comments
    are judged on their creation time alone.
    """
    candidates: list[Issue] = []
    issue_pages = client.iter_issue_pages(state="open", labels=list(query.labels), sort="created", direction="asc")
    async with aclosing(issue_pages) as pages:
        async for issues in pages:
            candidates.extend(issue for issue in issues if not issue.is_pull_request)
            if query.limit is not None and len(candidates) >= query.limit:
                break
    if query.limit is not None:
        candidates = candidates[: query.limit]
    logger.info("Checking open issues for activity", candidates=len(candidates), labels=list(query.labels), cutoff=str(query.cutoff))

    stale_issues: list[StaleIssue] = []
    for index, issue in enumerate(candidates, start=1):
        last_activity_at = await latest_activity(client, issue)
        logger.debug(
            "Checked issue activity",
            issue_number=issue.number,
            progress=f"{index}/{len(candidates)}",
            last_activity_at=last_activity_at.isoformat(),
        )
        if is_stale(last_activity_at, query.cutoff):
            stale_issues.append(StaleIssue(issue=issue, last_activity_at=last_activity_at))

    logger.info("Found stale issues", stale_issues=len(stale_issues), candidates=len(candidates))
    return stale_issues
