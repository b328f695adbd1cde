"""Renders workflow results as plain text reports."""

from datetime import date

from triage_tracker.closings.results import DailyChange, total_change
from triage_tracker.triage.results import StaleIssue
from triage_tracker.utils.constants import ISO_DATE_FORMAT, TARGET_REPOSITORY
from triage_tracker.utils.github import issue_url


def format_single_day(change: DailyChange) -> str:
    """Render the issues opened and closed on one day, followed by the net change."""
    lines = [f"On {change.day.strftime(ISO_DATE_FORMAT)}"]
    lines.append(f"{len(change.opened)} opened:")
    lines.extend(f"  {issue}" for issue in change.opened)
    lines.append(f"{len(change.closed)} closed:")
    lines.extend(f"  {issue}" for issue in change.closed)
    lines.append(f"Net change: {change.net:+d}")
    return "\n".join(lines)


def format_daily_changes(changes: list[DailyChange]) -> str:
    """Render one net change line per day and the total change across all days."""
    lines = ["Daily changes:"]
    lines.extend(f" {change.day.strftime(ISO_DATE_FORMAT)}: {change.net}" for change in changes)
    lines.append(f"Total Change: {total_change(changes)}")
    return "\n".join(lines)


def format_closings(changes: list[DailyChange], single_day: bool) -> str:
    """Render a closings report, detailed for a single day or summarized per day for a range."""
    if single_day and len(changes) == 1:
        return format_single_day(changes[0])
    return format_daily_changes(changes)


def format_stale_issues(stale_issues: list[StaleIssue], cutoff: date, repository: str = TARGET_REPOSITORY) -> str:
    """Render the stale issues with their number, last activity date, title, and URL."""
    lines = [f"{len(stale_issues)} stale issues (no activity since {cutoff.strftime(ISO_DATE_FORMAT)}):"]
    for stale_issue in stale_issues:
        issue = stale_issue.issue
        lines.append(f"  #{issue.number} {stale_issue.last_activity_on.strftime(ISO_DATE_FORMAT)} {issue.title}")
        lines.append(f"    {issue_url(issue.number, repository)}")
    return "\n".join(lines)
