"""Contains results of the stale issue search."""

from dataclasses import dataclass
from datetime import date, datetime

from triage_tracker.schemas.github import Issue
from triage_tracker.utils.dates import utc_date


@dataclass(frozen=True)
class StaleIssue:
    """An open issue together with the timestamp of its latest activity."""

    issue: Issue
    last_activity_at: datetime

    @property
    def last_activity_on(self) -> date:
        return utc_date(self.last_activity_at)
