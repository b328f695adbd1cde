"""Pydantic schemas for the GitHub objects both workflows read."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from triage_tracker.utils.constants import CLOSING_EVENT, REOPENING_EVENT
from triage_tracker.utils.dates import utc_date


class StateChange(str, Enum):
    """Effect of an issue or issue event on the open issue count."""

    OPENED = "opened"
    CLOSED = "closed"


class Issue(BaseModel):
    """Pydantic model for a GitHub issue."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    created_at: datetime
    closed_at: datetime | None = None
    labels: frozenset[str] = frozenset()
    comments: int = 0
    is_pull_request: bool = False

    @property
    def created_on(self) -> date:
        """UTC calendar day the issue was opened."""
        return utc_date(self.created_at)

    def __str__(self) -> str:
        return f"#{self.number}: {self.title}"


class IssueEvent(BaseModel):
    """Pydantic model for an entry of the repository issue events timeline.

    ``issue`` is None for events GitHub did not attach to an issue.
    """

    model_config = ConfigDict(frozen=True)

    event: str
    created_at: datetime
    issue: Issue | None = None

    @property
    def occurred_on(self) -> date:
        """UTC calendar day the event happened."""
        return utc_date(self.created_at)

    @property
    def state_change(self) -> StateChange | None:
        """Open-count effect of the event, or None for events that do not change state."""
        if self.issue is None:
            return None
        if self.event == CLOSING_EVENT:
            return StateChange.CLOSED
        if self.event == REOPENING_EVENT:
            return StateChange.OPENED
        return None


class Comment(BaseModel):
    """Pydantic model for an issue comment."""

    model_config = ConfigDict(frozen=True)

    created_at: datetime
