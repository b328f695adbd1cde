"""Contains results of the closings workflow."""

from dataclasses import dataclass, field
from datetime import date

from triage_tracker.schemas.github import Issue


@dataclass(frozen=True)
class DailyChange:
    """Issues opened and closed on one calendar day."""

    day: date
    opened: tuple[Issue, ...] = field(default_factory=tuple)
    closed: tuple[Issue, ...] = field(default_factory=tuple)

    @property
    def net(self) -> int:
        """Change in the open issue count: opened minus closed."""
        return len(self.opened) - len(self.closed)


def total_change(changes: list[DailyChange]) -> int:
    """Net change in the open issue count across several days."""
    return sum(change.net for change in changes)
