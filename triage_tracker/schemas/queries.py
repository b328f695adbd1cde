"""Query objects describing what a single run reports on."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, timedelta

from triage_tracker.configuration.exceptions import InvalidArgumentError
from triage_tracker.utils.constants import ISO_DATE_FORMAT
from triage_tracker.utils.dates import one_year_before


@dataclass(frozen=True)
class DateWindow:
    """A single calendar day or an inclusive range of days."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidArgumentError(
                f"Start date {self.start.strftime(ISO_DATE_FORMAT)} is after end date {self.end.strftime(ISO_DATE_FORMAT)}",
                param_hint="'--start' / '--end'",
            )

    @classmethod
    def single(cls, day: date) -> "DateWindow":
        """Build a window covering exactly one day."""
        return cls(start=day, end=day)

    @property
    def is_single_day(self) -> bool:
        return self.start == self.end

    def days(self) -> list[date]:
        """Every day of the window in ascending order."""
        return [self.start + timedelta(days=offset) for offset in range(len(self))]

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    def __iter__(self) -> Iterator[date]:
        return iter(self.days())

    def __len__(self) -> int:
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class TriageQuery:
    """Label filter and cutoff date for the stale issue search.

    An empty ``labels`` tuple means every open issue is a candidate. ``limit``
    caps how many candidate issues are examined.
    """

    cutoff: date
    labels: tuple[str, ...] = field(default_factory=tuple)
    limit: int | None = None

    @classmethod
    def with_default_cutoff(cls, today: date, labels: tuple[str, ...] = (), limit: int | None = None) -> "TriageQuery":
        """Build a query whose cutoff is one year before ``today``."""
        return cls(cutoff=one_year_before(today), labels=labels, limit=limit)
