"""Computes the daily net change in open issues over a date window."""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from datetime import date
from typing import Generic, TypeVar

import structlog

from triage_tracker.closings.results import DailyChange
from triage_tracker.github.abc import GitHubClientBase
from triage_tracker.schemas.github import Issue, IssueEvent, StateChange
from triage_tracker.schemas.queries import DateWindow
from triage_tracker.utils.constants import ESTIMATED_EVENT_PAGES_PER_DAY, ESTIMATED_ISSUE_PAGES_PER_DAY
from triage_tracker.utils.dates import utc_today

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

T = TypeVar("T")


class NewestFirstPages(Generic[T]):
    """Random access to a newest-first paginated listing, fetching each page at most once."""

    def __init__(self, fetch_page: Callable[[int], Awaitable[Sequence[T]]], day_of: Callable[[T], date]) -> None:
        self.fetch_page = fetch_page
        self.day_of = day_of
        self.pages: dict[int, Sequence[T]] = {}

    async def get(self, number: int) -> Sequence[T]:
        if number not in self.pages:
            self.pages[number] = await self.fetch_page(number)
        return self.pages[number]

    async def reaches(self, number: int, day: date) -> bool:
        """True when page ``number`` holds an item from ``day`` or earlier, or lies past the end of the listing."""
        items = await self.get(number)
        return not items or self.day_of(items[-1]) <= day

    async def first_page_reaching(self, day: date, estimate: int, step: int) -> int:
        """Find the lowest page number that reaches ``day``.

        Starts at ``estimate``, gallops towards newer or older pages with a
        doubling step, then bisects. Page 0 stands for "newer than everything".
        """
        step = max(step, 1)
        if await self.reaches(estimate, day):
            newer, older = estimate - step, estimate
            while newer >= 1 and await self.reaches(newer, day):
                older = newer
                step *= 2
                newer = older - step
            newer = max(newer, 0)
        else:
            newer, older = estimate, estimate + step
            while not await self.reaches(older, day):
                newer = older
                step *= 2
                older = newer + step
        while older - newer > 1:
            middle = (newer + older) // 2
            if await self.reaches(middle, day):
                older = middle
            else:
                newer = middle
        return older


async def collect_window_items(
    fetch_page: Callable[[int], Awaitable[Sequence[T]]],
    day_of: Callable[[T], date],
    window: DateWindow,
    pages_per_day: float,
    today: date,
) -> tuple[list[T], int]:
    """Return the items of a newest-first listing that fall inside the window, and the pages fetched.

    The first page is guessed from how many days ago the window ends, then
    corrected; from there pages are read until one reaches past the window start.
    """
    pages = NewestFirstPages(fetch_page, day_of)
    days_away = max((today - window.end).days, 0)
    estimate = max(1, round(days_away * pages_per_day))
    page_number = await pages.first_page_reaching(window.end, estimate, step=round(pages_per_day))

    items: list[T] = []
    while True:
        page = await pages.get(page_number)
        if not page:
            break
        items.extend(item for item in page if day_of(item) in window)
        if day_of(page[-1]) < window.start:
            break
        page_number += 1
    return items, len(pages.pages)


async def collect_opened_issues(client: GitHubClientBase, window: DateWindow, today: date | None = None) -> list[Issue]:
    """Return the issues created inside the window, newest first."""
    today = today or utc_today()

    async def fetch_page(page: int) -> list[Issue]:
        return await client.get_issue_page(page, state="all", sort="created", direction="desc")

    issues, pages = await collect_window_items(fetch_page, lambda issue: issue.created_on, window, ESTIMATED_ISSUE_PAGES_PER_DAY, today)
    opened = [issue for issue in issues if not issue.is_pull_request]
    logger.info("Collected issues opened in window", start=str(window.start), end=str(window.end), pages=pages, issues=len(opened))
    return opened


async def collect_state_events(client: GitHubClientBase, window: DateWindow, today: date | None = None) -> list[IssueEvent]:
    """Return the closed/reopened issue events inside the window, newest first."""
    today = today or utc_today()
    events, pages = await collect_window_items(
        client.get_issue_event_page, lambda event: event.occurred_on, window, ESTIMATED_EVENT_PAGES_PER_DAY, today
    )
    state_events = [
        event for event in events if event.state_change is not None and event.issue is not None and not event.issue.is_pull_request
    ]
    logger.info("Collected issue state events in window", start=str(window.start), end=str(window.end), pages=pages, events=len(state_events))
    return state_events


def tally_daily_changes(window: DateWindow, opened_issues: list[Issue], events: list[IssueEvent]) -> list[DailyChange]:
    """Partition state changes by day and return one DailyChange per day of the window.

    Every creation and every reopened event counts as an opening, every closed
    event as a closing, so an issue opened and closed on the same day nets 0.
    """
    opened: dict[date, list[Issue]] = {day: [] for day in window}
    closed: dict[date, list[Issue]] = {day: [] for day in window}

    for issue in opened_issues:
        if issue.is_pull_request or issue.created_on not in window:
            continue
        opened[issue.created_on].append(issue)

    for event in events:
        if event.issue is None or event.issue.is_pull_request or event.occurred_on not in window:
            continue
        if event.state_change is StateChange.OPENED:
            opened[event.occurred_on].append(event.issue)
        elif event.state_change is StateChange.CLOSED:
            closed[event.occurred_on].append(event.issue)

    return [
        DailyChange(
            day=day,
            opened=tuple(sorted(opened[day], key=lambda issue: issue.number)),
            closed=tuple(sorted(closed[day], key=lambda issue: issue.number)),
        )
        for day in window
    ]


async def calculate_closings(client: GitHubClientBase, window: DateWindow, today: date | None = None) -> list[DailyChange]:
    """Return the (day, net change) sequence for every day of the window, ascending.

    Days without any events are reported with a net change of 0. ``today``
    (UTC) anchors the page estimates and defaults to the current day.
    """
    today = today or utc_today()
    opened_issues, events = await asyncio.gather(
        collect_opened_issues(client, window, today),
        collect_state_events(client, window, today),
    )
    daily_changes = tally_daily_changes(window, opened_issues, events)
    logger.info(
        "Calculated closings",
        start=str(window.start),
        end=str(window.end),
        days=len(daily_changes),
        total_change=sum(change.net for change in daily_changes),
    )
    return daily_changes
