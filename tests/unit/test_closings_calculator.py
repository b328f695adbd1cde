"""Unit tests for the closings calculator."""

from collections.abc import Awaitable, Callable
from datetime import date, timedelta

import pytest

from tests.unit.fakes import FakeGitHubClient, make_event, make_issue, ts
from triage_tracker.closings.calculator import (
    calculate_closings,
    collect_opened_issues,
    collect_state_events,
    collect_window_items,
    tally_daily_changes,
)
from triage_tracker.schemas.queries import DateWindow
from triage_tracker.utils.constants import ESTIMATED_EVENT_PAGES_PER_DAY, PER_PAGE


@pytest.mark.asyncio
async def test_range_without_events_reports_zero_for_every_day() -> None:
    """Test that every day of an empty window is reported with a net change of 0."""
    window = DateWindow(start=date(2021, 5, 31), end=date(2021, 6, 7))

    changes = await calculate_closings(FakeGitHubClient(), window)

    assert [change.day for change in changes] == [date(2021, 5, 31) + timedelta(days=offset) for offset in range(8)]
    assert all(change.net == 0 for change in changes)


@pytest.mark.asyncio
async def test_range_reports_one_pair_per_day_inclusive() -> None:
    """Test that [2021-05-31, 2021-06-07] yields exactly 8 (date, net) pairs."""
    old_issue = make_issue(1, "2021-01-01")
    client = FakeGitHubClient(
        issues=[old_issue, make_issue(2, "2021-06-03T10:00")],
        events=[make_event("closed", "2021-06-05T12:00", old_issue)],
    )

    changes = await calculate_closings(client, DateWindow(start=date(2021, 5, 31), end=date(2021, 6, 7)))

    assert len(changes) == 8
    assert changes[0].day == date(2021, 5, 31)
    assert changes[-1].day == date(2021, 6, 7)


@pytest.mark.asyncio
async def test_net_is_opened_minus_closed() -> None:
    """Test the net count against a hand-constructed event set."""
    older = [make_issue(number, "2021-01-01") for number in (1, 2, 3)]
    client = FakeGitHubClient(
        issues=older
        + [
            make_issue(10, "2021-06-01T08:00"),
            make_issue(11, "2021-06-01T09:00"),
            make_issue(12, "2021-06-01T23:59"),
            make_issue(13, "2021-06-02T01:00"),
        ],
        events=[
            make_event("closed", "2021-06-01T10:00", older[0]),
            make_event("closed", "2021-06-02T10:00", older[1]),
            make_event("closed", "2021-06-02T11:00", older[2]),
            make_event("reopened", "2021-06-02T12:00", older[0]),
        ],
    )

    changes = await calculate_closings(client, DateWindow(start=date(2021, 6, 1), end=date(2021, 6, 2)))

    assert [(change.day, change.net) for change in changes] == [(date(2021, 6, 1), 2), (date(2021, 6, 2), 0)]
    assert [issue.number for issue in changes[0].opened] == [10, 11, 12]
    assert [issue.number for issue in changes[0].closed] == [1]
    assert [issue.number for issue in changes[1].opened] == [1, 13]
    assert [issue.number for issue in changes[1].closed] == [2, 3]


@pytest.mark.asyncio
async def test_single_date_window() -> None:
    """Test that a single date produces exactly one DailyChange."""
    issue = make_issue(5, "2021-06-01T08:00")
    client = FakeGitHubClient(issues=[issue], events=[make_event("closed", "2021-06-01T20:00", issue)])

    changes = await calculate_closings(client, DateWindow.single(date(2021, 6, 1)))

    assert len(changes) == 1
    assert changes[0].net == 0
    assert changes[0].opened == (issue,)
    assert changes[0].closed == (issue,)


@pytest.mark.asyncio
async def test_pull_requests_and_other_events_are_ignored() -> None:
    """Test that pull requests and events other than closed/reopened do not count."""
    pull_request = make_issue(20, "2021-06-01T08:00", is_pull_request=True)
    issue = make_issue(21, "2021-05-01")
    client = FakeGitHubClient(
        issues=[pull_request, issue],
        events=[
            make_event("closed", "2021-06-01T09:00", pull_request),
            make_event("labeled", "2021-06-01T10:00", issue),
            make_event("merged", "2021-06-01T11:00", pull_request),
        ],
    )

    changes = await calculate_closings(client, DateWindow.single(date(2021, 6, 1)))

    assert changes[0].opened == ()
    assert changes[0].closed == ()


@pytest.mark.asyncio
async def test_events_without_issue_are_ignored() -> None:
    """Test that events GitHub did not attach to an issue do not count."""
    client = FakeGitHubClient(events=[make_event("closed", "2021-06-01T09:00", None)])

    changes = await calculate_closings(client, DateWindow.single(date(2021, 6, 1)), today=date(2021, 6, 2))

    assert changes[0].closed == ()


@pytest.mark.asyncio
async def test_collect_opened_issues_stops_after_window_start() -> None:
    """Test that issue paging stops once a page reaches past the start of the window."""
    issues = [make_issue(number, f"2021-06-{day:02d}") for number, day in enumerate(range(1, 11), start=1)]
    client = FakeGitHubClient(issues=issues, page_size=2)

    opened = await collect_opened_issues(client, DateWindow(start=date(2021, 6, 8), end=date(2021, 6, 9)), today=date(2021, 6, 10))

    assert sorted(issue.number for issue in opened) == [8, 9]
    # Pages (newest first): [10, 9], [8, 7] - the second page already reaches 2021-06-07.
    assert client.issue_page_requests == [1, 2]


@pytest.mark.asyncio
async def test_collect_state_events_corrects_a_page_estimate_past_the_end() -> None:
    """Test that an estimate beyond the last page is walked back to the page holding the window."""
    issue = make_issue(1, "2021-01-01")
    events = [make_event("closed", f"2021-06-{day:02d}T12:00", issue) for day in range(1, 7)]
    client = FakeGitHubClient(events=events, page_size=2)

    collected = await collect_state_events(client, DateWindow.single(date(2021, 6, 5)), today=date(2021, 6, 6))

    assert [event.created_at for event in collected] == [ts("2021-06-05T12:00")]
    # Estimated page 4 is empty, bisecting finds page 1; page 2 reaches 2021-06-03.
    assert client.event_page_requests == [4, 2, 1]


def daily_listing(per_day: int, today: date, first_day: date) -> Callable[[int], Awaitable[list[date]]]:
    """A newest-first listing of ``per_day`` items per day, from ``today`` back to ``first_day``."""

    async def fetch_page(page: int) -> list[date]:
        days = (today - timedelta(days=index // per_day) for index in range((page - 1) * PER_PAGE, page * PER_PAGE))
        return [day for day in days if day >= first_day]

    return fetch_page


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "per_day",
    [
        pytest.param(400, id="estimate matches"),
        pytest.param(40, id="estimate too old"),
        pytest.param(1000, id="estimate too recent"),
    ],
)
async def test_collect_window_items_seeks_instead_of_scanning_history(per_day: int) -> None:
    """Test that a window years in the past is reached in a bounded number of page requests."""
    today = date(2026, 10, 19)
    window = DateWindow(start=date(2021, 5, 31), end=date(2021, 6, 7))

    items, pages = await collect_window_items(
        daily_listing(per_day, today, first_day=date(2015, 1, 1)), lambda day: day, window, ESTIMATED_EVENT_PAGES_PER_DAY, today
    )

    assert len(items) == 8 * per_day
    assert set(items) == set(window)
    window_pages = len(items) // PER_PAGE + 2
    assert pages <= window_pages + 40


@pytest.mark.asyncio
async def test_collect_window_items_empty_listing() -> None:
    """Test that an empty listing yields nothing."""

    async def fetch_page(page: int) -> list[date]:
        return []

    items, pages = await collect_window_items(fetch_page, lambda day: day, DateWindow.single(date(2021, 6, 1)), 4.0, date(2021, 6, 10))

    assert items == []
    assert pages >= 1


def test_tally_ignores_items_outside_window() -> None:
    """Test that issues and events outside the window are not counted."""
    issue = make_issue(1, "2021-06-10")
    changes = tally_daily_changes(
        DateWindow.single(date(2021, 6, 1)),
        [issue],
        [make_event("closed", "2021-06-11", issue)],
    )
    assert len(changes) == 1
    assert changes[0].net == 0
