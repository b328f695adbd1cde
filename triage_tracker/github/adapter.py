"""GitHub client adapter for the githubkit library."""

from collections.abc import AsyncIterator
from functools import wraps
from typing import Any, Awaitable, Callable, Literal, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import GitHubException, PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded
from githubkit.versions.latest.models import Issue as GitHubIssue
from githubkit.versions.latest.models import IssueComment, IssueEvent as GitHubIssueEvent

from triage_tracker.schemas.github import Comment, Issue, IssueEvent
from triage_tracker.utils.constants import DEFAULT_GITHUB_API_URL, PER_PAGE, RATE_LIMIT_STATUS_CODES
from triage_tracker.utils.github import split_repository

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_pat_client
from .exceptions import RateLimitedError, UpstreamError

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])
T = TypeVar("T")


def _is_rate_limited(exc: RequestFailed, message: str) -> bool:
    """GitHub answers 429, or 403 with an exhausted quota, when a client is rate limited."""
    status_code = exc.response.status_code
    if status_code not in RATE_LIMIT_STATUS_CODES:
        return False
    if status_code == 429:
        return True
    return exc.response.headers.get("x-ratelimit-remaining") == "0" or "rate limit" in message.lower()


def _error_message(exc: RequestFailed) -> str:
    """Extract the message GitHub puts in error response bodies, if the body is JSON."""
    try:
        body = exc.response.json()
    except ValueError:
        return ""
    return str(body.get("message", "")) if isinstance(body, dict) else ""


def handle_upstream_errors(func: F) -> F:
    """Decorator translating githubkit and decoding failures into UpstreamError, logging the details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded) as exc:
            logger.error("GitHub rate limit exceeded", function=func.__name__, error_type=type(exc).__name__)
            raise RateLimitedError(f"Hit GitHub rate limiting in {func.__name__}", status_code=exc.response.status_code) from exc
        except RequestFailed as exc:
            status_code = exc.response.status_code
            message = _error_message(exc)
            logger.error(
                "GitHub request failed",
                function=func.__name__,
                status_code=status_code,
                message=message,
                url=str(getattr(exc.response, "url", "")),
            )
            if _is_rate_limited(exc, message):
                raise RateLimitedError(f"Hit GitHub rate limiting in {func.__name__}: {message or exc}", status_code=status_code) from exc
            raise UpstreamError(f"GitHub returned HTTP {status_code} in {func.__name__}: {message or exc}", status_code=status_code) from exc
        except GitHubException as exc:
            logger.error("GitHub request error", function=func.__name__, error=str(exc), error_type=type(exc).__name__)
            raise UpstreamError(f"GitHub request error in {func.__name__}: {exc}") from exc
        except ValueError as exc:
            logger.error("Malformed GitHub response", function=func.__name__, error=str(exc))
            raise UpstreamError(f"Malformed GitHub response in {func.__name__}: {exc}") from exc

    return wrapper  # type: ignore


def _label_names(raw_labels: Any) -> frozenset[str]:
    """Collect label names; the API returns labels either as strings or as label objects."""
    names: set[str] = set()
    for label in raw_labels or []:
        name = label if isinstance(label, str) else getattr(label, "name", None)
        if isinstance(name, str) and name:
            names.add(name)
    return frozenset(names)


def to_issue(raw: GitHubIssue) -> Issue:
    """Convert a githubkit issue into the application's Issue schema."""
    comments = getattr(raw, "comments", 0)
    return Issue(
        number=raw.number,
        title=raw.title,
        created_at=raw.created_at,
        closed_at=raw.closed_at or None,
        labels=_label_names(getattr(raw, "labels", None)),
        comments=comments if isinstance(comments, int) else 0,
        is_pull_request=bool(getattr(raw, "pull_request", None)),
    )


def to_issue_event(raw: GitHubIssueEvent) -> IssueEvent:
    """Convert a githubkit issue event; events not attached to an issue keep ``issue=None``."""
    issue = getattr(raw, "issue", None)
    return IssueEvent(event=raw.event, created_at=raw.created_at, issue=to_issue(issue) if issue else None)


def to_comment(raw: IssueComment) -> Comment:
    """Convert a githubkit issue comment into the application's Comment schema."""
    return Comment(created_at=raw.created_at)


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str, per_page: int = PER_PAGE) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name
        self.per_page = per_page

    def _omit_null_parameters(self, **kwargs: Any) -> dict[str, Any]:
        """Omit parameters that are None."""
        return {k: v for k, v in kwargs.items() if v is not None}

    @classmethod
    async def create(
        cls,
        repo: str,
        github_pat_token: str,
        github_api_url: str = DEFAULT_GITHUB_API_URL,
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_pat_token: Personal access token
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            ValueError: If the repository is malformed
        """
        owner, repo_name = split_repository(repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = await get_github_pat_client(github_pat_token=github_pat_token, github_api_url=github_api_url)
        return cls(client, owner, repo_name)

    async def _paginate(self, fetch_page: Callable[[int], Awaitable[list[T]]], resource: str) -> AsyncIterator[list[T]]:
        """Yield pages until GitHub returns an empty or short page."""
        page: int = 1
        while True:
            logger.debug(f"Fetching {resource} page {page}")
            items = await fetch_page(page)
            if not items:
                break
            yield items
            if len(items) < self.per_page:
                break
            page += 1

    # Issues
    @handle_upstream_errors
    async def get_issue_page(
        self,
        page: int,
        state: Literal["open", "closed", "all"] = "open",
        labels: list[str] | None = None,
        sort: Literal["created", "updated", "comments"] = "created",
        direction: Literal["asc", "desc"] = "asc",
    ) -> list[Issue]:
        """Fetch one page of issues for a repository, in API order.

        Pull requests are included and flagged with ``is_pull_request``.
        """
        params = self._omit_null_parameters(
            state=state,
            labels=",".join(labels) if labels else None,
            sort=sort,
            direction=direction,
        )
        response: Response[list[GitHubIssue]] = await self.client.rest.issues.async_list_for_repo(
            owner=self.owner,
            repo=self.repo_name,
            per_page=self.per_page,
            page=page,
            **params,
        )
        return [to_issue(raw) for raw in response.parsed_data]

    async def iter_issue_pages(
        self,
        state: Literal["open", "closed", "all"] = "open",
        labels: list[str] | None = None,
        sort: Literal["created", "updated", "comments"] = "created",
        direction: Literal["asc", "desc"] = "asc",
    ) -> AsyncIterator[list[Issue]]:
        """Yield pages of issues for a repository, in API order, starting at the first page."""

        async def fetch_page(page: int) -> list[Issue]:
            return await self.get_issue_page(page, state=state, labels=labels, sort=sort, direction=direction)

        async for issues in self._paginate(fetch_page, "issues"):
            yield issues

    # Issue events
    @handle_upstream_errors
    async def get_issue_event_page(self, page: int) -> list[IssueEvent]:
        """Fetch one page of repository issue events, newest first.

        Events that are not attached to an issue stay on the page with
        ``issue=None``, so page lengths match what GitHub returned.
        """
        logger.debug("Fetching issue events page", page=page)
        response: Response[list[GitHubIssueEvent]] = await self.client.rest.issues.async_list_events_for_repo(
            owner=self.owner,
            repo=self.repo_name,
            per_page=self.per_page,
            page=page,
        )
        return [to_issue_event(raw) for raw in response.parsed_data]

    # Issue comments
    @handle_upstream_errors
    async def _fetch_issue_comment_page(self, page: int, issue_number: int) -> list[Comment]:
        response: Response[list[IssueComment]] = await self.client.rest.issues.async_list_comments(
            owner=self.owner,
            repo=self.repo_name,
            issue_number=issue_number,
            per_page=self.per_page,
            page=page,
        )
        return [to_comment(raw) for raw in response.parsed_data]

    async def list_issue_comments(self, issue_number: int) -> list[Comment]:
        """List all comments on an issue, oldest first, handling pagination."""

        async def fetch_page(page: int) -> list[Comment]:
            return await self._fetch_issue_comment_page(page, issue_number=issue_number)

        all_comments: list[Comment] = []
        async for comments in self._paginate(fetch_page, f"issue #{issue_number} comments"):
            all_comments.extend(comments)
        logger.debug("Fetched issue comments", issue_number=issue_number, total_comments=len(all_comments))
        return all_comments
