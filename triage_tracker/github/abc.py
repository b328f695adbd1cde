"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Literal

from triage_tracker.schemas.github import Comment, Issue, IssueEvent


class GitHubClientBase(ABC):
    """Base ABC for read-only GitHub clients bound to one repository."""

    # Issues
    @abstractmethod
    async def get_issue_page(
        self,
        page: int,
        state: Literal["open", "closed", "all"] = "open",
        labels: list[str] | None = None,
        sort: Literal["created", "updated", "comments"] = "created",
        direction: Literal["asc", "desc"] = "asc",
    ) -> list[Issue]:
        """Fetch one page (1-based) of issues for a repository, in API order."""
        pass

    @abstractmethod
    def iter_issue_pages(
        self,
        state: Literal["open", "closed", "all"] = "open",
        labels: list[str] | None = None,
        sort: Literal["created", "updated", "comments"] = "created",
        direction: Literal["asc", "desc"] = "asc",
    ) -> AsyncIterator[list[Issue]]:
        """Yield pages of issues for a repository, in API order."""
        pass

    # Issue events
    @abstractmethod
    async def get_issue_event_page(self, page: int) -> list[IssueEvent]:
        """Fetch one page (1-based) of repository issue events, newest first."""
        pass

    # Issue comments
    @abstractmethod
    async def list_issue_comments(self, issue_number: int) -> list[Comment]:
        """List all comments on an issue, oldest first."""
        pass
