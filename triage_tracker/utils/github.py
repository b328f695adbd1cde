"""Contains utility functions for GitHub interactions."""

from triage_tracker.utils.constants import ISSUE_URL_TEMPLATE, TARGET_REPOSITORY


def split_repository(repository: str = TARGET_REPOSITORY) -> tuple[str, str]:
    """Splits an 'owner/name' repository slug into owner and name."""
    owner, _, name = repository.partition("/")
    if not owner or not name or "/" in name:
        raise ValueError(f"Repository must be in the format 'owner/name', got '{repository}'")
    return owner, name


def issue_url(issue_number: int, repository: str = TARGET_REPOSITORY) -> str:
    """Web URL of an issue in the repository."""
    return ISSUE_URL_TEMPLATE.format(repository=repository, number=issue_number)
