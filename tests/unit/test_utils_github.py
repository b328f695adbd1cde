"""Contains unit tests for the utils.github module."""

import pytest

from triage_tracker.utils.github import issue_url, split_repository


def test_split_target_repository() -> None:
    """Test splitting the tracked repository."""
    assert split_repository() == ("rust-lang", "rust")


def test_split_other_repository() -> None:
    """Test splitting an explicit repository slug."""
    owner, repo = split_repository("octocat/Hello-World")
    assert owner == "octocat"
    assert repo == "Hello-World"


@pytest.mark.parametrize(
    "malformed_repo",
    [
        pytest.param("", id="empty string"),
        pytest.param("/", id="only a slash"),
        pytest.param("rust-lang-rust", id="no slash"),
        pytest.param("rust-lang/rust/extra", id="too many parts"),
        pytest.param("/rust", id="missing owner"),
        pytest.param("rust-lang/", id="missing name"),
    ],
)
def test_split_repository_various_malformed(malformed_repo: str) -> None:
    """Test that ValueError is raised if repo is malformed (various cases)."""
    with pytest.raises(ValueError, match="format 'owner/name'"):
        split_repository(malformed_repo)


def test_issue_url_defaults_to_target_repository() -> None:
    """Test the web URL of an issue in the tracked repository."""
    assert issue_url(12345) == "https://github.com/rust-lang/rust/issues/12345"


def test_issue_url_other_repository() -> None:
    """Test the web URL of an issue in another repository."""
    assert issue_url(1, "octocat/Hello-World") == "https://github.com/octocat/Hello-World/issues/1"
