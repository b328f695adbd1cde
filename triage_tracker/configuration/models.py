"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass

from triage_tracker.utils.constants import DEFAULT_GITHUB_API_URL, TARGET_REPOSITORY


@dataclass
class BaseConfig:
    """Configuration shared by every triage-tracker command."""

    github_pat_token: str
    github_api_url: str = DEFAULT_GITHUB_API_URL
    debug: bool = False
    repo: str = TARGET_REPOSITORY
