"""Sets up the authenticated githubkit client."""

from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

from triage_tracker.utils.constants import DEFAULT_GITHUB_API_URL

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy]


async def get_github_pat_client(github_pat_token: str, github_api_url: str = DEFAULT_GITHUB_API_URL) -> GitHubClient:
    """Returns an authenticated GitHub client using GitHub PAT credentials.

    HTTP caching is disabled to always get fresh data, and githubkit's automatic
    retry is disabled so failed requests surface immediately.
    """
    if not github_pat_token:
        raise RuntimeError("GitHub PAT authentication requires github_pat_token in config.")
    return GitHub(
        auth=TokenAuthStrategy(github_pat_token),
        base_url=github_api_url,
        http_cache=False,
        auto_retry=False,
    )
