"""Pytest configuration for integration tests."""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


@pytest.fixture(autouse=True, scope="session")
def load_env() -> None:
    """Load environment variables from .env file before running integration tests.

    This fixture is automatically used for all tests in this directory and its subdirectories.
    It loads environment variables from:
    1. .env.integration (if it exists)
    2. .env (if it exists)

    The .env.integration file takes precedence over .env.
    """
    project_root = Path(__file__).parent.parent.parent

    integration_env = project_root / ".env.integration"
    if integration_env.exists():
        load_dotenv(dotenv_path=integration_env)

    default_env = project_root / ".env"
    if default_env.exists():
        load_dotenv(dotenv_path=default_env)


@pytest.fixture
def github_token(load_env: None) -> str:
    """Return the PAT used against the live GitHub API, skipping when none is configured."""
    token = os.getenv("GITHUB_PAT_TOKEN")
    if not token:
        pytest.skip("GITHUB_PAT_TOKEN is not set in .env.integration, .env or the environment")
    return token
