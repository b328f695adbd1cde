"""Shared constants used across the application."""

# This file is intended to hold shared constants.

import re

# Target Repository Constants
# ---------------------------

TARGET_REPOSITORY = "rust-lang/rust"
"""Repository (owner/repo) every command reports on."""

ISSUE_URL_TEMPLATE = "https://github.com/{repository}/issues/{number}"
"""Template for the web URL of an issue. Use .format(repository=..., number=N)."""

# GitHub API Constants
# --------------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub REST API base URL."""

PER_PAGE = 100
"""Page size requested from every paginated endpoint (GitHub's maximum)."""

RATE_LIMIT_STATUS_CODES = (403, 429)
"""HTTP status codes GitHub uses to signal rate limiting."""

ESTIMATED_EVENT_PAGES_PER_DAY = 4.0
"""Rough number of issue event pages rust-lang/rust produces per day, used to guess where a date starts."""

ESTIMATED_ISSUE_PAGES_PER_DAY = 1 / 6
"""Rough number of pages of newly created issues per day, used to guess where a date starts."""

# Date Constants
# --------------

ISO_DATE_FORMAT = "%Y-%m-%d"
"""Format of every date accepted on the command line and printed in reports."""

CLOSING_EVENT = "closed"
"""Issue event name that removes an issue from the open count."""

REOPENING_EVENT = "reopened"
"""Issue event name that adds an issue back to the open count."""

ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
"""Shape of a YYYY-MM-DD date; month and day ranges are checked when parsing."""
