"""Reconciles command line arguments into validated queries and GitHub authentication."""

from datetime import date, datetime

from triage_tracker.configuration.exceptions import GitHubAuthenticationConfigurationUndefinedError, InvalidArgumentError
from triage_tracker.schemas.queries import DateWindow, TriageQuery
from triage_tracker.utils.constants import ISO_DATE_FORMAT, ISO_DATE_PATTERN


async def validate_github_authentication_configuration(github_pat_token: str | None) -> str:
    """Validates the GitHub authentication configuration.

    Args:
        github_pat_token (str | None): The GitHub PAT token.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If no token is configured.

    Returns:
        str: The token to authenticate with.
    """
    if github_pat_token is None or not github_pat_token.strip():
        raise GitHubAuthenticationConfigurationUndefinedError(
            "No GitHub authentication configuration provided. Please provide a PAT "
            "(command line option --github-pat-token, environment variable GITHUB_PAT_TOKEN)."
        )
    return github_pat_token.strip()


def parse_iso_date(value: str, param_hint: str | None = None) -> date:
    """Parses a YYYY-MM-DD calendar date.

    Raises:
        InvalidArgumentError: If the value is not a valid ISO calendar date.
    """
    value = value.strip()
    if not ISO_DATE_PATTERN.fullmatch(value):
        raise InvalidArgumentError(f"Invalid date '{value}': expected YYYY-MM-DD", param_hint=param_hint)
    try:
        return datetime.strptime(value, ISO_DATE_FORMAT).date()
    except ValueError as exc:
        raise InvalidArgumentError(f"Invalid date '{value}': {exc}", param_hint=param_hint) from exc


def reconcile_date_window(date_value: str | None, start_value: str | None, end_value: str | None, today: date) -> DateWindow:
    """Builds the DateWindow for a closings command.

    Exactly one of ``date_value`` or the ``start_value``/``end_value`` pair must
    be given. Windows reaching past ``today`` are rejected since no events exist
    for them yet.
    """
    if date_value is not None:
        if start_value is not None or end_value is not None:
            raise InvalidArgumentError("Use either a single date or --start/--end, not both")
        window = DateWindow.single(parse_iso_date(date_value, param_hint="'DATE' / '--date'"))
    elif start_value is not None and end_value is not None:
        window = DateWindow(
            start=parse_iso_date(start_value, param_hint="'--start'"),
            end=parse_iso_date(end_value, param_hint="'--end'"),
        )
    elif start_value is not None or end_value is not None:
        raise InvalidArgumentError("Both --start and --end are required for a date range", param_hint="'--start' / '--end'")
    else:
        raise InvalidArgumentError("Provide a single date (DATE or --date) or a range (--start and --end)")

    if window.end > today:
        raise InvalidArgumentError(
            f"Date {window.end.strftime(ISO_DATE_FORMAT)} is in the future (today is {today.strftime(ISO_DATE_FORMAT)})"
        )
    return window


def reconcile_triage_query(labels: list[str] | None, since_value: str | None, limit: int | None, today: date) -> TriageQuery:
    """Builds the TriageQuery for a triaged command, defaulting the cutoff to one year before ``today``."""
    label_filter = tuple(label.strip() for label in labels or [] if label.strip())
    if limit is not None and limit < 1:
        raise InvalidArgumentError(f"Limit must be a positive number, got {limit}", param_hint="'--limit'")
    if since_value is None:
        return TriageQuery.with_default_cutoff(today=today, labels=label_filter, limit=limit)
    return TriageQuery(cutoff=parse_iso_date(since_value, param_hint="'--since'"), labels=label_filter, limit=limit)
