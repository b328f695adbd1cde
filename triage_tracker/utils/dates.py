"""Calendar helpers shared by the closings and triage workflows."""

from datetime import date, datetime, timezone


def utc_date(timestamp: datetime) -> date:
    """Return the UTC calendar day of a timestamp, treating naive values as UTC."""
    if timestamp.tzinfo is None:
        return timestamp.date()
    return timestamp.astimezone(timezone.utc).date()


def one_year_before(day: date) -> date:
    """Return the same calendar day one year earlier (29 February maps to 28 February)."""
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        return day.replace(year=day.year - 1, day=28)


def utc_today() -> date:
    """Return the current UTC calendar day, the day boundary every report uses."""
    return datetime.now(timezone.utc).date()
