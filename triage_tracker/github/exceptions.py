"""Exceptions raised when the GitHub API cannot satisfy a request."""


class UpstreamError(Exception):
    """Raised when a GitHub API request fails.

    Covers network failures, timeouts, non-2xx responses, and payloads that
    cannot be decoded. The underlying library exception is chained as
    ``__cause__``.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initializes the exception with the HTTP status code, if there was a response."""
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(UpstreamError):
    """Raised when GitHub rejects a request because of rate limiting."""

    pass
