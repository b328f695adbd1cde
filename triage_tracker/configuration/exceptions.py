"""Contains exceptions raised when reconciling application configuration."""


class GitHubAuthenticationConfigurationUndefinedError(Exception):
    """Raised when the GitHub authentication configuration is undefined."""

    pass


class InvalidArgumentError(ValueError):
    """Raised when a command line argument cannot be turned into a valid query."""

    def __init__(self, message: str, param_hint: str | None = None) -> None:
        """Initializes the exception with the offending parameter, if known."""
        super().__init__(message)
        self.param_hint = param_hint
