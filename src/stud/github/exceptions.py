"""GitHub-specific exceptions."""


class GitHubError(Exception):
    """Base exception for GitHub errors."""


class GitHubAuthError(GitHubError):
    """Authentication or authorization failed."""


class GitHubAPIError(GitHubError):
    """API request failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize API error.

        Args:
            message: Error message
            status_code: HTTP status code if available
        """
        super().__init__(message)
        self.status_code = status_code
