"""GitHub integration for stud."""

from stud.github.base import PullRequestProvider
from stud.github.client import GitHubClient
from stud.github.exceptions import GitHubAPIError, GitHubAuthError, GitHubError
from stud.github.models import PullRequest, parse_github_remote

__all__ = [
    "GitHubAPIError",
    "GitHubAuthError",
    "GitHubClient",
    "GitHubError",
    "PullRequest",
    "PullRequestProvider",
    "parse_github_remote",
]
