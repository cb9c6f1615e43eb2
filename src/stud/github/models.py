"""Models for GitHub API responses."""

import re

from pydantic import BaseModel, Field

# git@github.com:owner/repo.git, ssh://git@github.com/owner/repo, https://github.com/owner/repo.git
_GITHUB_REMOTE_PATTERN = re.compile(r"github\.com[:/](?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?/?$")


class RepositoryRef(BaseModel):
    """Repository a pull request side belongs to."""

    model_config = {"extra": "ignore"}

    full_name: str | None = Field(default=None, description="owner/name of the repository")


class PullRequestSide(BaseModel):
    """Head or base of a pull request."""

    model_config = {"extra": "ignore"}

    ref: str | None = Field(default=None, description="Branch name")
    repo: RepositoryRef | None = Field(default=None, description="Repository (null for deleted forks)")


class PullRequest(BaseModel):
    """Represents a GitHub pull request."""

    model_config = {"extra": "ignore"}

    number: int = Field(description="Pull request number")
    state: str = Field(description="Pull request state (open, closed)")
    head: PullRequestSide = Field(default_factory=PullRequestSide)
    base: PullRequestSide = Field(default_factory=PullRequestSide)
    merged_at: str | None = Field(default=None, description="Merge timestamp, if merged")

    @property
    def head_ref(self) -> str | None:
        """Branch the pull request was opened from."""
        return self.head.ref

    @property
    def head_repo_full_name(self) -> str | None:
        """Full name of the repository holding the head branch."""
        return self.head.repo.full_name if self.head.repo else None

    @property
    def base_repo_full_name(self) -> str | None:
        """Full name of the repository the pull request targets."""
        return self.base.repo.full_name if self.base.repo else None

    @property
    def is_same_repository(self) -> bool:
        """Check that head and base live in the same repository.

        Fork pull requests, and pull requests with missing repository data,
        never correspond to a branch of this repository.

        Returns:
            True if head and base repository full names are present and equal
        """
        head_repo = self.head_repo_full_name
        base_repo = self.base_repo_full_name
        return bool(head_repo) and bool(base_repo) and head_repo == base_repo

    @property
    def is_open(self) -> bool:
        """Check if the pull request is open.

        Returns:
            True if state is "open"
        """
        return self.state == "open"


def parse_github_remote(url: str | None) -> tuple[str, str] | None:
    """Extract owner and repository name from a GitHub remote URL.

    Args:
        url: Remote URL in SSH or HTTPS form

    Returns:
        (owner, name) tuple, or None if the URL does not point to GitHub
    """
    if not url:
        return None
    match = _GITHUB_REMOTE_PATTERN.search(url.strip())
    if not match:
        return None
    return match.group("owner"), match.group("name")
