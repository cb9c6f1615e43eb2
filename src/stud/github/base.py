"""Abstract pull request provider used by branch cleanup."""

from abc import ABC, abstractmethod

from stud.github.models import PullRequest


class PullRequestProvider(ABC):
    """Source of pull request data for the repository being cleaned."""

    @abstractmethod
    def list_pull_requests(self, state: str = "all") -> list[PullRequest]:
        """List every pull request of the repository.

        Args:
            state: "open", "closed" or "all"

        Returns:
            Pull requests in any order

        Raises:
            GitHubError: If the pull requests cannot be fetched
        """

    @abstractmethod
    def find_pull_request_by_branch(self, branch: str, state: str = "all") -> PullRequest | None:
        """Find the same-repository pull request opened from a branch.

        Args:
            branch: Branch name without remote prefix
            state: "open", "closed" or "all"

        Returns:
            Matching pull request, or None if there is none

        Raises:
            GitHubError: If the lookup fails
        """
