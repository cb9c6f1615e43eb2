"""Pull request lookup for branch cleanup.

All pull requests are fetched once and indexed by head branch. When that
bulk fetch fails the lookup falls back to one request per branch.
"""

import logging
from abc import ABC, abstractmethod

from stud.github.base import PullRequestProvider
from stud.github.models import PullRequest

logger = logging.getLogger(__name__)


def build_pull_request_index(provider: PullRequestProvider) -> dict[str, PullRequest] | None:
    """Index same-repository pull requests by head branch.

    Pull requests without a head ref, without repository data on either
    side, or opened from a fork are left out. When a branch has several
    pull requests an open one is kept over any closed one; otherwise the
    last one returned wins.

    Args:
        provider: Pull request source

    Returns:
        Mapping of branch name to pull request, or None if the bulk fetch
        failed and the index is unavailable
    """
    try:
        pull_requests = provider.list_pull_requests("all")
    except Exception as e:
        logger.warning(f"Failed to fetch all pull requests, falling back to per-branch lookups: {e}")
        return None

    logger.debug(f"Fetched {len(pull_requests)} pull requests")

    index: dict[str, PullRequest] = {}
    for pull_request in pull_requests:
        if not pull_request.head_ref:
            continue
        if not pull_request.is_same_repository:
            continue
        existing = index.get(pull_request.head_ref)
        if existing is not None and existing.is_open and not pull_request.is_open:
            continue
        index[pull_request.head_ref] = pull_request

    logger.debug(f"Built pull request index with {len(index)} entries")
    return index


class PullRequestLookup(ABC):
    """Finds the pull request associated with a branch."""

    @abstractmethod
    def find(self, branch: str) -> PullRequest | None:
        """Find the same-repository pull request for a branch.

        Args:
            branch: Branch name

        Returns:
            Pull request, or None if the branch has none

        Raises:
            Exception: Implementations may raise on lookup failures
        """


class NullLookup(PullRequestLookup):
    """Lookup used when no pull request provider is configured."""

    def find(self, branch: str) -> PullRequest | None:
        return None


class BulkIndexLookup(PullRequestLookup):
    """Lookup backed by a prebuilt branch index."""

    def __init__(self, index: dict[str, PullRequest]) -> None:
        self.index = index

    def find(self, branch: str) -> PullRequest | None:
        return self.index.get(branch)


class PerBranchLookup(PullRequestLookup):
    """Lookup that queries the provider once per branch."""

    def __init__(self, provider: PullRequestProvider) -> None:
        self.provider = provider

    def find(self, branch: str) -> PullRequest | None:
        pull_request = self.provider.find_pull_request_by_branch(branch, "all")
        if pull_request is None or not pull_request.is_same_repository:
            return None
        return pull_request


def select_pull_request_lookup(provider: PullRequestProvider | None) -> PullRequestLookup:
    """Choose the lookup strategy for a run.

    Args:
        provider: Pull request source, or None when PR checks are disabled

    Returns:
        BulkIndexLookup when the bulk fetch succeeds, PerBranchLookup when it
        fails, NullLookup without a provider
    """
    if provider is None:
        logger.debug("No pull request provider configured, skipping pull request checks")
        return NullLookup()

    index = build_pull_request_index(provider)
    if index is None:
        return PerBranchLookup(provider)
    return BulkIndexLookup(index)
