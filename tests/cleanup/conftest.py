"""Shared fixtures for cleanup tests."""

from collections.abc import Callable, Iterable

import pytest
from rich.console import Console

from stud.cleanup.interaction import UserInteraction
from stud.github.base import PullRequestProvider
from stud.github.exceptions import GitHubAPIError
from stud.github.models import PullRequest
from stud.vcs.base import VCSManager
from stud.vcs.exceptions import (
    BranchNotFullyMergedError,
    BranchNotWritableError,
    VCSOperationError,
)


class FakeVCS(VCSManager):
    """In-memory repository recording every destructive call."""

    def __init__(
        self,
        local: Iterable[str] = (),
        remote: Iterable[str] = (),
        current: str = "develop",
        merged: Iterable[str] = (),
    ) -> None:
        self.local = list(local)
        self.remote = set(remote)
        # What the remote itself reports, as opposed to the tracking refs
        self.live_remote = set(self.remote)
        self.current = current
        self.merged = set(merged)
        self.merge_check_errors: set[str] = set()
        self.refuse_safe_delete: set[str] = set()
        self.not_writable: set[str] = set()
        self.force_delete_errors: set[str] = set()
        self.remote_delete_errors: set[str] = set()
        self.remote_query_error = False
        self.inventory_error = False
        self.delete_calls: list[tuple[str, bool]] = []
        self.remote_delete_calls: list[tuple[str, str]] = []

    def is_repository(self) -> bool:
        return True

    def get_current_branch(self) -> str:
        return self.current

    def get_local_branches(self) -> list[str]:
        if self.inventory_error:
            raise VCSOperationError("Unable to list refs/heads/ refs")
        return list(self.local)

    def get_remote_branches(self, remote_name: str = "origin") -> list[str]:
        return sorted(self.remote)

    def is_merged_into(self, branch: str, base_ref: str) -> bool:
        if branch in self.merge_check_errors:
            raise VCSOperationError(f"Unable to check if {branch} is merged into {base_ref}")
        return branch in self.merged

    def delete_local_branch(self, branch: str, force: bool = False) -> None:
        self.delete_calls.append((branch, force))
        if branch in self.not_writable:
            raise BranchNotWritableError(f"Branch {branch} cannot be modified: cannot lock ref")
        if force and branch in self.force_delete_errors:
            raise VCSOperationError(f"Failed to delete branch {branch}: permission denied")
        if not force and branch in self.refuse_safe_delete:
            raise BranchNotFullyMergedError(f"Branch {branch} is not fully merged")
        self.local.remove(branch)

    def delete_remote_branch(self, remote_name: str, branch: str) -> None:
        self.remote_delete_calls.append((remote_name, branch))
        if branch in self.remote_delete_errors:
            raise VCSOperationError(f"Failed to delete {remote_name}/{branch}: rejected")
        self.remote.discard(branch)
        self.live_remote.discard(branch)

    def remote_branch_exists(self, remote_name: str, branch: str) -> bool:
        if self.remote_query_error:
            raise VCSOperationError(f"Unable to query {remote_name} for {branch}")
        return branch in self.live_remote

    def get_remote_url(self, remote_name: str = "origin") -> str | None:
        return "git@github.com:acme/widgets.git"

    @property
    def deleted(self) -> list[str]:
        """Branches no longer present locally."""
        return [branch for branch, _ in self.delete_calls if branch not in self.local]


class ScriptedInteraction(UserInteraction):
    """Answers prompts from a script and records them."""

    def __init__(self, answer: bool = True, answers: dict[str, bool] | None = None) -> None:
        self.answer = answer
        self.answers = answers or {}
        self.prompts: list[tuple[str, bool]] = []

    def confirm(self, prompt: str, default: bool = False) -> bool:
        self.prompts.append((prompt, default))
        return self.answers.get(prompt, self.answer)


class FakeProvider(PullRequestProvider):
    """Pull request source backed by a list."""

    def __init__(self, pull_requests: list[PullRequest] | None = None) -> None:
        self.pull_requests = pull_requests or []
        self.bulk_error = False
        self.branch_error = False
        self.list_calls = 0
        self.branch_calls: list[str] = []

    def list_pull_requests(self, state: str = "all") -> list[PullRequest]:
        self.list_calls += 1
        if self.bulk_error:
            raise GitHubAPIError("GitHub API Error (Status: 502)", status_code=502)
        return list(self.pull_requests)

    def find_pull_request_by_branch(self, branch: str, state: str = "all") -> PullRequest | None:
        self.branch_calls.append(branch)
        if self.branch_error:
            raise GitHubAPIError("GitHub API Error (Status: 500)", status_code=500)
        for pull_request in self.pull_requests:
            if pull_request.head_ref == branch:
                return pull_request
        return None


def make_pull_request(number: int, branch: str, state: str = "open", fork: bool = False) -> PullRequest:
    """Build a pull request from ``branch`` in acme/widgets or a fork of it."""
    head_repo = "someone/widgets" if fork else "acme/widgets"
    return PullRequest.model_validate(
        {
            "number": number,
            "state": state,
            "head": {"ref": branch, "repo": {"full_name": head_repo}},
            "base": {"ref": "develop", "repo": {"full_name": "acme/widgets"}},
        }
    )


@pytest.fixture
def pull_request_factory() -> Callable[..., PullRequest]:
    """Factory for pull requests."""
    return make_pull_request


@pytest.fixture
def console() -> Console:
    """Console that records output instead of printing."""
    return Console(record=True, width=200)


@pytest.fixture
def interaction() -> ScriptedInteraction:
    """Interaction that accepts every prompt."""
    return ScriptedInteraction(answer=True)


@pytest.fixture
def fake_vcs_factory() -> Callable[..., FakeVCS]:
    """Factory for in-memory repositories."""
    return FakeVCS


@pytest.fixture
def fake_provider_factory() -> Callable[..., FakeProvider]:
    """Factory for in-memory pull request providers."""
    return FakeProvider


@pytest.fixture
def interaction_factory() -> Callable[..., ScriptedInteraction]:
    """Factory for scripted interactions."""
    return ScriptedInteraction
