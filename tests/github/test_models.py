"""Tests for GitHub models."""

import pytest

from stud.github.models import PullRequest, parse_github_remote


def _pull_request_data(
    number: int = 1,
    state: str = "open",
    head_ref: str | None = "feature/login",
    head_repo: str | None = "acme/widgets",
    base_repo: str | None = "acme/widgets",
) -> dict:
    return {
        "number": number,
        "state": state,
        "title": "Some change",
        "head": {"ref": head_ref, "repo": {"full_name": head_repo} if head_repo else None},
        "base": {"ref": "develop", "repo": {"full_name": base_repo} if base_repo else None},
        "merged_at": None,
    }


class TestPullRequest:
    """Tests for PullRequest model."""

    def test_parse_api_payload(self) -> None:
        """Test parsing a pull request with extra fields."""
        pull_request = PullRequest.model_validate(_pull_request_data(number=42))

        assert pull_request.number == 42
        assert pull_request.head_ref == "feature/login"
        assert pull_request.head_repo_full_name == "acme/widgets"
        assert pull_request.base_repo_full_name == "acme/widgets"
        assert pull_request.is_open is True

    def test_closed_pull_request(self) -> None:
        """Test closed pull requests are not open."""
        pull_request = PullRequest.model_validate(_pull_request_data(state="closed"))

        assert pull_request.is_open is False

    def test_same_repository(self) -> None:
        """Test pull request from a branch of the same repository."""
        pull_request = PullRequest.model_validate(_pull_request_data())

        assert pull_request.is_same_repository is True

    def test_fork_pull_request(self) -> None:
        """Test pull request opened from a fork."""
        pull_request = PullRequest.model_validate(_pull_request_data(head_repo="someone/widgets"))

        assert pull_request.is_same_repository is False

    @pytest.mark.parametrize(
        ("head_repo", "base_repo"),
        [(None, "acme/widgets"), ("acme/widgets", None), (None, None)],
    )
    def test_missing_repository_is_not_same(self, head_repo: str | None, base_repo: str | None) -> None:
        """Test that missing repository data never counts as same repository."""
        pull_request = PullRequest.model_validate(_pull_request_data(head_repo=head_repo, base_repo=base_repo))

        assert pull_request.is_same_repository is False

    def test_minimal_payload(self) -> None:
        """Test pull request without head and base data."""
        pull_request = PullRequest.model_validate({"number": 7, "state": "open"})

        assert pull_request.head_ref is None
        assert pull_request.is_same_repository is False


class TestParseGitHubRemote:
    """Tests for parse_github_remote."""

    @pytest.mark.parametrize(
        "url",
        [
            "git@github.com:acme/widgets.git",
            "git@github.com:acme/widgets",
            "https://github.com/acme/widgets.git",
            "https://github.com/acme/widgets",
            "https://github.com/acme/widgets/",
            "ssh://git@github.com/acme/widgets.git",
            "https://token@github.com/acme/widgets.git",
        ],
    )
    def test_github_urls(self, url: str) -> None:
        """Test SSH and HTTPS GitHub URLs."""
        assert parse_github_remote(url) == ("acme", "widgets")

    def test_repository_name_with_dots(self) -> None:
        """Test repository names containing dots."""
        assert parse_github_remote("git@github.com:acme/widgets.io.git") == ("acme", "widgets.io")

    @pytest.mark.parametrize(
        "url",
        [None, "", "git@gitlab.com:acme/widgets.git", "/srv/git/widgets.git", "https://github.com/acme"],
    )
    def test_non_github_urls(self, url: str | None) -> None:
        """Test URLs that do not point to a GitHub repository."""
        assert parse_github_remote(url) is None
