"""Tests for GitHub client."""

import httpx
import pytest
import respx

from stud.config import StudConfig
from stud.github import GitHubAPIError, GitHubAuthError, GitHubClient
from stud.github.client import PAGE_SIZE

PULLS_URL = "https://api.github.test/repos/acme/widgets/pulls"


def _pull_request_data(number: int, head_ref: str, head_repo: str = "acme/widgets", state: str = "open") -> dict:
    return {
        "number": number,
        "state": state,
        "head": {"ref": head_ref, "repo": {"full_name": head_repo}},
        "base": {"ref": "develop", "repo": {"full_name": "acme/widgets"}},
    }


@pytest.fixture
def config() -> StudConfig:
    """Create test configuration."""
    return StudConfig(github_token="test-token", github_api_url="https://api.github.test/")


@pytest.fixture
def client(config: StudConfig) -> GitHubClient:
    """Create an unopened client for acme/widgets."""
    return GitHubClient(config, "acme", "widgets")


class TestGitHubClient:
    """Tests for GitHubClient."""

    def test_init(self, client: GitHubClient, config: StudConfig) -> None:
        """Test client initialization."""
        assert client.config == config
        assert client.base_url == "https://api.github.test"
        assert client.full_name == "acme/widgets"
        assert client._client is None

    def test_headers(self, client: GitHubClient) -> None:
        """Test authentication and media type headers."""
        headers = client._get_headers()

        assert headers["Authorization"] == "Bearer test-token"
        assert headers["Accept"] == "application/vnd.github+json"
        assert headers["User-Agent"].startswith("stud/")

    def test_headers_without_token(self) -> None:
        """Test that no Authorization header is sent without a token."""
        client = GitHubClient(StudConfig(github_token=None), "acme", "widgets")

        assert "Authorization" not in client._get_headers()

    def test_requires_context_manager(self, client: GitHubClient) -> None:
        """Test that requests fail outside the context manager."""
        with pytest.raises(RuntimeError, match="context manager"):
            client.list_pull_requests()

    def test_context_manager_closes_client(self, client: GitHubClient) -> None:
        """Test the HTTP client lifecycle."""
        with client as opened:
            assert opened is client
            assert client._client is not None

        assert client._client is None


class TestListPullRequests:
    """Tests for list_pull_requests."""

    @respx.mock
    def test_single_page(self, client: GitHubClient) -> None:
        """Test listing when everything fits on one page."""
        route = respx.get(PULLS_URL).mock(
            return_value=httpx.Response(
                200,
                json=[_pull_request_data(1, "feature/a"), _pull_request_data(2, "feature/b", state="closed")],
            )
        )

        with client:
            pull_requests = client.list_pull_requests("all")

        assert [pr.number for pr in pull_requests] == [1, 2]
        assert route.call_count == 1
        request = route.calls.last.request
        assert request.url.params["state"] == "all"
        assert request.url.params["per_page"] == str(PAGE_SIZE)
        assert request.url.params["page"] == "1"
        assert request.url.params["sort"] == "created"
        assert request.url.params["direction"] == "asc"
        assert request.headers["Authorization"] == "Bearer test-token"

    @respx.mock
    def test_follows_pagination(self, client: GitHubClient) -> None:
        """Test that full pages trigger another request."""
        pages = {
            "1": [_pull_request_data(i, f"feature/{i}") for i in range(PAGE_SIZE)],
            "2": [_pull_request_data(1000, "feature/last")],
        }

        def respond(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=pages[request.url.params["page"]])

        route = respx.get(PULLS_URL).mock(side_effect=respond)

        with client:
            pull_requests = client.list_pull_requests()

        assert len(pull_requests) == PAGE_SIZE + 1
        assert pull_requests[-1].head_ref == "feature/last"
        assert route.call_count == 2

    @respx.mock
    def test_empty_repository(self, client: GitHubClient) -> None:
        """Test listing a repository without pull requests."""
        respx.get(PULLS_URL).mock(return_value=httpx.Response(200, json=[]))

        with client:
            assert client.list_pull_requests() == []

    @pytest.mark.parametrize("status_code", [401, 403])
    @respx.mock
    def test_auth_error(self, client: GitHubClient, status_code: int) -> None:
        """Test authentication failures."""
        respx.get(PULLS_URL).mock(return_value=httpx.Response(status_code, json={"message": "Bad credentials"}))

        with client, pytest.raises(GitHubAuthError, match="GITHUB_TOKEN"):
            client.list_pull_requests()

    @respx.mock
    def test_api_error(self, client: GitHubClient) -> None:
        """Test server errors carry the status code."""
        respx.get(PULLS_URL).mock(return_value=httpx.Response(502, text="Bad gateway"))

        with client, pytest.raises(GitHubAPIError) as exc_info:
            client.list_pull_requests()

        assert exc_info.value.status_code == 502

    @respx.mock
    def test_network_error(self, client: GitHubClient) -> None:
        """Test transport failures are wrapped."""
        respx.get(PULLS_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with client, pytest.raises(GitHubAPIError, match="HTTP error"):
            client.list_pull_requests()

    @respx.mock
    def test_unexpected_payload(self, client: GitHubClient) -> None:
        """Test a non-list response is rejected."""
        respx.get(PULLS_URL).mock(return_value=httpx.Response(200, json={"message": "nope"}))

        with client, pytest.raises(GitHubAPIError, match="expected a list"):
            client.list_pull_requests()


class TestFindPullRequestByBranch:
    """Tests for find_pull_request_by_branch."""

    @respx.mock
    def test_found(self, client: GitHubClient) -> None:
        """Test the head filter and result."""
        route = respx.get(PULLS_URL).mock(
            return_value=httpx.Response(200, json=[_pull_request_data(5, "feature/a")])
        )

        with client:
            pull_request = client.find_pull_request_by_branch("feature/a")

        assert pull_request is not None
        assert pull_request.number == 5
        params = route.calls.last.request.url.params
        assert params["head"] == "acme:feature/a"
        assert params["state"] == "all"

    @respx.mock
    def test_not_found(self, client: GitHubClient) -> None:
        """Test branch without pull requests."""
        respx.get(PULLS_URL).mock(return_value=httpx.Response(200, json=[]))

        with client:
            assert client.find_pull_request_by_branch("feature/a") is None

    @respx.mock
    def test_ignores_fork_and_other_branches(self, client: GitHubClient) -> None:
        """Test that only same-repository pull requests for the branch match."""
        respx.get(PULLS_URL).mock(
            return_value=httpx.Response(
                200,
                json=[
                    _pull_request_data(6, "feature/a", head_repo="someone/widgets"),
                    _pull_request_data(7, "feature/other"),
                ],
            )
        )

        with client:
            assert client.find_pull_request_by_branch("feature/a") is None

    @respx.mock
    def test_prefers_open_pull_request(self, client: GitHubClient) -> None:
        """Test an open pull request wins over a newer closed one for the same branch."""
        respx.get(PULLS_URL).mock(
            return_value=httpx.Response(
                200,
                json=[
                    _pull_request_data(9, "feature/a", state="closed"),
                    _pull_request_data(5, "feature/a"),
                ],
            )
        )

        with client:
            pull_request = client.find_pull_request_by_branch("feature/a")

        assert pull_request is not None
        assert pull_request.number == 5

    @respx.mock
    def test_closed_only(self, client: GitHubClient) -> None:
        """Test the first closed match is returned when nothing is open."""
        respx.get(PULLS_URL).mock(
            return_value=httpx.Response(
                200,
                json=[
                    _pull_request_data(9, "feature/a", state="closed"),
                    _pull_request_data(5, "feature/a", state="closed"),
                ],
            )
        )

        with client:
            pull_request = client.find_pull_request_by_branch("feature/a")

        assert pull_request is not None
        assert pull_request.number == 9
