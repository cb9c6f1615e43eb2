"""GitHub REST API client."""

import logging
from typing import Any

import httpx

from stud import __version__
from stud.config import StudConfig
from stud.github.base import PullRequestProvider
from stud.github.exceptions import GitHubAPIError, GitHubAuthError
from stud.github.models import PullRequest

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class GitHubClient(PullRequestProvider):
    """Client for the pull request endpoints of the GitHub REST API.

    Must be used as a context manager so the underlying HTTP connection
    pool is closed.
    """

    def __init__(self, config: StudConfig, owner: str, repo: str) -> None:
        """Initialize the GitHub client.

        Args:
            config: Application configuration (token, API URL, timeout)
            owner: Repository owner
            repo: Repository name
        """
        self.config = config
        self.owner = owner
        self.repo = repo
        self.base_url = config.github_api_url
        self._client: httpx.Client | None = None

    @property
    def full_name(self) -> str:
        """Repository full name (owner/repo)."""
        return f"{self.owner}/{self.repo}"

    def _get_headers(self) -> dict[str, str]:
        """Build request headers.

        Returns:
            Headers with bearer authentication when a token is configured
        """
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"stud/{__version__}",
        }
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"
        return headers

    def __enter__(self) -> "GitHubClient":
        self._client = httpx.Client(
            base_url=self.base_url,
            headers=self._get_headers(),
            timeout=self.config.github_timeout,
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """Make an HTTP request to the GitHub API.

        Args:
            method: HTTP method
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for httpx

        Returns:
            Decoded JSON body

        Raises:
            GitHubAuthError: Authentication or authorization failed
            GitHubAPIError: API request failed
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use context manager.")

        try:
            response = self._client.request(method, endpoint, **kwargs)
        except httpx.HTTPError as e:
            raise GitHubAPIError(f"HTTP error: {e}") from e

        if response.status_code in (401, 403):
            raise GitHubAuthError(
                f"GitHub API Error (Status: {response.status_code}) when calling '{method} {endpoint}'. "
                "Check GITHUB_TOKEN."
            )

        if response.status_code >= 400:
            raise GitHubAPIError(
                f"GitHub API Error (Status: {response.status_code}) when calling '{method} {endpoint}'.\n"
                f"Response: {response.text}",
                status_code=response.status_code,
            )

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(f"Invalid JSON from '{method} {endpoint}': {e}") from e

    def _get_pull_request_page(self, params: dict[str, Any]) -> list[PullRequest]:
        """Fetch one page of pull requests.

        Args:
            params: Query parameters for the pulls endpoint

        Returns:
            Parsed pull requests

        Raises:
            GitHubAPIError: If the response is not a list
        """
        data = self._request("GET", f"/repos/{self.owner}/{self.repo}/pulls", params=params)
        if not isinstance(data, list):
            raise GitHubAPIError("Unexpected pulls response: expected a list")
        return [PullRequest.model_validate(item) for item in data]

    def list_pull_requests(self, state: str = "all") -> list[PullRequest]:
        """List every pull request of the repository, following pagination.

        Args:
            state: "open", "closed" or "all"

        Returns:
            All pull requests

        Raises:
            GitHubAuthError: Authentication failed
            GitHubAPIError: API request failed
        """
        pull_requests: list[PullRequest] = []
        page = 1

        while True:
            # Oldest first, so later entries for the same head branch are newer
            params = {"state": state, "sort": "created", "direction": "asc", "per_page": PAGE_SIZE, "page": page}
            logger.debug(f"Fetching pull requests for {self.full_name} with params={params}")
            batch = self._get_pull_request_page(params)
            pull_requests.extend(batch)

            if len(batch) < PAGE_SIZE:
                break
            page += 1

        logger.debug(f"Total pull requests fetched: {len(pull_requests)}")
        return pull_requests

    def find_pull_request_by_branch(self, branch: str, state: str = "all") -> PullRequest | None:
        """Find the same-repository pull request opened from a branch.

        Args:
            branch: Branch name without remote prefix
            state: "open", "closed" or "all"

        Returns:
            Open same-repository pull request if there is one, otherwise the
            newest matching one, or None

        Raises:
            GitHubAuthError: Authentication failed
            GitHubAPIError: API request failed
        """
        params = {"head": f"{self.owner}:{branch}", "state": state, "per_page": PAGE_SIZE}
        matches = [
            pull_request
            for pull_request in self._get_pull_request_page(params)
            if pull_request.head_ref == branch and pull_request.is_same_repository
        ]
        for pull_request in matches:
            if pull_request.is_open:
                return pull_request
        return matches[0] if matches else None
