#!/usr/bin/env python3
"""GitHub REST API client for the reads needed to establish a release context.

Only two listings are required: closed pull requests (to find the one whose
merge produced the triggering commit) and repository tags (to find the
current version). Both are paginated; pull requests are yielded lazily so the
caller can stop as soon as it finds a match.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

import requests

from configs.config import Config


class GithubAuthError(Exception):
    """Raised when GitHub API authentication fails."""

    def __init__(self, message: str, code: str = "UNAUTHORIZED") -> None:
        super().__init__(message)
        self.code = code


class GithubApiError(Exception):
    """Raised when GitHub API operations fail."""

    def __init__(self, message: str, code: str = "UNKNOWN") -> None:
        super().__init__(message)
        self.code = code


class GithubClient:
    """Thin client over the GitHub REST API.

    No retry policy is mounted on the session: a failed request aborts the run.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        timeout_s: Optional[int] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize GitHub client.

        Args:
            token: GitHub token (defaults to Config.GITHUB_TOKEN)
            timeout_s: Request timeout in seconds (defaults to Config.HTTP_TIMEOUT_S)
            session: Optional pre-built session (used by tests)
            logger: Logger to use (defaults to the module logger)

        Raises:
            GithubAuthError: If no valid token is provided
        """
        github_config = Config.get_github_config()
        self.token = token or github_config["token"]
        self.timeout_s = timeout_s or github_config["timeout_s"]
        self.base_url = github_config["api_url"]
        self.page_size = github_config["page_size"]
        self.max_pages = github_config["max_pages"]
        self._logger = logger or logging.getLogger(__name__)

        if not self.token:
            raise GithubAuthError("GitHub token is required (token input or GITHUB_TOKEN env var)")

        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': github_config["user_agent"],
        })

        self._logger.debug("GitHub client initialized")

    def _get(self, url: str, params: Dict[str, Any], what: str) -> Any:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout_s)
        except requests.Timeout as e:
            raise GithubApiError(f"Timed out fetching {what}: {e}", code="TIMEOUT") from e
        except requests.RequestException as e:
            raise GithubApiError(f"Failed to fetch {what}: {e}", code="NETWORK") from e

        if response.status_code == 401:
            raise GithubAuthError("Invalid GitHub token or insufficient permissions")
        elif response.status_code == 403:
            raise GithubApiError(f"Access to {what} forbidden (HTTP 403)", code="FORBIDDEN")
        elif response.status_code == 404:
            raise GithubApiError(f"{what} not found", code="NOT_FOUND")
        elif response.status_code != 200:
            raise GithubApiError(f"GitHub API error: HTTP {response.status_code}", code="HTTP_ERROR")
        return response.json()

    def _paginate(self, url: str, params: Dict[str, Any], what: str) -> Iterator[Dict[str, Any]]:
        page = 1
        while True:
            page_params = dict(params, page=page, per_page=self.page_size)
            items = self._get(url, page_params, what)
            if not items:
                return
            self._logger.debug(f"Fetched page {page} of {what} ({len(items)} items)")
            yield from items
            if len(items) < self.page_size:
                return
            page += 1
            if self.max_pages and page > self.max_pages:
                self._logger.warning(f"Stopped listing {what} after {self.max_pages} pages")
                return

    def iter_closed_pull_requests(self, owner: str, repo: str) -> Iterator[Dict[str, Any]]:
        """Yield closed pull requests, most recently updated first.

        Pages are requested on demand, so stopping iteration early avoids
        fetching the rest of the listing.

        Args:
            owner: Repository owner
            repo: Repository name

        Yields:
            Raw pull request dictionaries

        Raises:
            GithubApiError: If an API request fails
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/pulls"
        params = {'state': 'closed', 'sort': 'updated', 'direction': 'desc'}
        self._logger.debug(f"Listing closed pull requests: {owner}/{repo}")
        return self._paginate(url, params, f"pull requests of {owner}/{repo}")

    def list_tag_names(self, owner: str, repo: str) -> List[str]:
        """Fetch the names of all tags in a repository.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            Tag names in the order the API returns them

        Raises:
            GithubApiError: If an API request fails
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/tags"
        self._logger.debug(f"Listing tags: {owner}/{repo}")
        names = [tag.get("name", "") for tag in self._paginate(url, {}, f"tags of {owner}/{repo}")]
        self._logger.debug(f"✓ Retrieved {len(names)} tags for {owner}/{repo}")
        return names

    def close(self) -> None:
        """Close the GitHub client session."""
        if self.session:
            self.session.close()
            self._logger.debug("GitHub client session closed")
