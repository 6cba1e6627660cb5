"""GitHub API client."""

import logging
import os
import time
from typing import Any, Dict, List, Optional

import requests

from ghmilestones.errors import (
    GitHubAPIError,
    GitHubAuthError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    MalformedResponseError,
)

logger = logging.getLogger(__name__)


class GitHubClient:
    """Lightweight GitHub REST client.

    Retries connection failures and 5xx answers with exponential backoff;
    4xx answers are raised straight away as typed errors.
    """

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        """Initialize GitHub client.

        Args:
            token: GitHub personal access token. If None, reads from GITHUB_TOKEN env var.
            base_url: API root. If None, reads GITHUB_API_URL or uses api.github.com.
            timeout: Per-request timeout in seconds.
            max_retries: Attempts per request before giving up.
            session: Optional pre-built requests session.
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        self.base_url = (base_url or os.getenv("GITHUB_API_URL") or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.session = session or requests.Session()
        if self.token:
            self.session.headers.update({"Authorization": f"token {self.token}"})
        self.session.headers.update({"Accept": "application/vnd.github.v3+json"})

    def _raise_for_status(self, response: requests.Response, endpoint: str):
        status = response.status_code
        if status < 400:
            return
        try:
            message = response.json().get("message") or response.reason
        except ValueError:
            message = response.reason or (response.text or "")[:300]
        text = f"HTTP {status} for {endpoint}: {message}"

        if status == 401:
            raise GitHubAuthError(text, status, endpoint)
        if status == 404:
            raise GitHubNotFoundError(text, status, endpoint)
        if status == 429 or (status == 403 and response.headers.get("X-RateLimit-Remaining") == "0"):
            raise GitHubRateLimitError(text, status, endpoint)
        raise GitHubAPIError(text, status, endpoint)

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        """Make API request with retry logic.

        Args:
            method: HTTP method.
            path: Path under the API root, e.g. ``/repos/a/b/milestones``.
            **kwargs: Additional request arguments.

        Returns:
            Response object.

        Raises:
            GitHubAPIError: On API failure after retries.
        """
        url = f"{self.base_url}{path}"
        kwargs.setdefault("timeout", self.timeout)
        for attempt in range(self.max_retries):
            last_attempt = attempt == self.max_retries - 1
            try:
                response = self.session.request(method, url, **kwargs)
            except requests.RequestException as e:
                if last_attempt:
                    raise GitHubAPIError(f"Request to {path} failed: {e}", 0, path) from e
                logger.warning("Request to %s failed (%s), retrying", path, e)
                time.sleep(2 ** attempt)
                continue

            if response.status_code >= 500 and not last_attempt:
                logger.warning("HTTP %s from %s, retrying", response.status_code, path)
                time.sleep(2 ** attempt)
                continue

            self._raise_for_status(response, path)
            return response
        raise GitHubAPIError(f"Request to {path} failed after retries", 0, path)

    def list_milestones(
        self,
        owner: str,
        repo: str,
        state: str = "open",
        sort: str = "updated",
        direction: str = "desc",
        per_page: int = 30,
    ) -> List[Dict[str, Any]]:
        """List one page of milestones for a repository.

        Args:
            owner: Repository owner.
            repo: Repository name.
            state: Lifecycle state (open, closed, all).
            sort: Sort field (due_on, completeness, updated).
            direction: asc or desc.
            per_page: Page size, at most 100.

        Returns:
            List of milestone dicts as returned by GitHub.

        Raises:
            GitHubAPIError: On API failure.
            MalformedResponseError: If the body is not a JSON list.
        """
        path = f"/repos/{owner}/{repo}/milestones"
        params = {"state": state, "sort": sort, "direction": direction, "per_page": per_page}
        response = self._request("GET", path, params=params)
        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Response from {path} is not JSON", response.status_code, path
            ) from e
        if not isinstance(data, list):
            raise MalformedResponseError(
                f"Expected a list of milestones from {path}, got {type(data).__name__}",
                response.status_code,
                path,
            )
        return data
