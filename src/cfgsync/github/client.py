"""GitHub Gist REST API client."""

from __future__ import annotations

import logging
import os
import subprocess
import time
from typing import Any

import httpx

from ..errors import RemoteUnavailableError
from ..models import CommitResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"


class GitHubClientError(RemoteUnavailableError):
    """Base exception for GitHub client errors."""

    pass


class GitHubAuthError(GitHubClientError):
    """Authentication failed."""

    pass


class GitHubNotFoundError(GitHubClientError):
    """Resource not found."""

    pass


class GitHubForbiddenError(GitHubClientError):
    """Permission denied."""

    pass


class GitHubRateLimitError(GitHubClientError):
    """Rate limit exceeded."""

    pass


class GistUpdate:
    """Pending changes to one gist, sent as a single PATCH on commit."""

    def __init__(self, client: GistClient, gist_id: str) -> None:
        self._client = client
        self.gist_id = gist_id
        self._files: dict[str, dict[str, str] | None] = {}

    def upsert(self, name: str, content: str) -> None:
        """Create or replace a gist file."""
        self._files[name] = {"content": content}

    def delete(self, name: str) -> None:
        """Remove a gist file."""
        self._files[name] = None

    @property
    def pending(self) -> dict[str, dict[str, str] | None]:
        """Recorded changes, keyed by filename (None marks a delete)."""
        return dict(self._files)

    def commit(self) -> CommitResult:
        """Send all recorded changes in one request."""
        data = self._client.request("PATCH", f"/gists/{self.gist_id}", {"files": self._files})
        files = data.get("files") or {}
        return CommitResult(
            files={name: int(info.get("size", 0)) for name, info in files.items() if info},
            url=data.get("html_url", ""),
        )


class GistClient:
    """GitHub Gist REST API client.

    Implements the document store protocol on top of gists: a gist id is the
    collection id and each gist file is a document.
    """

    def __init__(self, token: str, base_url: str = DEFAULT_BASE_URL):
        """Initialize the gist client.

        Args:
            token: GitHub personal access token (needs the gist scope)
            base_url: REST API base URL (use a custom one for Enterprise)
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=30.0,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> GistClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @classmethod
    def from_environment(cls, base_url: str = DEFAULT_BASE_URL) -> GistClient:
        """Create a client from environment variables or gh CLI.

        Tries in order:
        1. GITHUB_TOKEN environment variable
        2. gh auth token (if gh CLI is installed and authenticated)

        Raises:
            GitHubAuthError: If no token is available
        """
        token = os.environ.get("GITHUB_TOKEN")
        if token:
            logger.debug("Using token from GITHUB_TOKEN environment variable")
            return cls(token, base_url)

        try:
            result = subprocess.run(
                ["gh", "auth", "token"],
                capture_output=True,
                text=True,
                check=True,
            )
            token = result.stdout.strip()
            if token:
                logger.debug("Using token from gh CLI")
                return cls(token, base_url)
        except (subprocess.CalledProcessError, FileNotFoundError):
            logger.debug("gh CLI not available or not authenticated")

        logger.error("No GitHub token found")
        raise GitHubAuthError(
            "No GitHub token found. Either:\n"
            "  - Pass --access-token\n"
            "  - Set CFGSYNC_ACCESS_TOKEN or GITHUB_TOKEN environment variable\n"
            "  - Run 'gh auth login' to authenticate with GitHub CLI"
        )

    def request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        """Send a REST request and decode the JSON response.

        Args:
            method: HTTP method
            path: API path (e.g. "/gists/abc123") or absolute URL
            payload: JSON body

        Returns:
            Decoded JSON response

        Raises:
            GitHubAuthError: Authentication failed
            GitHubNotFoundError: Resource not found
            GitHubForbiddenError: Permission denied
            GitHubRateLimitError: Rate limit exceeded
            GitHubClientError: Other errors
        """
        response = self._send(method, path, payload)
        try:
            return response.json()
        except ValueError as e:
            logger.error("%s %s: Invalid JSON response", method, path)
            raise GitHubClientError(f"Invalid JSON response: {e}") from e

    def _send(self, method: str, path: str, payload: dict[str, Any] | None = None) -> httpx.Response:
        url = path if path.startswith("http") else f"{self.base_url}{path}"

        start_time = time.monotonic()
        try:
            response = self._client.request(method, url, json=payload)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("%s %s failed after %.0fms: %s", method, path, elapsed_ms, e)
            raise GitHubClientError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000

        if response.status_code == 401:
            logger.error("%s %s: 401 Unauthorized (%.0fms)", method, path, elapsed_ms)
            raise GitHubAuthError(
                "Authentication failed. Check your access token.\nRequired scopes: gist"
            )
        if response.status_code == 429 or (
            response.status_code == 403 and "rate limit" in response.text.lower()
        ):
            logger.error("%s %s: Rate Limited (%.0fms)", method, path, elapsed_ms)
            raise GitHubRateLimitError("GitHub API rate limit exceeded. Try again later.")
        if response.status_code == 403:
            logger.error("%s %s: 403 Forbidden (%.0fms)", method, path, elapsed_ms)
            raise GitHubForbiddenError(
                "Permission denied. Check that your token has the gist scope "
                "and that you own the gist."
            )
        if response.status_code == 404:
            logger.error("%s %s: 404 Not Found (%.0fms)", method, path, elapsed_ms)
            raise GitHubNotFoundError(f"Resource not found: {path}")
        if response.status_code >= 400:
            logger.error(
                "%s %s: HTTP %d (%.0fms)", method, path, response.status_code, elapsed_ms
            )
            raise GitHubClientError(f"HTTP {response.status_code}: {response.text}")

        logger.info("%s %s: %d (%.0fms)", method, path, response.status_code, elapsed_ms)
        return response

    def fetch(self, gist_id: str) -> dict[str, str]:
        """Fetch every file of a gist.

        Files the API truncates are downloaded in full from their raw URL.

        Returns:
            Mapping of filename to content
        """
        data = self.request("GET", f"/gists/{gist_id}")
        documents: dict[str, str] = {}
        for name, info in (data.get("files") or {}).items():
            if info.get("truncated") and info.get("raw_url"):
                logger.debug("Fetching truncated gist file %s from raw URL", name)
                documents[name] = self._send("GET", info["raw_url"]).text
            else:
                documents[name] = info.get("content") or ""
        logger.debug("Fetched %d file(s) from gist %s", len(documents), gist_id)
        return documents

    def begin_update(self, gist_id: str) -> GistUpdate:
        """Start a batch of changes against a gist."""
        return GistUpdate(self, gist_id)
