"""GitHub gist integration."""

from .client import (
    GistClient,
    GistUpdate,
    GitHubAuthError,
    GitHubClientError,
    GitHubForbiddenError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)

__all__ = [
    "GistClient",
    "GistUpdate",
    "GitHubAuthError",
    "GitHubClientError",
    "GitHubForbiddenError",
    "GitHubNotFoundError",
    "GitHubRateLimitError",
]
