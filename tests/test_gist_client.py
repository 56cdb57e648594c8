"""Tests for the GitHub gist client."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from cfgsync.errors import RemoteUnavailableError
from cfgsync.github.client import (
    GistClient,
    GitHubAuthError,
    GitHubClientError,
    GitHubForbiddenError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)


def _response(status_code: int = 200, json_data=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    response.text = text
    return response


class TestGistClientInit:
    """Tests for GistClient initialization."""

    def test_init_with_token(self):
        """Client initializes with token and default base URL."""
        client = GistClient("test-token")
        assert client.token == "test-token"
        assert client.base_url == "https://api.github.com"
        client.close()

    def test_trailing_slash_stripped(self):
        client = GistClient("test-token", base_url="https://github.example.com/api/v3/")
        assert client.base_url == "https://github.example.com/api/v3"
        client.close()

    def test_context_manager(self):
        """Client works as context manager."""
        with GistClient("test-token") as client:
            assert client.token == "test-token"


class TestGistClientFromEnvironment:
    """Tests for GistClient.from_environment."""

    def test_from_github_token_env(self):
        with patch.dict("os.environ", {"GITHUB_TOKEN": "env-token"}):
            client = GistClient.from_environment()
            assert client.token == "env-token"
            client.close()

    def test_from_gh_cli(self):
        with patch.dict("os.environ", {}, clear=True):
            mock_result = MagicMock()
            mock_result.stdout = "cli-token\n"
            with patch("subprocess.run", return_value=mock_result):
                client = GistClient.from_environment()
                assert client.token == "cli-token"
                client.close()

    def test_raises_when_no_token(self):
        with (
            patch.dict("os.environ", {}, clear=True),
            patch("subprocess.run", side_effect=FileNotFoundError()),
            pytest.raises(GitHubAuthError) as exc_info,
        ):
            GistClient.from_environment()
        assert "No GitHub token found" in str(exc_info.value)


class TestGistClientRequest:
    """Tests for HTTP error mapping."""

    @pytest.fixture
    def client(self):
        client = GistClient("test-token")
        yield client
        client.close()

    def test_success_returns_json(self, client):
        with patch.object(client._client, "request", return_value=_response(json_data={"id": "g"})):
            assert client.request("GET", "/gists/g") == {"id": "g"}

    def test_401_raises_auth_error(self, client):
        with (
            patch.object(client._client, "request", return_value=_response(401)),
            pytest.raises(GitHubAuthError),
        ):
            client.request("GET", "/gists/g")

    def test_403_rate_limit(self, client):
        response = _response(403, text="API rate limit exceeded")
        with (
            patch.object(client._client, "request", return_value=response),
            pytest.raises(GitHubRateLimitError),
        ):
            client.request("GET", "/gists/g")

    def test_429_rate_limit(self, client):
        with (
            patch.object(client._client, "request", return_value=_response(429)),
            pytest.raises(GitHubRateLimitError),
        ):
            client.request("GET", "/gists/g")

    def test_403_forbidden(self, client):
        response = _response(403, text="Resource not accessible")
        with (
            patch.object(client._client, "request", return_value=response),
            pytest.raises(GitHubForbiddenError),
        ):
            client.request("PATCH", "/gists/g", {"files": {}})

    def test_404_not_found(self, client):
        with (
            patch.object(client._client, "request", return_value=_response(404)),
            pytest.raises(GitHubNotFoundError),
        ):
            client.request("GET", "/gists/missing")

    def test_500_client_error(self, client):
        with (
            patch.object(client._client, "request", return_value=_response(500, text="boom")),
            pytest.raises(GitHubClientError) as exc_info,
        ):
            client.request("GET", "/gists/g")
        assert "HTTP 500" in str(exc_info.value)

    def test_network_error(self, client):
        with (
            patch.object(
                client._client, "request", side_effect=httpx.ConnectError("connection refused")
            ),
            pytest.raises(GitHubClientError) as exc_info,
        ):
            client.request("GET", "/gists/g")
        assert "Request failed" in str(exc_info.value)

    def test_invalid_json(self, client):
        response = _response()
        response.json.side_effect = ValueError("bad json")
        with (
            patch.object(client._client, "request", return_value=response),
            pytest.raises(GitHubClientError),
        ):
            client.request("GET", "/gists/g")

    def test_errors_are_remote_unavailable(self):
        """Every client error is a RemoteUnavailableError."""
        for error_type in (
            GitHubClientError,
            GitHubAuthError,
            GitHubForbiddenError,
            GitHubNotFoundError,
            GitHubRateLimitError,
        ):
            assert issubclass(error_type, RemoteUnavailableError)


class TestGistDocuments:
    """Tests for fetch and batched updates."""

    @pytest.fixture
    def client(self):
        client = GistClient("test-token")
        yield client
        client.close()

    def test_fetch_returns_contents(self, client):
        data = {
            "files": {
                "README.md": {"content": "# Compiled on x\n\n", "truncated": False},
                "video.cfg": {"content": "// video.cfg\nfps_max 0", "truncated": False},
            }
        }
        with patch.object(client._client, "request", return_value=_response(json_data=data)) as m:
            documents = client.fetch("abc")

        assert documents == {
            "README.md": "# Compiled on x\n\n",
            "video.cfg": "// video.cfg\nfps_max 0",
        }
        assert m.call_args.args == ("GET", "https://api.github.com/gists/abc")

    def test_fetch_truncated_file_uses_raw_url(self, client):
        data = {
            "files": {
                "big.cfg": {
                    "content": "// big.cfg\npartial",
                    "truncated": True,
                    "raw_url": "https://gist.githubusercontent.com/raw/big.cfg",
                }
            }
        }
        raw = _response(text="// big.cfg\nfull body")
        with patch.object(
            client._client, "request", side_effect=[_response(json_data=data), raw]
        ) as m:
            documents = client.fetch("abc")

        assert documents == {"big.cfg": "// big.cfg\nfull body"}
        assert m.call_args.args == ("GET", "https://gist.githubusercontent.com/raw/big.cfg")

    def test_commit_sends_single_patch(self, client):
        data = {
            "html_url": "https://gist.github.com/abc",
            "files": {"README.md": {"size": 10}, "video.cfg": {"size": 22}},
        }
        batch = client.begin_update("abc")
        batch.delete("old.cfg")
        batch.upsert("README.md", "# readme\n\n")
        batch.upsert("video.cfg", "// video.cfg\nfps_max 0")

        with patch.object(client._client, "request", return_value=_response(json_data=data)) as m:
            result = batch.commit()

        assert m.call_count == 1
        method, url = m.call_args.args
        assert method == "PATCH"
        assert url == "https://api.github.com/gists/abc"
        assert m.call_args.kwargs["json"] == {
            "files": {
                "old.cfg": None,
                "README.md": {"content": "# readme\n\n"},
                "video.cfg": {"content": "// video.cfg\nfps_max 0"},
            }
        }
        assert result.files == {"README.md": 10, "video.cfg": 22}
        assert result.document_count == 2
        assert result.total_bytes == 32
        assert result.url == "https://gist.github.com/abc"

    def test_pending_changes(self, client):
        batch = client.begin_update("abc")
        batch.upsert("a.cfg", "x")
        batch.delete("b.cfg")
        assert batch.pending == {"a.cfg": {"content": "x"}, "b.cfg": None}
