"""Unit tests for GitHub credential loading."""

import pytest

from phonebook.config import get_credentials
from phonebook.config.credentials import GitHubCredentials
from phonebook.documents.exceptions import ConfigurationError


class TestGitHubCredentials:
    """Tests for GitHubCredentials."""

    def test_reads_environment(self, github_env: None) -> None:
        """GITHUB_TOKEN, GITHUB_OWNER and GITHUB_REPO are read."""
        credentials = GitHubCredentials()

        assert credentials.token is not None
        assert credentials.token.get_secret_value() == "ghp_test_token"
        assert credentials.owner == "acme"
        assert credentials.repo == "phone-lists"
        assert credentials.missing == []
        assert credentials.require() is credentials

    def test_token_hidden_in_repr(self, github_env: None) -> None:
        """The token never appears in repr output."""
        assert "ghp_test_token" not in repr(GitHubCredentials())

    def test_missing_all(self, no_github_env: None) -> None:
        """Every unset variable is reported."""
        credentials = GitHubCredentials()

        assert credentials.missing == ["GITHUB_TOKEN", "GITHUB_OWNER", "GITHUB_REPO"]

    def test_blank_counts_as_missing(
        self, github_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Whitespace-only values are treated as unset."""
        monkeypatch.setenv("GITHUB_OWNER", "  ")

        assert GitHubCredentials().missing == ["GITHUB_OWNER"]

    def test_require_raises(self, no_github_env: None) -> None:
        """require() raises ConfigurationError naming what is missing."""
        with pytest.raises(ConfigurationError) as exc_info:
            GitHubCredentials().require()

        assert exc_info.value.message == "GitHub configuration missing"
        assert "GITHUB_TOKEN" in exc_info.value.missing


class TestGetCredentials:
    """Tests for the cached accessor."""

    def test_cached(self, github_env: None) -> None:
        """The same instance is returned until the cache is cleared."""
        first = get_credentials()

        assert get_credentials() is first

        get_credentials.cache_clear()
        assert get_credentials() is not first
