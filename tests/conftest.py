"""Shared test fixtures for the Phonebook test suite."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from phonebook.documents.stores.inmemory import InMemoryDocumentStore


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


@pytest.fixture
def github_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Complete GitHub credentials in the environment."""
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test_token")
    monkeypatch.setenv("GITHUB_OWNER", "acme")
    monkeypatch.setenv("GITHUB_REPO", "phone-lists")


@pytest.fixture
def no_github_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """No GitHub credentials anywhere, including a stray .env file."""
    for name in ("GITHUB_TOKEN", "GITHUB_OWNER", "GITHUB_REPO"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    """Fresh in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings caches before and after each test."""
    from phonebook.config import get_credentials, get_settings

    get_settings.cache_clear()
    get_credentials.cache_clear()
    yield
    get_settings.cache_clear()
    get_credentials.cache_clear()
