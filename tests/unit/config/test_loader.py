"""Unit tests for the TOML profile loader."""

import tomllib
from collections.abc import Callable
from pathlib import Path

import pytest

from phonebook.config.loader import config_dir, load_config, overlay, read_profile
from phonebook.documents.exceptions import ConfigurationError


class TestOverlay:
    """Tests for overlay function."""

    def test_merges_tables(self) -> None:
        """Tables are merged key by key."""
        base = {"store": {"backend": "github", "data_dir": "data"}, "debug": False}

        result = overlay(base, {"store": {"backend": "inmemory"}})

        assert result == {"store": {"backend": "inmemory", "data_dir": "data"}, "debug": False}

    def test_scalar_replaces_table(self) -> None:
        """A non-table value replaces whatever was there."""
        assert overlay({"api": {"port": 1}}, {"api": "off"}) == {"api": "off"}

    def test_base_unmodified(self) -> None:
        """The base mapping is not mutated."""
        base = {"store": {"backend": "github"}}

        overlay(base, {"store": {"backend": "inmemory"}})

        assert base == {"store": {"backend": "github"}}


class TestReadProfile:
    """Tests for read_profile function."""

    def test_parses_file(self, tmp_path: Path) -> None:
        """A profile is parsed into a dict."""
        path = tmp_path / "default.toml"
        path.write_text("[mutation]\nmax_attempts = 5\n")

        assert read_profile(path) == {"mutation": {"max_attempts": 5}}

    def test_absent_file_is_empty(self, tmp_path: Path) -> None:
        """A missing profile is an empty layer."""
        assert read_profile(tmp_path / "staging.toml") == {}

    def test_invalid_syntax(self, tmp_path: Path) -> None:
        """Bad TOML raises TOMLDecodeError."""
        path = tmp_path / "default.toml"
        path.write_text("[mutation\n")

        with pytest.raises(tomllib.TOMLDecodeError):
            read_profile(path)

    @pytest.mark.parametrize("key", ["token", "owner", "repo"])
    def test_rejects_store_credentials(self, tmp_path: Path, key: str) -> None:
        """Credentials in a profile are refused."""
        path = tmp_path / "default.toml"
        path.write_text(f"[store]\nbackend = 'github'\n{key} = 'x'\n")

        with pytest.raises(ConfigurationError) as exc_info:
            read_profile(path)

        assert key in exc_info.value.message
        assert "GITHUB_TOKEN" in exc_info.value.message


class TestConfigDir:
    """Tests for config directory resolution."""

    def test_defaults_to_cwd_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without PHONEBOOK_CONFIG_DIR the directory is ./config."""
        monkeypatch.delenv("PHONEBOOK_CONFIG_DIR", raising=False)
        monkeypatch.chdir(tmp_path)

        assert config_dir() == tmp_path / "config"

    def test_override(self, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """PHONEBOOK_CONFIG_DIR points at the profiles."""
        monkeypatch.setenv("PHONEBOOK_CONFIG_DIR", str(test_config_dir))

        assert config_dir() == test_config_dir

    def test_override_must_exist(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A PHONEBOOK_CONFIG_DIR that does not exist is an error."""
        monkeypatch.setenv("PHONEBOOK_CONFIG_DIR", str(tmp_path / "nope"))

        with pytest.raises(FileNotFoundError):
            config_dir()


class TestLoadConfig:
    """Tests for load_config function."""

    def test_environment_profile_overrides_default(
        self,
        test_config_dir: Path,
        mock_toml_files: Callable[[dict[str, str]], None],
    ) -> None:
        """The environment profile is merged over default.toml."""
        mock_toml_files({
            "default.toml": "[store]\nbackend = 'github'\ndata_dir = 'data'\n",
            "test.toml": "[store]\nbackend = 'inmemory'\n",
        })

        config = load_config(test_config_dir, "test")

        assert config["store"] == {"backend": "inmemory", "data_dir": "data"}

    def test_env_from_environment(
        self,
        test_config_dir: Path,
        mock_toml_files: Callable[[dict[str, str]], None],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """PHONEBOOK_ENV picks the profile when none is passed."""
        mock_toml_files({"default.toml": "debug = false\n", "staging.toml": "debug = true\n"})
        monkeypatch.setenv("PHONEBOOK_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("PHONEBOOK_ENV", "staging")

        assert load_config() == {"debug": True}

    def test_development_is_default_env(
        self,
        test_config_dir: Path,
        mock_toml_files: Callable[[dict[str, str]], None],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Without PHONEBOOK_ENV the development profile applies."""
        mock_toml_files({"development.toml": "debug = true\n"})
        monkeypatch.delenv("PHONEBOOK_ENV", raising=False)

        assert load_config(test_config_dir) == {"debug": True}

    def test_no_profiles_is_empty(self, test_config_dir: Path) -> None:
        """An empty directory gives an empty config; code defaults apply."""
        assert load_config(test_config_dir, "production") == {}
