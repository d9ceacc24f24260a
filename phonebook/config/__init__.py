"""Configuration loading for Phonebook.

Settings come from config/*.toml profiles with PHONEBOOK_* overrides.
Store credentials are read separately from GITHUB_* variables.

Usage:
    from phonebook.config import get_settings, get_credentials

    settings = get_settings()
    attempts = settings.mutation.max_attempts
    credentials = get_credentials().require()
"""

from functools import lru_cache

from phonebook.config.credentials import GitHubCredentials
from phonebook.config.settings import Settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, loaded on first use.

    The API resolves settings through this function too, so clearing its
    cache is enough to reload configuration everywhere.
    """
    return Settings.load()


@lru_cache(maxsize=1)
def get_credentials() -> GitHubCredentials:
    """Store credentials read from the environment at first use."""
    return GitHubCredentials()


def reload_settings() -> Settings:
    """Drop cached settings and credentials and load them again."""
    get_settings.cache_clear()
    get_credentials.cache_clear()
    return get_settings()


__all__ = ["GitHubCredentials", "Settings", "get_credentials", "get_settings", "reload_settings"]
