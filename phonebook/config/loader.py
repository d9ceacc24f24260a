"""TOML profiles for Phonebook.

Two optional layers are read from the config directory: ``default.toml``
and the profile named by PHONEBOOK_ENV (``development`` unless set), the
latter merged over the former. Every setting has a code default, so a
missing file is an empty layer.

Store credentials never come from these files. A profile that sets
``store.token``, ``store.owner`` or ``store.repo`` is rejected; those
values are read from GITHUB_* variables by GitHubCredentials.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

from phonebook.documents.exceptions import ConfigurationError
from phonebook.observability.logging import get_logger

logger = get_logger(__name__)

BASE_PROFILE = "default"
DEFAULT_ENV = "development"
CREDENTIAL_KEYS = frozenset({"token", "owner", "repo"})


def config_dir() -> Path:
    """Directory holding the profiles: PHONEBOOK_CONFIG_DIR, else ./config.

    Raises:
        FileNotFoundError: If PHONEBOOK_CONFIG_DIR names a missing directory
    """
    override = os.environ.get("PHONEBOOK_CONFIG_DIR")
    if not override:
        return Path.cwd() / "config"

    path = Path(override)
    if not path.is_dir():
        raise FileNotFoundError(f"PHONEBOOK_CONFIG_DIR is not a directory: {override}")
    return path


def read_profile(path: Path) -> dict[str, Any]:
    """Parse one profile; an absent file yields an empty dict.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML
        ConfigurationError: If the file sets store credentials
    """
    if not path.is_file():
        return {}

    with path.open("rb") as f:
        profile = tomllib.load(f)

    store = profile.get("store")
    leaked = sorted(CREDENTIAL_KEYS.intersection(store)) if isinstance(store, dict) else []
    if leaked:
        raise ConfigurationError(
            f"{path.name} sets store credentials ({', '.join(leaked)}); "
            "use GITHUB_TOKEN, GITHUB_OWNER and GITHUB_REPO instead"
        )
    return profile


def overlay(base: dict[str, Any], profile: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``profile`` laid over it, tables merged key by key."""
    merged = dict(base)
    for key, value in profile.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = overlay(current, value)
        else:
            merged[key] = value
    return merged


def load_config(directory: Path | None = None, env: str | None = None) -> dict[str, Any]:
    """Merge ``default.toml`` and the environment profile.

    Args:
        directory: Config directory; see config_dir() when omitted
        env: Profile name; PHONEBOOK_ENV or ``development`` when omitted
    """
    directory = directory or config_dir()
    env = env or os.environ.get("PHONEBOOK_ENV") or DEFAULT_ENV

    config = read_profile(directory / f"{BASE_PROFILE}.toml")
    if env != BASE_PROFILE:
        config = overlay(config, read_profile(directory / f"{env}.toml"))

    logger.debug("config_profiles_loaded", directory=str(directory), env=env)
    return config
