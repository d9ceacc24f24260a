"""Root settings model for Phonebook configuration.

``Settings()`` alone gives code defaults plus PHONEBOOK_* overrides.
``Settings.load()`` also layers in the TOML profiles, below the
environment and above the defaults.
"""

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from phonebook.config.loader import load_config
from phonebook.config.models.api import APIConfig
from phonebook.config.models.mutation import MutationConfig
from phonebook.config.models.observability import ObservabilityConfig
from phonebook.config.models.store import StoreConfig

# Merged profile values, set only while Settings.load() builds an instance
_profile_values: ContextVar[dict[str, Any] | None] = ContextVar(
    "phonebook_profile_values", default=None
)


class ProfileSettingsSource(PydanticBaseSettingsSource):
    """Settings source over the profile values bound by Settings.load()."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        """Top-level value of one section; nested merging is done by __call__."""
        values = _profile_values.get() or {}
        return values.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(_profile_values.get() or {})


class Settings(BaseSettings):
    """Service configuration: API server, store, retry bounds, observability.

    Priority, highest first: constructor arguments, PHONEBOOK_* variables
    (``__`` separates sections, e.g. PHONEBOOK_MUTATION__MAX_ATTEMPTS),
    TOML profiles when built through ``load()``, code defaults.
    Credentials are not here; see GitHubCredentials.
    """

    model_config = SettingsConfigDict(
        env_prefix="PHONEBOOK_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="phonebook", description="Service name for logs and traces")
    debug: bool = Field(default=False, description="Enable debug mode")

    api: APIConfig = Field(default_factory=APIConfig, description="HTTP server")
    store: StoreConfig = Field(default_factory=StoreConfig, description="Document store")
    mutation: MutationConfig = Field(
        default_factory=MutationConfig,
        description="Read-merge-write retry bounds",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Logging, metrics and tracing",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, ProfileSettingsSource(settings_cls))

    @classmethod
    def load(cls, directory: Path | None = None, env: str | None = None) -> "Settings":
        """Build settings from the TOML profiles and the environment.

        Args:
            directory: Config directory; PHONEBOOK_CONFIG_DIR or ./config
            env: Profile name; PHONEBOOK_ENV or ``development``
        """
        token = _profile_values.set(load_config(directory, env))
        try:
            return cls()
        finally:
            _profile_values.reset(token)
