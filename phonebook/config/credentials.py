"""Store credentials loaded from GITHUB_* environment variables."""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from phonebook.documents.exceptions import ConfigurationError


class GitHubCredentials(BaseSettings):
    """Credential, owner and repository for the contents API.

    All three are required by every read and write. They are kept out of
    the TOML files and read only from the environment (or a .env file).
    """

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        env_file=".env",
        extra="ignore",
    )

    token: SecretStr | None = None
    owner: str | None = None
    repo: str | None = None

    @property
    def missing(self) -> list[str]:
        """Names of the environment variables that are unset or blank."""
        missing = []
        if self.token is None or not self.token.get_secret_value().strip():
            missing.append("GITHUB_TOKEN")
        if not (self.owner or "").strip():
            missing.append("GITHUB_OWNER")
        if not (self.repo or "").strip():
            missing.append("GITHUB_REPO")
        return missing

    def require(self) -> "GitHubCredentials":
        """Return self if complete, else raise ConfigurationError."""
        missing = self.missing
        if missing:
            raise ConfigurationError("GitHub configuration missing", missing=missing)
        return self
