"""Document store configuration models."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

StoreBackendType = Literal["github", "inmemory"]


class StoreConfig(BaseModel):
    """Configuration for the remote document store.

    Credentials (token, owner, repository) are not part of this model;
    they come from GITHUB_* environment variables, see
    phonebook.config.credentials.
    """

    backend: StoreBackendType = Field(
        default="github",
        description="Document store backend",
    )
    api_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the contents API",
    )
    data_dir: str = Field(
        default="data",
        description="Repository directory holding the JSON documents",
    )
    branch: str | None = Field(
        default=None,
        description="Branch to read from and commit to (repository default if unset)",
    )
    user_agent: str = Field(default="phonebook-api", description="User-Agent header")
    committer_name: str = Field(default="Phone API", description="Commit author name")
    committer_email: str = Field(
        default="api@phone.app",
        description="Commit author email",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Per-request timeout against the store",
    )

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the API base URL."""
        return v.rstrip("/")

    @field_validator("data_dir")
    @classmethod
    def strip_slashes(cls, v: str) -> str:
        """Normalize the data directory to a bare relative path."""
        return v.strip("/")
