"""Mutation protocol configuration."""

from pydantic import BaseModel, Field


class MutationConfig(BaseModel):
    """Bounds for the read-merge-write retry loop."""

    max_attempts: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Write attempts before giving up on a conflicting document",
    )
    backoff_base_ms: int = Field(
        default=100,
        ge=0,
        description="Linear backoff step; attempt N sleeps N times this value",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Deadline for a whole mutation including retries",
    )

    @property
    def backoff_base_seconds(self) -> float:
        """Backoff step in seconds."""
        return self.backoff_base_ms / 1000
