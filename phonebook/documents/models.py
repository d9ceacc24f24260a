"""Document, request and outcome models."""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class DocumentSnapshot(BaseModel):
    """A document's items as observed at one version.

    ``version`` is None only when the document does not exist yet; a write
    carrying None means "create".
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Document name")
    items: tuple[str, ...] = Field(default=(), description="Items in insertion order")
    version: str | None = Field(default=None, description="Opaque store version token")

    @property
    def exists(self) -> bool:
        """Whether the store holds this document."""
        return self.version is not None


class MutationKind(str, Enum):
    """Kind of append request."""

    SINGLE = "single"
    BATCH = "batch"


class SingleAppend(BaseModel):
    """Append one phone number; a duplicate is a client error."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[MutationKind.SINGLE] = MutationKind.SINGLE
    document: str
    phone: str


class BatchAppend(BaseModel):
    """Append many phone numbers; duplicates are skipped and reported."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[MutationKind.BATCH] = MutationKind.BATCH
    document: str
    phones: tuple[str, ...] = Field(..., min_length=1)


class ReadRequest(BaseModel):
    """Read every item of a document."""

    model_config = ConfigDict(frozen=True)

    document: str


MutationRequest = Annotated[SingleAppend | BatchAppend, Field(discriminator="kind")]


class MutationOutcome(BaseModel):
    """Result of a successful mutation."""

    model_config = ConfigDict(frozen=True)

    document: str
    kind: MutationKind
    added: tuple[str, ...] = ()
    duplicates: tuple[str, ...] = ()
    total: int = Field(..., ge=0, description="Item count after the mutation")
    attempts: int = Field(default=1, ge=1, description="Read-merge-write passes used")
    version: str | None = Field(default=None, description="Version after the mutation")

    @property
    def written(self) -> bool:
        """Whether the mutation changed the stored document."""
        return bool(self.added)
