"""Request and response models for the phone list endpoints.

Payloads arrive in loose shapes (file in the query string or the body,
numbers as strings or JSON numbers). They are resolved here, once, into
the tagged request variants the orchestrator works with.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from phonebook.api.models.errors import ErrorCode
from phonebook.documents.models import BatchAppend, ReadRequest, SingleAppend
from phonebook.documents.validation import (
    normalize_batch,
    normalize_document_name,
    normalize_phone,
)


class AddPhoneBody(BaseModel):
    """Body of POST /api/add."""

    model_config = ConfigDict(extra="ignore")

    file: Any = None
    phone: Any = None


class BulkAddBody(BaseModel):
    """Body of POST /api/admin/bulk-add."""

    model_config = ConfigDict(extra="ignore")

    file: Any = None
    phones: Any = None


class ReadBody(BaseModel):
    """Optional body of /api/get."""

    model_config = ConfigDict(extra="ignore")

    file: Any = None


class MutationResponse(BaseModel):
    """Response of the append endpoints, success or failure."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    total: int | None = None
    added: int | None = None
    duplicates: int | None = None
    duplicate_phones: list[str] | None = Field(default=None, alias="duplicatePhones")
    invalid: list[str] | None = None
    code: ErrorCode | None = None


class ReadResponse(BaseModel):
    """Response of GET /api/get."""

    phones: list[str] = Field(default_factory=list)


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None and value != "":
            return value
    return None


def resolve_single_append(
    query_file: str | None,
    query_phone: str | None,
    body: AddPhoneBody | None,
) -> SingleAppend:
    """Build a SingleAppend; the query string wins for file, the body for phone."""
    body = body or AddPhoneBody()
    document = normalize_document_name(_first(query_file, body.file))
    phone = normalize_phone(_first(body.phone, query_phone))
    return SingleAppend(document=document, phone=phone)


def resolve_batch_append(query_file: str | None, body: BulkAddBody | None) -> BatchAppend:
    """Build a BatchAppend, validating the whole batch."""
    body = body or BulkAddBody()
    document = normalize_document_name(_first(body.file, query_file))
    return BatchAppend(document=document, phones=normalize_batch(body.phones))


def resolve_read(query_file: str | None, body: ReadBody | None) -> ReadRequest:
    """Build a ReadRequest from the query string or body."""
    body = body or ReadBody()
    return ReadRequest(document=normalize_document_name(_first(query_file, body.file)))
