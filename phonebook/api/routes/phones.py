"""Phone list endpoints: single add, bulk add and read.

Each request is resolved and validated by its own dependency, declared
ahead of the orchestrator, so a malformed request is answered with 400
before the store is configured or touched.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query

from phonebook.api.dependencies import OrchestratorDep
from phonebook.api.models.phones import (
    AddPhoneBody,
    BulkAddBody,
    MutationResponse,
    ReadBody,
    ReadResponse,
    resolve_batch_append,
    resolve_read,
    resolve_single_append,
)
from phonebook.documents.models import BatchAppend, ReadRequest, SingleAppend
from phonebook.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api")


def single_append_request(
    body: AddPhoneBody | None = Body(default=None),
    file: str | None = Query(default=None, description="Document name"),
    phone: str | None = Query(default=None, description="Phone number"),
) -> SingleAppend:
    return resolve_single_append(file, phone, body)


def batch_append_request(
    body: BulkAddBody | None = Body(default=None),
    file: str | None = Query(default=None, description="Document name"),
) -> BatchAppend:
    return resolve_batch_append(file, body)


def read_request(
    body: ReadBody | None = Body(default=None),
    file: str | None = Query(default=None, description="Document name"),
) -> ReadRequest:
    return resolve_read(file, body)


@router.post("/add", response_model=MutationResponse, response_model_exclude_none=True)
async def add_phone(
    request: Annotated[SingleAppend, Depends(single_append_request)],
    orchestrator: OrchestratorDep,
) -> MutationResponse:
    """Append one phone number to a list.

    The file name may come from the query string or the body. A number
    already present is rejected with 400 rather than ignored.
    """
    outcome = await orchestrator.execute(request)

    return MutationResponse(
        success=True,
        message="Phone number added successfully",
        total=outcome.total,
    )


@router.post(
    "/admin/bulk-add",
    response_model=MutationResponse,
    response_model_exclude_none=True,
)
async def bulk_add_phones(
    request: Annotated[BatchAppend, Depends(batch_append_request)],
    orchestrator: OrchestratorDep,
) -> MutationResponse:
    """Append a batch of phone numbers to a list.

    Every element is validated before the store is touched; numbers
    already present are skipped and reported back.
    """
    outcome = await orchestrator.execute(request)

    return MutationResponse(
        success=True,
        message="Bulk add completed",
        added=len(outcome.added),
        duplicates=len(outcome.duplicates),
        total=outcome.total,
        duplicate_phones=list(outcome.duplicates),
    )


@router.api_route("/get", methods=["GET", "POST"], response_model=ReadResponse)
async def get_phones(
    request: Annotated[ReadRequest, Depends(read_request)],
    orchestrator: OrchestratorDep,
) -> ReadResponse:
    """Return every phone number in a list.

    A missing list, or any store failure, yields an empty list.
    """
    phones = await orchestrator.read_items(request.document)
    return ReadResponse(phones=list(phones))
