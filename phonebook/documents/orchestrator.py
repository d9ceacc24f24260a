"""Conflict-retry orchestrator for document mutations.

Drives the read -> merge -> write cycle against a DocumentStore that only
offers version tokens and conditional writes. A conflicting write sends
the request back to READING: the document is re-fetched and the merge is
recomputed from scratch, so items added by a concurrent writer are kept
and never inserted twice.

State machine per request::

    START -> READING -> MERGING -> WRITING -> SUCCEEDED
                ^                     |
                +----- conflict ------+
    (any state) -> FAILED

No lock is held across the three suspension points (read, write, backoff
sleep); exclusion is delegated entirely to the store.
"""

import asyncio
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from opentelemetry.trace import Span

from phonebook.config.models.mutation import MutationConfig
from phonebook.documents.exceptions import (
    ConflictError,
    DuplicateItemError,
    MutationTimeoutError,
    PhonebookError,
    RetryExhaustedError,
    StoreError,
)
from phonebook.documents.merge import merge
from phonebook.documents.models import (
    BatchAppend,
    MutationOutcome,
    MutationRequest,
    SingleAppend,
)
from phonebook.documents.store import DocumentStore
from phonebook.documents.validation import (
    normalize_batch,
    normalize_document_name,
    normalize_phone,
)
from phonebook.observability.logging import get_logger
from phonebook.observability.metrics import (
    ITEMS_ADDED,
    MUTATION_ATTEMPTS,
    MUTATION_COUNT,
    WRITE_CONFLICTS,
)
from phonebook.observability.tracing import create_span, record_exception, set_span_attributes

logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class MutationState(str, Enum):
    """States of a single mutation request."""

    START = "start"
    READING = "reading"
    MERGING = "merging"
    WRITING = "writing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class MutationOrchestrator:
    """Applies append requests to documents under optimistic concurrency."""

    def __init__(
        self,
        store: DocumentStore,
        config: MutationConfig | None = None,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            store: Versioned document store
            config: Retry bounds; defaults to 3 attempts, 100ms linear backoff
            sleep: Backoff sleep, replaceable in tests
        """
        self._store = store
        self._config = config or MutationConfig()
        self._sleep = sleep

    async def append_one(self, document: Any, phone: Any) -> MutationOutcome:
        """Validate and append one phone number.

        Raises:
            ValidationError: Before the store is contacted
            DuplicateItemError: If the number is already in the document
        """
        request = SingleAppend(
            document=normalize_document_name(document),
            phone=normalize_phone(phone),
        )
        return await self.execute(request)

    async def append_many(self, document: Any, phones: Any) -> MutationOutcome:
        """Validate a whole batch, then append its new numbers.

        Raises:
            ValidationError: Listing every invalid element, before the
                store is contacted
        """
        request = BatchAppend(
            document=normalize_document_name(document),
            phones=normalize_batch(phones),
        )
        return await self.execute(request)

    async def read_items(self, document: Any) -> tuple[str, ...]:
        """Return a document's items, degrading to empty on store failure."""
        name = normalize_document_name(document)
        try:
            snapshot = await self._store.read(name)
        except StoreError as e:
            logger.warning(
                "document_read_degraded",
                document=name,
                error=e.message,
                status_code=e.status_code,
            )
            return ()

        logger.info("document_read", document=name, total=len(snapshot.items))
        return snapshot.items

    async def execute(self, request: MutationRequest) -> MutationOutcome:
        """Run an already-validated request to a terminal state.

        Raises:
            DuplicateItemError: Single append of an existing item
            StoreError: Read or write failed for a reason other than a conflict
            RetryExhaustedError: Every attempt conflicted
            MutationTimeoutError: The deadline passed first
        """
        kind = request.kind.value
        timeout = self._config.timeout_seconds

        with create_span(
            "phonebook.mutation",
            attributes={"phonebook.document": request.document, "phonebook.kind": kind},
        ) as span:
            try:
                async with asyncio.timeout(timeout):
                    outcome = await self._run(request)
            except TimeoutError as e:
                error = MutationTimeoutError(request.document, timeout)
                self._record_failure(request, error, span)
                raise error from e
            except PhonebookError as e:
                self._record_failure(request, e, span)
                raise

            set_span_attributes(
                span,
                **{
                    "phonebook.attempts": outcome.attempts,
                    "phonebook.added": len(outcome.added),
                    "phonebook.total": outcome.total,
                },
            )

        MUTATION_COUNT.labels(kind=kind, outcome="succeeded").inc()
        MUTATION_ATTEMPTS.labels(kind=kind).observe(outcome.attempts)
        ITEMS_ADDED.labels(kind=kind).inc(len(outcome.added))
        logger.info(
            "mutation_succeeded",
            document=request.document,
            kind=kind,
            added=len(outcome.added),
            duplicates=len(outcome.duplicates),
            total=outcome.total,
            attempts=outcome.attempts,
        )
        return outcome

    async def _run(self, request: MutationRequest) -> MutationOutcome:
        name = request.document
        single = isinstance(request, SingleAppend)
        candidates = (request.phone,) if single else request.phones
        max_attempts = self._config.max_attempts
        state = MutationState.START
        attempt = 0

        while True:
            attempt += 1
            state = self._transition(request, state, MutationState.READING, attempt)
            snapshot = await self._store.read(name)

            state = self._transition(request, state, MutationState.MERGING, attempt)
            try:
                result = merge(snapshot.items, candidates, reject_duplicates=single)
            except DuplicateItemError as e:
                raise DuplicateItemError(e.item, name) from None

            if not result.has_changes:
                self._transition(request, state, MutationState.SUCCEEDED, attempt)
                return MutationOutcome(
                    document=name,
                    kind=request.kind,
                    duplicates=result.duplicates,
                    total=len(snapshot.items),
                    attempts=attempt,
                    version=snapshot.version,
                )

            state = self._transition(request, state, MutationState.WRITING, attempt)
            try:
                version = await self._store.write(
                    name,
                    result.merged,
                    snapshot.version,
                    message=self._commit_message(request, result.added),
                )
            except ConflictError as e:
                WRITE_CONFLICTS.labels(kind=request.kind.value).inc()
                if attempt >= max_attempts:
                    raise RetryExhaustedError(name, attempt) from e

                delay = self._config.backoff_base_seconds * attempt
                logger.info(
                    "mutation_conflict_retrying",
                    document=name,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    backoff_seconds=delay,
                )
                await self._sleep(delay)
                continue

            self._transition(request, state, MutationState.SUCCEEDED, attempt)
            return MutationOutcome(
                document=name,
                kind=request.kind,
                added=result.added,
                duplicates=result.duplicates,
                total=len(result.merged),
                attempts=attempt,
                version=version,
            )

    @staticmethod
    def _transition(
        request: MutationRequest,
        current: MutationState,
        target: MutationState,
        attempt: int,
    ) -> MutationState:
        logger.debug(
            "mutation_state",
            document=request.document,
            previous=current.value,
            state=target.value,
            attempt=attempt,
        )
        return target

    @staticmethod
    def _commit_message(request: MutationRequest, added: tuple[str, ...]) -> str:
        if isinstance(request, BatchAppend):
            return f"Bulk add {len(added)} phones to {request.document}"
        return f"Add phone {added[0]} to {request.document}"

    @staticmethod
    def _record_failure(request: MutationRequest, error: PhonebookError, span: Span) -> None:
        kind = request.kind.value
        MUTATION_COUNT.labels(kind=kind, outcome=type(error).__name__).inc()
        record_exception(span, error)

        log = logger.warning if isinstance(error, DuplicateItemError) else logger.error
        log(
            "mutation_failed",
            document=request.document,
            kind=kind,
            state=MutationState.FAILED.value,
            error_type=type(error).__name__,
            error=error.message,
        )
