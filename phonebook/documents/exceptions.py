"""Error taxonomy for document mutations.

Client errors (ValidationError, DuplicateItemError) are raised before any
write reaches the store. ConflictError never leaves the orchestrator unless
it is wrapped into RetryExhaustedError. StoreError and ConfigurationError are
server-side failures.
"""

from enum import Enum


class ValidationReason(str, Enum):
    """Why a candidate value was rejected."""

    MISSING_VALUE = "MISSING_VALUE"
    INVALID_LENGTH = "INVALID_LENGTH"
    INVALID_FORMAT = "INVALID_FORMAT"
    EMPTY_BATCH = "EMPTY_BATCH"


class PhonebookError(Exception):
    """Base exception for all phonebook errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(PhonebookError):
    """Raised when a phone number, batch or document name is rejected.

    For batches, ``invalid`` lists every offending raw value, not just the
    first one found.
    """

    def __init__(
        self,
        message: str,
        reason: ValidationReason,
        invalid: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.invalid = invalid


class DuplicateItemError(PhonebookError):
    """Raised when a single appended item is already in the document."""

    def __init__(self, item: str, document: str | None = None) -> None:
        super().__init__("Phone number already exists")
        self.item = item
        self.document = document


class ConflictError(PhonebookError):
    """Raised when a conditional write observes a different version."""

    def __init__(
        self,
        document: str,
        expected_version: str | None,
        message: str | None = None,
    ) -> None:
        super().__init__(message or f"Version conflict writing document '{document}'")
        self.document = document
        self.expected_version = expected_version


class StoreError(PhonebookError):
    """Raised on transport, auth or unexpected-response failures."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CorruptDocumentError(StoreError):
    """Raised when a stored document is not a JSON array of strings."""

    def __init__(self, document: str, detail: str) -> None:
        super().__init__(f"Stored document '{document}' is corrupt: {detail}")
        self.document = document


class ConfigurationError(PhonebookError):
    """Raised when required store settings are missing."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


class RetryExhaustedError(PhonebookError):
    """Raised when every write attempt hit a version conflict."""

    def __init__(self, document: str, attempts: int) -> None:
        super().__init__("Failed to update file after multiple attempts")
        self.document = document
        self.attempts = attempts


class MutationTimeoutError(PhonebookError):
    """Raised when a mutation does not finish before its deadline."""

    def __init__(self, document: str, timeout_seconds: float) -> None:
        super().__init__(f"Mutation timed out after {timeout_seconds:g}s")
        self.document = document
        self.timeout_seconds = timeout_seconds
