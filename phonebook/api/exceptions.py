"""HTTP mapping for the document error taxonomy.

The domain exceptions in phonebook.documents.exceptions carry no HTTP
knowledge; this module decides the status code, error code and the
client-facing message for each of them.
"""

from phonebook.api.models.errors import ErrorCode
from phonebook.documents.exceptions import (
    ConfigurationError,
    CorruptDocumentError,
    DuplicateItemError,
    MutationTimeoutError,
    PhonebookError,
    RetryExhaustedError,
    StoreError,
    ValidationError,
)

# Lookup walks the MRO, so a subclass entry wins over its base
_STATUS_MAP: dict[type[PhonebookError], tuple[int, ErrorCode]] = {
    DuplicateItemError: (400, ErrorCode.DUPLICATE_ITEM),
    ConfigurationError: (500, ErrorCode.CONFIGURATION_ERROR),
    CorruptDocumentError: (500, ErrorCode.CORRUPT_DOCUMENT),
    StoreError: (500, ErrorCode.STORE_ERROR),
    RetryExhaustedError: (500, ErrorCode.RETRY_EXHAUSTED),
    MutationTimeoutError: (504, ErrorCode.TIMEOUT),
}


def status_for(exc: PhonebookError) -> tuple[int, ErrorCode]:
    """Return the HTTP status and error code for a domain exception."""
    if isinstance(exc, ValidationError):
        return 400, ErrorCode(exc.reason.value)

    for cls in type(exc).__mro__:
        if cls in _STATUS_MAP:
            return _STATUS_MAP[cls]
    return 500, ErrorCode.INTERNAL_ERROR


def public_message(exc: PhonebookError) -> str:
    """Message safe to return to the caller.

    Store failures are summarized; their details stay in the logs.
    """
    if isinstance(exc, CorruptDocumentError):
        return "Stored phone list is corrupt"
    if isinstance(exc, StoreError):
        return "Failed to update GitHub file"
    return exc.message
