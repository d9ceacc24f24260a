"""Phone-list documents kept in a versioned store.

Store implementations live in phonebook.documents.stores and the retrying
read-merge-write driver in phonebook.documents.orchestrator.
"""

from phonebook.documents.exceptions import (
    ConfigurationError,
    ConflictError,
    CorruptDocumentError,
    DuplicateItemError,
    MutationTimeoutError,
    PhonebookError,
    RetryExhaustedError,
    StoreError,
    ValidationError,
    ValidationReason,
)
from phonebook.documents.merge import MergeResult, merge
from phonebook.documents.models import (
    BatchAppend,
    DocumentSnapshot,
    MutationKind,
    MutationOutcome,
    ReadRequest,
    SingleAppend,
)
from phonebook.documents.store import DocumentStore

__all__ = [
    "BatchAppend",
    "ConfigurationError",
    "ConflictError",
    "CorruptDocumentError",
    "DocumentSnapshot",
    "DocumentStore",
    "DuplicateItemError",
    "MergeResult",
    "MutationKind",
    "MutationOutcome",
    "MutationTimeoutError",
    "PhonebookError",
    "ReadRequest",
    "RetryExhaustedError",
    "SingleAppend",
    "StoreError",
    "ValidationError",
    "ValidationReason",
    "merge",
]
