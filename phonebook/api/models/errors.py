"""Error codes for consistent API error handling."""

from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable codes attached to failed responses."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Request could not be parsed (malformed JSON, wrong method, ...)."""

    MISSING_VALUE = "MISSING_VALUE"
    """A required phone number or file name was absent or blank."""

    INVALID_LENGTH = "INVALID_LENGTH"
    """A phone number was not exactly ten characters long."""

    INVALID_FORMAT = "INVALID_FORMAT"
    """A phone number held non-digits, or a batch was malformed."""

    EMPTY_BATCH = "EMPTY_BATCH"
    """A bulk request carried no phone numbers."""

    DUPLICATE_ITEM = "DUPLICATE_ITEM"
    """The phone number is already in the list."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """Store credentials are not configured."""

    STORE_ERROR = "STORE_ERROR"
    """The document store failed or answered unexpectedly."""

    CORRUPT_DOCUMENT = "CORRUPT_DOCUMENT"
    """The stored list is not a JSON array of strings."""

    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    """Every write attempt collided with a concurrent writer."""

    TIMEOUT = "TIMEOUT"
    """The mutation did not finish before its deadline."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""
