"""Unit tests for mapping domain errors to HTTP responses."""

import pytest

from phonebook.api.exceptions import public_message, status_for
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
    ValidationReason,
)


class TestStatusFor:
    """Tests for status_for."""

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (DuplicateItemError("1111111111"), (400, ErrorCode.DUPLICATE_ITEM)),
            (ConfigurationError("GitHub configuration missing"), (500, ErrorCode.CONFIGURATION_ERROR)),
            (CorruptDocumentError("customers", "bad"), (500, ErrorCode.CORRUPT_DOCUMENT)),
            (StoreError("down", status_code=502), (500, ErrorCode.STORE_ERROR)),
            (RetryExhaustedError("customers", 3), (500, ErrorCode.RETRY_EXHAUSTED)),
            (MutationTimeoutError("customers", 10.0), (504, ErrorCode.TIMEOUT)),
            (PhonebookError("other"), (500, ErrorCode.INTERNAL_ERROR)),
        ],
    )
    def test_maps_error(self, error: PhonebookError, expected: tuple[int, ErrorCode]) -> None:
        """Each error class has a fixed status and code."""
        assert status_for(error) == expected

    def test_validation_uses_reason(self) -> None:
        """Validation errors carry their reason as the code."""
        error = ValidationError("Phones array cannot be empty", ValidationReason.EMPTY_BATCH)

        assert status_for(error) == (400, ErrorCode.EMPTY_BATCH)


class TestPublicMessage:
    """Tests for public_message."""

    def test_store_details_hidden(self) -> None:
        """Store failures are summarized for the caller."""
        error = StoreError("Store write failed with status 502", status_code=502)

        assert public_message(error) == "Failed to update GitHub file"

    def test_corrupt_document(self) -> None:
        """Corrupt documents get their own message."""
        assert public_message(CorruptDocumentError("c", "x")) == "Stored phone list is corrupt"

    def test_client_errors_pass_through(self) -> None:
        """Client-facing messages are returned as is."""
        error = RetryExhaustedError("customers", 3)

        assert public_message(error) == "Failed to update file after multiple attempts"
