"""Tests for phone number and document name validation."""

import pytest

from phonebook.documents.exceptions import ValidationError, ValidationReason
from phonebook.documents.validation import (
    normalize_batch,
    normalize_document_name,
    normalize_phone,
)


class TestNormalizePhone:
    """Tests for single phone validation."""

    @pytest.mark.parametrize("raw", ["0000000000", "5551234567", "9999999999"])
    def test_accepts_ten_digits(self, raw: str) -> None:
        """Ten ASCII digits are returned unchanged."""
        assert normalize_phone(raw) == raw

    def test_trims_surrounding_whitespace(self) -> None:
        """Leading and trailing whitespace is removed."""
        assert normalize_phone("  5551234567\n") == "5551234567"

    def test_accepts_json_number(self) -> None:
        """Integers are stringified before validation."""
        assert normalize_phone(5551234567) == "5551234567"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_missing_value(self, raw: str | None) -> None:
        """Absent or blank values are MISSING_VALUE."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_phone(raw)

        assert exc_info.value.reason == ValidationReason.MISSING_VALUE
        assert exc_info.value.message == "Phone number is required"

    @pytest.mark.parametrize("raw", ["123", "555123456", "55512345678", "12345678901234"])
    def test_invalid_length(self, raw: str) -> None:
        """Anything but ten characters is INVALID_LENGTH."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_phone(raw)

        assert exc_info.value.reason == ValidationReason.INVALID_LENGTH

    @pytest.mark.parametrize(
        "raw",
        ["555-123-45", "55512345a7", "+555123456", "555 123 45", "٥٥٥١٢٣٤٥٦٧"],
    )
    def test_invalid_format(self, raw: str) -> None:
        """Ten characters that are not all ASCII digits are INVALID_FORMAT."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_phone(raw)

        assert exc_info.value.reason == ValidationReason.INVALID_FORMAT

    def test_length_checked_before_format(self) -> None:
        """A short non-numeric value reports the length problem."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_phone("abc")

        assert exc_info.value.reason == ValidationReason.INVALID_LENGTH


class TestNormalizeBatch:
    """Tests for batch validation."""

    def test_returns_normalized_tuple(self) -> None:
        """Every element is trimmed and order is preserved."""
        result = normalize_batch([" 1111111111", "2222222222 "])

        assert result == ("1111111111", "2222222222")

    def test_keeps_in_batch_repeats(self) -> None:
        """Deduplication is the merge engine's job, not the validator's."""
        result = normalize_batch(["1111111111", "1111111111"])

        assert result == ("1111111111", "1111111111")

    def test_reports_every_invalid_element(self) -> None:
        """All invalid elements are listed, not just the first."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_batch(["1111111111", "12", "abcdefghij", None, 42])

        error = exc_info.value
        assert error.message == "Some phone numbers are invalid"
        assert error.invalid == ["12", "abcdefghij", "", "42"]
        assert error.reason == ValidationReason.INVALID_FORMAT

    def test_shared_length_reason(self) -> None:
        """A batch failing only on length reports INVALID_LENGTH."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_batch(["1111111111", "555123456", "55512345678"])

        assert exc_info.value.reason == ValidationReason.INVALID_LENGTH
        assert exc_info.value.invalid == ["555123456", "55512345678"]

    def test_shared_format_reason(self) -> None:
        """A batch failing only on non-digits reports INVALID_FORMAT."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_batch(["555123456a", "55512-4567"])

        assert exc_info.value.reason == ValidationReason.INVALID_FORMAT

    def test_empty_batch(self) -> None:
        """An empty list is EMPTY_BATCH."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_batch([])

        assert exc_info.value.reason == ValidationReason.EMPTY_BATCH

    @pytest.mark.parametrize("raw", [None, "1111111111", {"a": 1}, 1111111111])
    def test_not_an_array(self, raw: object) -> None:
        """Non-list payloads are rejected before looking at elements."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_batch(raw)

        assert exc_info.value.message == "Phones must be an array"
        assert exc_info.value.invalid is None


class TestNormalizeDocumentName:
    """Tests for document name validation."""

    def test_trims_name(self) -> None:
        """Whitespace around the name is removed."""
        assert normalize_document_name("  customers ") == "customers"

    @pytest.mark.parametrize("raw", [None, "", "  "])
    def test_missing_name(self, raw: str | None) -> None:
        """Absent names are MISSING_VALUE."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_document_name(raw)

        assert exc_info.value.reason == ValidationReason.MISSING_VALUE

    @pytest.mark.parametrize("raw", ["..", ".", "a/b", "..\\secrets", "bad\x00name"])
    def test_rejects_path_escapes(self, raw: str) -> None:
        """Names that are not a single path segment are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_document_name(raw)

        assert exc_info.value.reason == ValidationReason.INVALID_FORMAT
