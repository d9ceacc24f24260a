"""Phone number and document name validation.

Normalization is a whitespace trim. A valid phone number is exactly ten
ASCII digits after trimming.
"""

import re
from collections.abc import Sequence
from typing import Any

from phonebook.documents.exceptions import ValidationError, ValidationReason

PHONE_LENGTH = 10

_ASCII_DIGITS = re.compile(r"[0-9]+")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def _as_text(raw: Any) -> str | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        return raw
    return str(raw)


def normalize_phone(raw: Any) -> str:
    """Validate a single candidate and return its normalized form.

    Non-string scalars (JSON numbers) are stringified first.

    Raises:
        ValidationError: MISSING_VALUE, INVALID_LENGTH or INVALID_FORMAT
    """
    text = _as_text(raw)
    phone = text.strip() if text is not None else ""

    if not phone:
        raise ValidationError("Phone number is required", ValidationReason.MISSING_VALUE)

    if len(phone) != PHONE_LENGTH:
        raise ValidationError(
            f"Phone number must be {PHONE_LENGTH} digits",
            ValidationReason.INVALID_LENGTH,
        )

    if not _ASCII_DIGITS.fullmatch(phone):
        raise ValidationError(
            "Phone number must contain only digits",
            ValidationReason.INVALID_FORMAT,
        )

    return phone


def normalize_batch(raw: Any) -> tuple[str, ...]:
    """Validate every element of a batch.

    All elements are checked even after the first failure so the error can
    list every invalid value. Nothing is returned unless the whole batch
    is valid.

    Raises:
        ValidationError: INVALID_FORMAT if ``raw`` is not a list, EMPTY_BATCH
            if it is empty; otherwise, with ``invalid`` populated, the reason
            shared by every invalid element, or INVALID_FORMAT when they differ
    """
    if raw is None or isinstance(raw, str | bytes) or not isinstance(raw, Sequence):
        raise ValidationError("Phones must be an array", ValidationReason.INVALID_FORMAT)

    if len(raw) == 0:
        raise ValidationError("Phones array cannot be empty", ValidationReason.EMPTY_BATCH)

    valid: list[str] = []
    invalid: list[str] = []
    reasons: set[ValidationReason] = set()
    for candidate in raw:
        try:
            valid.append(normalize_phone(candidate))
        except ValidationError as e:
            invalid.append("" if candidate is None else str(candidate))
            reasons.add(e.reason)

    if invalid:
        # A shared reason is reported as is; mixed failures are INVALID_FORMAT
        reason = reasons.pop() if len(reasons) == 1 else ValidationReason.INVALID_FORMAT
        raise ValidationError("Some phone numbers are invalid", reason, invalid=invalid)

    return tuple(valid)


def normalize_document_name(raw: Any) -> str:
    """Validate a document name; it becomes one path segment in the store.

    Raises:
        ValidationError: MISSING_VALUE if absent, INVALID_FORMAT if the name
            could escape the data directory
    """
    text = _as_text(raw)
    name = text.strip() if text is not None else ""

    if not name:
        raise ValidationError(
            "File parameter is required (use ?file=filename in URL)",
            ValidationReason.MISSING_VALUE,
        )

    if name in {".", ".."} or "/" in name or "\\" in name or _CONTROL_CHARS.search(name):
        raise ValidationError("File parameter is not a valid name", ValidationReason.INVALID_FORMAT)

    return name
