"""Merge engine: union of existing items and validated candidates."""

from collections.abc import Sequence
from dataclasses import dataclass

from phonebook.documents.exceptions import DuplicateItemError


@dataclass(frozen=True)
class MergeResult:
    """Outcome of merging candidates into a document's items."""

    merged: tuple[str, ...]
    added: tuple[str, ...]
    duplicates: tuple[str, ...]

    @property
    def has_changes(self) -> bool:
        """False when nothing new was added; the write can be skipped."""
        return bool(self.added)


def merge(
    existing: Sequence[str],
    candidates: Sequence[str],
    *,
    reject_duplicates: bool = False,
) -> MergeResult:
    """Append new candidates to existing items.

    Existing order is preserved and new items follow in candidate order.
    A candidate repeated within ``candidates`` is added once and is not
    reported as a duplicate. Candidates already in ``existing`` are reported
    once each in ``duplicates``.

    Args:
        existing: Items currently stored, already normalized
        candidates: Validated, normalized candidates
        reject_duplicates: Raise instead of skipping when a candidate is
            already stored (single-item append)

    Raises:
        DuplicateItemError: If reject_duplicates and a candidate exists
    """
    present = set(existing)
    added: list[str] = []
    duplicates: list[str] = []
    seen: set[str] = set()

    for candidate in candidates:
        if candidate in seen:
            continue
        seen.add(candidate)

        if candidate in present:
            if reject_duplicates:
                raise DuplicateItemError(candidate)
            duplicates.append(candidate)
        else:
            added.append(candidate)

    return MergeResult(
        merged=(*existing, *added),
        added=tuple(added),
        duplicates=tuple(duplicates),
    )
