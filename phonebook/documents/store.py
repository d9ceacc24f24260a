"""DocumentStore abstract interface and the shared JSON codec."""

import json
from abc import ABC, abstractmethod
from collections.abc import Sequence

from phonebook.documents.exceptions import CorruptDocumentError
from phonebook.documents.models import DocumentSnapshot


def encode_items(items: Sequence[str]) -> str:
    """Serialize items as a pretty-printed JSON array (two-space indent)."""
    return json.dumps(list(items), indent=2, ensure_ascii=False)


def decode_items(name: str, content: str) -> tuple[str, ...]:
    """Parse stored content, insisting on a JSON array of strings.

    Raises:
        CorruptDocumentError: If the content is not valid JSON, not an
            array, or holds non-string elements
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise CorruptDocumentError(name, f"invalid JSON ({e.msg})") from e

    if not isinstance(data, list):
        raise CorruptDocumentError(name, f"expected a JSON array, got {type(data).__name__}")

    if not all(isinstance(item, str) for item in data):
        raise CorruptDocumentError(name, "array contains non-string elements")

    return tuple(data)


class DocumentStore(ABC):
    """Abstract interface for a versioned document store.

    The store offers per-document version tokens and conditional writes,
    nothing more. Concurrency control is built on top of those two calls.
    """

    @abstractmethod
    async def read(self, name: str) -> DocumentSnapshot:
        """Read a document and its version.

        A missing document is not an error: it yields no items and a
        None version.

        Raises:
            StoreError: On transport or unexpected-response failures
        """
        pass

    @abstractmethod
    async def write(
        self,
        name: str,
        items: Sequence[str],
        expected_version: str | None,
        *,
        message: str,
    ) -> str:
        """Replace a document if its version still equals expected_version.

        A None expected_version means the document must not exist yet.

        Args:
            name: Document name
            items: Full replacement contents
            expected_version: Version observed by the caller's last read
            message: Change description recorded by the store

        Returns:
            The new version token

        Raises:
            ConflictError: If the stored version differs; nothing is written
            StoreError: On transport or unexpected-response failures
        """
        pass

    async def close(self) -> None:
        """Release any held resources."""
        return None
