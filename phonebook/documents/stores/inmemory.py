"""In-memory implementation of DocumentStore."""

import hashlib
from collections.abc import Sequence

from phonebook.documents.exceptions import ConflictError
from phonebook.documents.models import DocumentSnapshot
from phonebook.documents.store import DocumentStore, encode_items


def content_version(content: str) -> str:
    """Git-style blob SHA of serialized content."""
    data = content.encode("utf-8")
    return hashlib.sha1(b"blob %d\x00" % len(data) + data).hexdigest()


class InMemoryDocumentStore(DocumentStore):
    """In-memory implementation of DocumentStore for testing and development.

    Versions are content hashes, as in the remote store, and writes are
    conditional in the same way. Not suitable for production use.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._documents: dict[str, tuple[tuple[str, ...], str]] = {}
        self.commits: list[tuple[str, str]] = []

    async def read(self, name: str) -> DocumentSnapshot:
        """Read a document and its version."""
        stored = self._documents.get(name)
        if stored is None:
            return DocumentSnapshot(name=name)
        items, version = stored
        return DocumentSnapshot(name=name, items=items, version=version)

    async def write(
        self,
        name: str,
        items: Sequence[str],
        expected_version: str | None,
        *,
        message: str,
    ) -> str:
        """Replace a document if its version still equals expected_version."""
        stored = self._documents.get(name)
        current_version = stored[1] if stored is not None else None
        if current_version != expected_version:
            raise ConflictError(name, expected_version)

        version = content_version(encode_items(items))
        self._documents[name] = (tuple(items), version)
        self.commits.append((name, message))
        return version
