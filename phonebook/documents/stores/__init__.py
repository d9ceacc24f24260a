"""DocumentStore implementations."""

from phonebook.documents.stores.github import GitHubDocumentStore
from phonebook.documents.stores.inmemory import InMemoryDocumentStore

__all__ = ["GitHubDocumentStore", "InMemoryDocumentStore"]
