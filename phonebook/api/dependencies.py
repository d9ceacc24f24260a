"""Dependency injection for API routes.

Provides FastAPI dependencies for settings, the document store and the
mutation orchestrator. Every dependency can be replaced through
``app.dependency_overrides`` in tests.
"""

from typing import Annotated

from fastapi import Depends

from phonebook.config import get_credentials, get_settings
from phonebook.config.settings import Settings
from phonebook.documents.orchestrator import MutationOrchestrator
from phonebook.documents.store import DocumentStore
from phonebook.documents.stores.github import GitHubDocumentStore
from phonebook.documents.stores.inmemory import InMemoryDocumentStore
from phonebook.observability.logging import get_logger

logger = get_logger(__name__)

# Created once and shared by all requests; holds the HTTP connection pool
_document_store: DocumentStore | None = None


def get_document_store(
    settings: Annotated[Settings, Depends(get_settings)],
) -> DocumentStore:
    """Get the DocumentStore instance.

    The GitHub backend needs GITHUB_TOKEN, GITHUB_OWNER and GITHUB_REPO.
    Until all three are present no store is created, so every read and
    write keeps failing with ConfigurationError.

    Raises:
        ConfigurationError: If the GitHub backend is selected and
            credentials are incomplete
    """
    global _document_store
    if _document_store is None:
        if settings.store.backend == "inmemory":
            _document_store = InMemoryDocumentStore()
        else:
            credentials = get_credentials().require()
            _document_store = GitHubDocumentStore(settings.store, credentials)
        logger.info("document_store_initialized", backend=settings.store.backend)
    return _document_store


def get_orchestrator(
    store: Annotated[DocumentStore, Depends(get_document_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> MutationOrchestrator:
    """Get a MutationOrchestrator bound to the shared store.

    A fresh orchestrator per request; it holds no state of its own.
    """
    return MutationOrchestrator(store, settings.mutation)


SettingsDep = Annotated[Settings, Depends(get_settings)]
DocumentStoreDep = Annotated[DocumentStore, Depends(get_document_store)]
OrchestratorDep = Annotated[MutationOrchestrator, Depends(get_orchestrator)]


async def reset_dependencies() -> None:
    """Close the shared store and drop all cached instances.

    Used on shutdown and in tests.
    """
    global _document_store

    if _document_store is not None:
        await _document_store.close()
        _document_store = None

    get_settings.cache_clear()
    get_credentials.cache_clear()
