"""API request and response models."""

from phonebook.api.models.errors import ErrorCode
from phonebook.api.models.health import ComponentHealth, HealthResponse
from phonebook.api.models.phones import (
    AddPhoneBody,
    BulkAddBody,
    MutationResponse,
    ReadBody,
    ReadResponse,
)

__all__ = [
    "AddPhoneBody",
    "BulkAddBody",
    "ComponentHealth",
    "ErrorCode",
    "HealthResponse",
    "MutationResponse",
    "ReadBody",
    "ReadResponse",
]
