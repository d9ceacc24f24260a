"""Phonebook API client.

Provides a Python client for interacting with the Phonebook API.

Usage:
    from phonebook.client import PhonebookClient

    async with PhonebookClient("http://localhost:8000") as client:
        await client.add_phone("customers", "5551234567")
        result = await client.bulk_add("customers", ["5550000001", "5550000002"])
        phones = await client.get_phones("customers")
"""

from collections.abc import Sequence
from typing import Any

import httpx

from phonebook.api.models.health import HealthResponse
from phonebook.api.models.phones import MutationResponse, ReadResponse


class PhonebookClientError(Exception):
    """Raised when the API answers with a 4xx or 5xx status."""

    def __init__(self, message: str, status_code: int | None = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class PhonebookClient:
    """Async client for the Phonebook API."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the Phonebook API
            timeout: Request timeout in seconds
            transport: Custom transport (e.g. httpx.ASGITransport in tests)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "PhonebookClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        response = await self._client.request(method, path, json=json, params=params)

        if response.status_code >= 400:
            details: Any = None
            try:
                details = response.json()
                message = details.get("message", response.text)
            except ValueError:
                message = response.text

            raise PhonebookClientError(
                message=message,
                status_code=response.status_code,
                details=details,
            )

        return response.json()

    async def health(self) -> HealthResponse:
        """Check API health."""
        data = await self._request("GET", "/health")
        return HealthResponse.model_validate(data)

    async def add_phone(self, file: str, phone: str) -> MutationResponse:
        """Append one phone number to a list."""
        data = await self._request("POST", "/api/add", json={"file": file, "phone": phone})
        return MutationResponse.model_validate(data)

    async def bulk_add(self, file: str, phones: Sequence[str]) -> MutationResponse:
        """Append many phone numbers to a list."""
        data = await self._request(
            "POST",
            "/api/admin/bulk-add",
            json={"file": file, "phones": list(phones)},
        )
        return MutationResponse.model_validate(data)

    async def get_phones(self, file: str) -> list[str]:
        """Read every phone number in a list."""
        data = await self._request("GET", "/api/get", params={"file": file})
        return ReadResponse.model_validate(data).phones
