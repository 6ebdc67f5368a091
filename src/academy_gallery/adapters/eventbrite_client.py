"""Eventbrite API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class EventbriteError(RuntimeError):
    """Raised when Eventbrite answers with a non-success status."""

    def __init__(self, status_code: int, details: object) -> None:
        super().__init__(f"Eventbrite request failed with status {status_code}")
        self.status_code = status_code
        self.details = details


class EventbriteClient(Protocol):
    """Interface for Eventbrite API interactions."""

    async def list_live_events(self) -> dict[str, object]:
        """Return live organization events with their ticket classes."""


@dataclass
class HttpxEventbriteClient(EventbriteClient):
    """HTTPX-backed Eventbrite client."""

    token: str
    organization_id: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, token: str, organization_id: str, base_url: str
    ) -> "HttpxEventbriteClient":
        """Create an Eventbrite client with a managed httpx session."""
        return cls(
            token=token,
            organization_id=organization_id,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def list_live_events(self) -> dict[str, object]:
        """Fetch live events, expanding ticket classes."""
        url = f"{self.base_url}/organizations/{self.organization_id}/events/"
        response = await self.http_client.get(
            url,
            params={"status": "live", "expand": "ticket_classes"},
            headers={
                "Authorization": f"Bearer {self.token}",
                "Content-Type": "application/json",
            },
            timeout=15,
        )
        if response.is_error:
            try:
                details: object = response.json()
            except ValueError:
                details = response.text
            raise EventbriteError(response.status_code, details)
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
