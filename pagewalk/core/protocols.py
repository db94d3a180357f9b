"""Collaborator protocols consumed by the paging core.

Architecture:
    The core never acquires credentials or performs I/O itself. It talks to
    three injected capabilities:
    - CredentialProvider: hands out the current credential and refreshes it
    - PageFetcher: retrieves one page for a cursor and credential
    - ChunkSink: receives streamed chunk events

    Protocols keep the seams structural, so test fakes and real adapters do
    not need a shared base class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..models import Credential, Page, StreamEvent


@runtime_checkable
class CredentialProvider(Protocol):
    """Source of short-lived credentials, shared read-mostly across sessions."""

    def current(self) -> Credential | None:
        """Return the current usable credential, or None if missing or expired."""
        ...

    async def refresh(self) -> Credential:
        """Obtain a fresh credential.

        Raises:
            AuthError: If no refresh is possible or the refresh failed
        """
        ...


@runtime_checkable
class PageFetcher(Protocol):
    """Retrieves one page of a cursor-paginated listing."""

    async def fetch_page(
        self,
        cursor: str | None,
        credential: Credential,
        *,
        limit: int | None = None,
    ) -> Page | dict[str, Any]:
        """Fetch the page addressed by ``cursor`` (None for the first page).

        Any other exception is treated by the walker as a failed request.

        Raises:
            TransportError: On transport failure or non-success response
            DecodeError: If the payload is not a page
        """
        ...


@runtime_checkable
class ChunkSink(Protocol):
    """Consumer channel for streamed chunk events."""

    @property
    def closed(self) -> bool:
        """True once the consumer has closed the channel."""
        ...

    async def send(self, event: StreamEvent) -> None:
        """Deliver one event.

        Raises:
            ChannelClosedError: If the consumer closed the channel
        """
        ...
