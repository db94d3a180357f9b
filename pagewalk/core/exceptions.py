"""Custom exception hierarchy.

Two families live here. Collaborator errors (``AuthError``,
``TransportError``, ``DecodeError``) are raised by credential providers and
page fetchers. Walk errors (``FetchError`` and subclasses) are raised by the
page walker when a walk cannot even start.
"""

from __future__ import annotations


class PagingError(Exception):
    """Base exception for all library errors."""

    pass


class AuthError(PagingError):
    """Credential could not be obtained or refreshed."""

    pass


class TransportError(PagingError):
    """Transport failure or non-success response from the remote listing."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(TransportError):
    """Payload could not be interpreted as a page."""

    pass


class FetchError(PagingError):
    """A walk failed on a page it could not recover from."""

    def __init__(
        self,
        message: str,
        *,
        page_index: int = 0,
        cursor: str | None = None,
    ) -> None:
        super().__init__(message)
        self.page_index = page_index
        self.cursor = cursor


class AuthFailedError(FetchError):
    """Credential missing and refresh unavailable or failed."""

    pass


class RequestFailedError(FetchError):
    """Page request failed at the transport level or returned non-success."""

    def __init__(
        self,
        message: str,
        *,
        page_index: int = 0,
        cursor: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, page_index=page_index, cursor=cursor)
        self.status_code = status_code


class DecodeFailedError(FetchError):
    """Page payload could not be decoded."""

    pass


class ChannelClosedError(PagingError):
    """Chunk channel was closed by its consumer."""

    pass
