"""Credential providers.

Providers are shared read-mostly between fetch sessions. They do not
coordinate refreshes: when two sessions refresh at once, the last successful
refresh wins and both keep working with whichever credential they got.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import timedelta

from ..core.config import DEFAULT_REFRESH_LEEWAY_SECONDS
from ..core.exceptions import AuthError
from ..models import Credential

logger = logging.getLogger(__name__)

Refresher = Callable[[str], Awaitable[Credential]]


class StaticCredentialProvider:
    """Hands out a fixed credential and cannot refresh it."""

    def __init__(self, credential: Credential | None) -> None:
        self._credential = credential

    def current(self) -> Credential | None:
        if self._credential is None or self._credential.is_expired():
            return None
        return self._credential

    async def refresh(self) -> Credential:
        raise AuthError("Static credential provider cannot refresh")


class RefreshingCredentialProvider:
    """Credential provider backed by a refresh-token exchange.

    ``current`` stops returning the credential ``leeway`` before it expires,
    so the walker refreshes proactively instead of sending a token that dies
    mid-request.
    """

    def __init__(
        self,
        refresher: Refresher,
        credential: Credential | None = None,
        *,
        leeway: timedelta = timedelta(seconds=DEFAULT_REFRESH_LEEWAY_SECONDS),
    ) -> None:
        """Initialize provider.

        Args:
            refresher: Coroutine exchanging a refresh token for a new credential
            credential: Initial credential (possibly already expired)
            leeway: How long before expiry a credential stops being handed out
        """
        self._refresher = refresher
        self._credential = credential
        self._leeway = leeway
        self.refresh_count = 0

    @property
    def credential(self) -> Credential | None:
        """Last known credential, even if expired."""
        return self._credential

    def current(self) -> Credential | None:
        if self._credential is None or self._credential.is_expired(self._leeway):
            return None
        return self._credential

    async def refresh(self) -> Credential:
        """Exchange the refresh token for a new credential.

        Raises:
            AuthError: No refresh token, or the exchange failed
        """
        refresh_token = self._credential.refresh_token if self._credential else None
        if not refresh_token:
            raise AuthError("No refresh token available")

        logger.info("Credential expired or expiring, refreshing")
        try:
            credential = await self._refresher(refresh_token)
        except AuthError:
            raise
        except Exception as e:
            raise AuthError(f"Credential refresh failed: {e}") from e

        # Keep the old refresh token if the new grant did not rotate it
        if credential.refresh_token is None:
            credential = credential.model_copy(update={"refresh_token": refresh_token})
        self._credential = credential
        self.refresh_count += 1
        logger.info("Credential refreshed")
        return credential
