"""HTTP client helper."""

from __future__ import annotations

import json
from typing import Any

import aiohttp

from ..core.config import (
    DEFAULT_HTTP_BACKOFF_BASE,
    DEFAULT_HTTP_MAX_ATTEMPTS,
    DEFAULT_HTTP_TIMEOUT,
    RETRYABLE_STATUSES,
    PagingConfig,
)
from ..core.exceptions import DecodeError, TransportError
from .retry import retry_async


class _RetryableStatus(TransportError):
    """Transient status, retried by ``get_json``."""

    pass


def _is_transient(error: Exception) -> bool:
    return isinstance(error, (_RetryableStatus, aiohttp.ClientConnectionError, TimeoutError))


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        max_attempts: int = DEFAULT_HTTP_MAX_ATTEMPTS,
        backoff_base: float = DEFAULT_HTTP_BACKOFF_BASE,
    ) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.max_attempts = max_attempts
        self.backoff_base = backoff_base
        self._session: aiohttp.ClientSession | None = None

    @classmethod
    def from_config(cls, config: PagingConfig, base_url: str | None = None) -> HTTPClient:
        """Create a client using the transport settings of ``config``."""
        return cls(
            base_url=base_url,
            timeout=config.http_timeout,
            max_attempts=config.http_max_attempts,
            backoff_base=config.http_backoff_base,
        )

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def _url(self, url: str) -> str:
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET request returning decoded JSON.

        Statuses 408, 429 and 5xx gateway errors, connection errors and
        timeouts are retried with exponential backoff.

        Raises:
            TransportError: Non-success final status or transport failure
            DecodeError: Body is not valid JSON
        """
        full_url = self._url(url)

        async def _once() -> Any:
            async with self.session.get(full_url, params=params, headers=headers) as response:
                status = response.status
                if status in RETRYABLE_STATUSES:
                    raise _RetryableStatus(f"HTTP {status} from {full_url}", status_code=status)
                if status == 403:
                    raise TransportError(
                        f"Resource at {full_url} is restricted (HTTP 403)", status_code=status
                    )
                if status >= 400:
                    raise TransportError(f"HTTP {status} from {full_url}", status_code=status)
                body = await response.text()
            try:
                return json.loads(body)
            except json.JSONDecodeError as e:
                raise DecodeError(f"Invalid JSON from {full_url}: {e}", status_code=status) from e

        try:
            return await retry_async(
                _once,
                max_attempts=self.max_attempts,
                base_delay=self.backoff_base,
                should_retry=_is_transient,
                description=f"GET {full_url}",
            )
        except _RetryableStatus as e:
            raise TransportError(str(e), status_code=e.status_code) from e
        except (aiohttp.ClientError, TimeoutError) as e:
            raise TransportError(f"GET {full_url} failed: {e}") from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
