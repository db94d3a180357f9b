"""Paging configuration and defaults.

Defaults can be overridden per session by passing a ``PagingConfig`` or
process-wide through ``PAGEWALK_*`` environment variables read by
``PagingConfig.from_env``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

# Pause between streamed chunks so a slow consumer is not flooded
DEFAULT_INTER_CHUNK_DELAY = 0.05
DEFAULT_PAGE_SIZE_HINT = 50

# HTTP transport
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_HTTP_MAX_ATTEMPTS = 3
DEFAULT_HTTP_BACKOFF_BASE = 0.5
RETRYABLE_STATUSES = frozenset({408, 429, 500, 502, 503, 504})

# Credentials expiring within this window are refreshed proactively
DEFAULT_REFRESH_LEEWAY_SECONDS = 300

ENV_PREFIX = "PAGEWALK_"


@dataclass(frozen=True)
class RetryPolicy:
    """Per-walk retry budget.

    Attributes:
        max_refreshes_per_walk: Credential refreshes allowed in one walk
        request_retries: Extra attempts for a failed page request
    """

    max_refreshes_per_walk: int = 1
    request_retries: int = 0

    def __post_init__(self) -> None:
        if self.max_refreshes_per_walk < 0:
            raise ValueError("max_refreshes_per_walk must be >= 0")
        if self.request_retries < 0:
            raise ValueError("request_retries must be >= 0")


@dataclass(frozen=True)
class PagingConfig:
    """Tunables for a fetch session and its HTTP transport.

    Attributes:
        inter_chunk_delay: Seconds to wait between streamed chunks
        page_size_hint: Default page size passed to fetchers
        retry_policy: Credential refresh and request retry budget
        http_timeout: Total timeout for one HTTP request, in seconds
        http_max_attempts: Attempts for retryable HTTP statuses
        http_backoff_base: First backoff delay, doubled per attempt
    """

    inter_chunk_delay: float = DEFAULT_INTER_CHUNK_DELAY
    page_size_hint: int = DEFAULT_PAGE_SIZE_HINT
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    http_max_attempts: int = DEFAULT_HTTP_MAX_ATTEMPTS
    http_backoff_base: float = DEFAULT_HTTP_BACKOFF_BASE

    def __post_init__(self) -> None:
        if self.inter_chunk_delay < 0:
            raise ValueError("inter_chunk_delay must be >= 0")
        if self.page_size_hint <= 0:
            raise ValueError("page_size_hint must be > 0")
        if self.http_max_attempts < 1:
            raise ValueError("http_max_attempts must be >= 1")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> PagingConfig:
        """Build a config from ``PAGEWALK_*`` environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            PagingConfig with any overrides applied

        Raises:
            ValueError: If a variable cannot be parsed
        """
        env = os.environ if environ is None else environ

        def _get(name: str, cast, default):
            raw = env.get(f"{ENV_PREFIX}{name}")
            if raw is None or raw == "":
                return default
            try:
                return cast(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {ENV_PREFIX}{name}: {raw!r}") from e

        retry_policy = RetryPolicy(
            max_refreshes_per_walk=_get("MAX_REFRESHES", int, 1),
            request_retries=_get("REQUEST_RETRIES", int, 0),
        )
        return cls(
            inter_chunk_delay=_get("INTER_CHUNK_DELAY", float, DEFAULT_INTER_CHUNK_DELAY),
            page_size_hint=_get("PAGE_SIZE_HINT", int, DEFAULT_PAGE_SIZE_HINT),
            retry_policy=retry_policy,
            http_timeout=_get("HTTP_TIMEOUT", float, DEFAULT_HTTP_TIMEOUT),
            http_max_attempts=_get("HTTP_MAX_ATTEMPTS", int, DEFAULT_HTTP_MAX_ATTEMPTS),
            http_backoff_base=_get("HTTP_BACKOFF_BASE", float, DEFAULT_HTTP_BACKOFF_BASE),
        )
