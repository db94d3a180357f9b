"""Async retry helper with exponential backoff."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_async(
    func: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = 3,
    base_delay: float = 0.5,
    should_retry: Callable[[Exception], bool] = lambda e: True,
    description: str = "operation",
) -> T:
    """Call ``func`` until it succeeds or attempts run out.

    Delays double after each failure: ``base_delay``, ``2 * base_delay``, ...

    Args:
        func: Zero-argument coroutine factory
        max_attempts: Total attempts, including the first
        base_delay: First delay in seconds
        should_retry: Predicate deciding whether an error is transient
        description: Label used in log messages

    Returns:
        Result of the first successful call

    Raises:
        Exception: The last error, or the first non-retryable one
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    for attempt in range(1, max_attempts + 1):
        try:
            return await func()
        except Exception as e:
            if attempt == max_attempts or not should_retry(e):
                raise
            delay = base_delay * 2 ** (attempt - 1)
            logger.warning(
                f"{description} failed (attempt {attempt}/{max_attempts}): {e}. "
                f"Retrying in {delay:.2f}s"
            )
            await asyncio.sleep(delay)

    raise RuntimeError("retry_async exhausted without result")
