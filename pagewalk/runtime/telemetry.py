"""Structured logging for paging operations.

This module provides telemetry hooks for page walks, emitting structured
logs with event names as messages and details in ``extra``.
"""

from __future__ import annotations

import logging

from ..core.enums import WalkState

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    walk_id: str,
    page_index: int,
    items: int,
    has_more: bool,
    latency_ms: float | None = None,
) -> None:
    """Log a successfully fetched page.

    Args:
        walk_id: Identifier of the walk
        page_index: Zero-based index of the page within the walk
        items: Raw items on the page (before filtering)
        has_more: Whether the page carried a continuation
        latency_ms: Request latency in milliseconds (optional)
    """
    logger.info(
        "page_fetched",
        extra={
            "walk_id": walk_id,
            "page_index": page_index,
            "items": items,
            "has_more": has_more,
            "latency_ms": latency_ms,
        },
    )


def log_page_error(
    *,
    walk_id: str,
    page_index: int,
    error_type: str,
    error_message: str,
    fatal: bool,
) -> None:
    """Log a failed page.

    First-page failures are fatal and logged at ERROR. Later failures end
    the walk gracefully and are logged at WARNING.

    Args:
        walk_id: Identifier of the walk
        page_index: Zero-based index of the page that failed
        error_type: Exception class name
        error_message: Exception message
        fatal: Whether the failure aborts the walk with an error
    """
    logger.log(
        logging.ERROR if fatal else logging.WARNING,
        "page_error",
        extra={
            "walk_id": walk_id,
            "page_index": page_index,
            "error_type": error_type,
            "error_message": error_message,
            "fatal": fatal,
        },
    )


def log_credential_refreshed(*, walk_id: str, page_index: int, success: bool) -> None:
    """Log a credential refresh attempt made during a walk."""
    logger.log(
        logging.INFO if success else logging.ERROR,
        "credential_refreshed",
        extra={"walk_id": walk_id, "page_index": page_index, "success": success},
    )


def log_walk_complete(
    *,
    walk_id: str,
    state: WalkState,
    pages_fetched: int,
    eligible_items: int,
    raw_items: int,
) -> None:
    """Log the end of an accumulation walk.

    Args:
        walk_id: Identifier of the walk
        state: Walker state when accumulation stopped
        pages_fetched: Pages successfully fetched
        eligible_items: Items returned after filtering and deduplication
        raw_items: Items received before filtering
    """
    logger.info(
        "walk_complete",
        extra={
            "walk_id": walk_id,
            "state": state.value,
            "pages_fetched": pages_fetched,
            "eligible_items": eligible_items,
            "raw_items": raw_items,
        },
    )


def log_chunk_dispatched(*, walk_id: str, page_index: int, items: int, dropped: int) -> None:
    """Log a chunk forwarded to a sink."""
    logger.debug(
        "chunk_dispatched",
        extra={
            "walk_id": walk_id,
            "page_index": page_index,
            "items": items,
            "dropped": dropped,
        },
    )
