"""Core enumerations shared across the walker, filters and dispatcher."""

from enum import Enum


class WalkState(str, Enum):
    """Lifecycle of a single page walk.

    ``PAGE_READY`` loops back to ``FETCHING`` while a continuation exists.
    ``EXHAUSTED``, ``AUTH_FAILED`` and ``REQUEST_FAILED`` are terminal.
    """

    IDLE = "idle"
    FETCHING = "fetching"
    PAGE_READY = "page_ready"
    EXHAUSTED = "exhausted"
    AUTH_FAILED = "auth_failed"
    REQUEST_FAILED = "request_failed"

    @property
    def is_terminal(self) -> bool:
        return self in (WalkState.EXHAUSTED, WalkState.AUTH_FAILED, WalkState.REQUEST_FAILED)


class IneligibilityReason(str, Enum):
    """First eligibility rule an item failed."""

    NOT_STREAMABLE = "not_streamable"
    NO_STREAM_URL = "no_stream_url"
    POLICY_BLOCKED = "policy_blocked"
    ACCESS_RESTRICTED = "access_restricted"


class StreamEventKind(str, Enum):
    """Kinds of events delivered on a chunk channel."""

    CHUNK = "chunk"
    COMPLETED = "completed"
