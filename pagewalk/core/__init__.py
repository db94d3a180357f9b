"""Core types: exceptions, enums, configuration and collaborator protocols."""

from .config import PagingConfig, RetryPolicy
from .enums import IneligibilityReason, StreamEventKind, WalkState
from .exceptions import (
    AuthError,
    AuthFailedError,
    ChannelClosedError,
    DecodeError,
    DecodeFailedError,
    FetchError,
    PagingError,
    RequestFailedError,
    TransportError,
)
from .protocols import ChunkSink, CredentialProvider, PageFetcher

__all__ = [
    "AuthError",
    "AuthFailedError",
    "ChannelClosedError",
    "ChunkSink",
    "CredentialProvider",
    "DecodeError",
    "DecodeFailedError",
    "FetchError",
    "IneligibilityReason",
    "PageFetcher",
    "PagingConfig",
    "PagingError",
    "RequestFailedError",
    "RetryPolicy",
    "StreamEventKind",
    "TransportError",
    "WalkState",
]
