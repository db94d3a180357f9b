"""pagewalk - paginated retrieval and eligibility filtering for remote listings."""

from .api import PagingAPI, run_blocking
from .auth import RefreshingCredentialProvider, StaticCredentialProvider
from .connectors import RESTPageFetcher
from .core import (
    AuthError,
    AuthFailedError,
    ChannelClosedError,
    ChunkSink,
    CredentialProvider,
    DecodeError,
    DecodeFailedError,
    FetchError,
    IneligibilityReason,
    PageFetcher,
    PagingConfig,
    PagingError,
    RequestFailedError,
    RetryPolicy,
    StreamEventKind,
    TransportError,
    WalkState,
)
from .filters import (
    deduplicate,
    filter_and_deduplicate,
    filter_eligible,
    ineligibility_reason,
    is_eligible,
)
from .models import Credential, FetchOutcome, FetchQuota, Item, Page, StreamEvent
from .runtime import (
    ChunkChannel,
    ChunkDispatcher,
    PageWalker,
    QuotaAccumulator,
    fetch_all,
    fetch_until_quota,
    open_stream,
    stream_chunks,
)
from .utils import HTTPClient

__version__ = "0.1.0"

__all__ = [
    # Operations
    "fetch_until_quota",
    "fetch_all",
    "stream_chunks",
    "open_stream",
    "is_eligible",
    "ineligibility_reason",
    "filter_eligible",
    "deduplicate",
    "filter_and_deduplicate",
    "run_blocking",
    # Runtime
    "PageWalker",
    "QuotaAccumulator",
    "ChunkDispatcher",
    "ChunkChannel",
    "PagingAPI",
    # Collaborators
    "CredentialProvider",
    "PageFetcher",
    "ChunkSink",
    "StaticCredentialProvider",
    "RefreshingCredentialProvider",
    "RESTPageFetcher",
    "HTTPClient",
    # Models
    "Item",
    "Page",
    "FetchQuota",
    "FetchOutcome",
    "Credential",
    "StreamEvent",
    # Enums and config
    "WalkState",
    "IneligibilityReason",
    "StreamEventKind",
    "PagingConfig",
    "RetryPolicy",
    # Exceptions
    "PagingError",
    "AuthError",
    "TransportError",
    "DecodeError",
    "FetchError",
    "AuthFailedError",
    "RequestFailedError",
    "DecodeFailedError",
    "ChannelClosedError",
]
