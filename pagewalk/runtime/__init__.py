"""Runtime orchestration: page walking, quota accumulation and streaming."""

from .accumulator import QuotaAccumulator, fetch_all, fetch_until_quota
from .channel import ChunkChannel
from .dispatcher import ChunkDispatcher, open_stream, stream_chunks
from .walker import PageWalker

__all__ = [
    "ChunkChannel",
    "ChunkDispatcher",
    "PageWalker",
    "QuotaAccumulator",
    "fetch_all",
    "fetch_until_quota",
    "open_stream",
    "stream_chunks",
]
