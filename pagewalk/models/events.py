"""Events delivered on a chunk channel."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from ..core.enums import StreamEventKind
from .item import Item


@dataclass(frozen=True)
class StreamEvent:
    """Structured event for streamed chunks.

    A ``CHUNK`` event may legitimately carry no items when a whole page was
    filtered out. End of stream is always a ``COMPLETED`` event, never an
    empty chunk.
    """

    kind: StreamEventKind
    items: tuple[Item, ...] = ()
    page_index: int | None = None
    total_items: int = 0
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def chunk(cls, items: list[Item] | tuple[Item, ...], page_index: int) -> StreamEvent:
        """Create a chunk event for one page."""
        return cls(
            kind=StreamEventKind.CHUNK,
            items=tuple(items),
            page_index=page_index,
            total_items=len(items),
        )

    @classmethod
    def completed(cls, total_items: int, pages: int) -> StreamEvent:
        """Create the end-of-stream event."""
        return cls(
            kind=StreamEventKind.COMPLETED,
            total_items=total_items,
            metadata={"pages": pages},
        )

    @property
    def is_completed(self) -> bool:
        return self.kind is StreamEventKind.COMPLETED

    def __len__(self) -> int:
        return len(self.items)
