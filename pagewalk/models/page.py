"""Page, quota and outcome models for paginated fetches."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.config import DEFAULT_PAGE_SIZE_HINT
from .item import Item


class Page(BaseModel):
    """One page of a paginated listing.

    ``continuation is None`` marks the end of the listing. A non-empty
    continuation only says the remote has more raw items; they may all turn
    out to be ineligible.
    """

    items: list[Item] = Field(default_factory=list)
    continuation: str | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("continuation", mode="before")
    @classmethod
    def normalize_continuation(cls, v: object) -> object:
        """Treat an empty continuation as end of listing."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_last(self) -> bool:
        return self.continuation is None


class FetchQuota(BaseModel):
    """How many eligible items a caller needs before accumulation may stop.

    ``minimum_eligible == 0`` means "first page only, no quota".
    """

    minimum_eligible: int = Field(..., ge=0)
    page_size_hint: int = Field(default=DEFAULT_PAGE_SIZE_HINT, gt=0)

    model_config = ConfigDict(frozen=True)


@dataclass
class FetchOutcome:
    """Aggregated result of a quota fetch.

    Attributes:
        items: Eligible, deduplicated items in listing order
        resume_cursor: Continuation of the last fetched page (None if exhausted)
        pages_fetched: Number of pages successfully fetched
        raw_items_seen: Items received before filtering
    """

    items: list[Item] = field(default_factory=list)
    resume_cursor: str | None = None
    pages_fetched: int = 0
    raw_items_seen: int = 0

    @property
    def exhausted(self) -> bool:
        """True when there is nothing left to resume from."""
        return self.resume_cursor is None

    def __len__(self) -> int:
        return len(self.items)
