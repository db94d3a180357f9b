"""Listing item data model."""

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """One entry of a paginated listing.

    Only the identity and eligibility attributes are typed. Any other fields
    in the payload (artwork, user, duration, ...) are kept as extras and
    passed through untouched.
    """

    id: int | str
    title: str = ""
    streamable: bool | None = None
    stream_url: str | None = Field(default=None, description="Playable resource locator")
    access: str | None = Field(default=None, description="Access restriction tag")
    policy: str | None = Field(default=None, description="Geo/monetization policy tag")

    model_config = ConfigDict(frozen=True, extra="allow")
