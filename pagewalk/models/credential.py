"""Credential data model."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Credential(BaseModel):
    """Short-lived access token with an expiry instant.

    Owned by a credential provider; the paging core only reads it.
    """

    access_token: str = Field(..., min_length=1, repr=False)
    refresh_token: str | None = Field(default=None, repr=False)
    expires_at: datetime | None = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("expires_at")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """Naive expiry instants are taken as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @classmethod
    def expiring_in(
        cls,
        access_token: str,
        seconds: float,
        refresh_token: str | None = None,
    ) -> Credential:
        """Create a credential that expires ``seconds`` from now."""
        return cls(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=datetime.now(UTC) + timedelta(seconds=seconds),
        )

    def is_expired(
        self,
        leeway: timedelta = timedelta(0),
        now: datetime | None = None,
    ) -> bool:
        """Check whether the credential is expired or expires within ``leeway``.

        A credential without a known expiry never expires.
        """
        if self.expires_at is None:
            return False
        now = now or datetime.now(UTC)
        return self.expires_at - leeway <= now

    def authorization(self, scheme: str = "OAuth") -> str:
        """Value for an ``Authorization`` header."""
        return f"{scheme} {self.access_token}"
