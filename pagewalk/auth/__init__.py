"""Credential provider implementations."""

from .providers import RefreshingCredentialProvider, StaticCredentialProvider

__all__ = ["RefreshingCredentialProvider", "StaticCredentialProvider"]
