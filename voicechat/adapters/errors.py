"""Exceptions shared by all provider adapters."""

from typing import Optional


class ProviderError(Exception):
    """Base exception for failures of an external AI provider."""

    def __init__(self, message: str, provider: str, details: Optional[dict] = None):
        self.message = message
        self.provider = provider
        self.details = details or {}
        super().__init__(f"[{provider}] {message}")


class ProviderTimeoutError(ProviderError):
    """Raised when a provider request times out."""

    pass


class ProviderRateLimitError(ProviderError):
    """Raised when a provider rate limit is exceeded."""

    pass
