"""AsyncOpenAI client handling shared by the OpenAI adapters."""

from typing import Optional, Type

from openai import AsyncOpenAI, APIError, APITimeoutError, RateLimitError

from voicechat.adapters.errors import (
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from voicechat.config import get_settings


class OpenAIClientMixin:
    """Lazily built AsyncOpenAI client plus OpenAI error translation.

    The client is only created on first use, so a missing OPENAI_API_KEY
    surfaces as the adapter's own error instead of failing at import or
    construction time. Adapters point ``ERROR``, ``TIMEOUT_ERROR`` and
    ``RATE_LIMIT_ERROR`` at their exception family.
    """

    PROVIDER_NAME = "openai"
    ERROR: Type[ProviderError] = ProviderError
    TIMEOUT_ERROR: Type[ProviderError] = ProviderTimeoutError
    RATE_LIMIT_ERROR: Type[ProviderError] = ProviderRateLimitError

    def _configure_client(self, api_key: Optional[str] = None) -> None:
        settings = get_settings()
        self.api_key = api_key or settings.openai_api_key
        self.timeout = settings.request_timeout_seconds
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise self.ERROR(
                    message="OPENAI_API_KEY is not configured",
                    provider=self.PROVIDER_NAME,
                )
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout)
        return self._client

    @client.setter
    def client(self, client: AsyncOpenAI) -> None:
        self._client = client

    def _translate_error(self, e: APIError) -> ProviderError:
        """Convert an OpenAI SDK error into this adapter's error family."""
        if isinstance(e, APITimeoutError):
            return self.TIMEOUT_ERROR(
                message="Request timed out",
                provider=self.PROVIDER_NAME,
                details={"timeout": self.timeout},
            )
        if isinstance(e, RateLimitError):
            return self.RATE_LIMIT_ERROR(
                message="Rate limit exceeded",
                provider=self.PROVIDER_NAME,
                details={"error": str(e)},
            )
        return self.ERROR(
            message=str(e),
            provider=self.PROVIDER_NAME,
            details={"status_code": getattr(e, "status_code", None)},
        )

    def get_provider_name(self) -> str:
        """Get provider name."""
        return self.PROVIDER_NAME
