"""Base LLM Adapter interface and data classes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from voicechat.adapters.errors import (
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)


@dataclass
class LLMResult:
    """Result from text generation."""

    text: str
    model: str
    latency_ms: int = 0


class LLMAdapter(ABC):
    """Abstract base class for generative-language adapters.

    All language providers must implement this interface.
    """

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
    ) -> LLMResult:
        """Generate a reply for a user prompt.

        Args:
            prompt: User message text
            system_prompt: Optional instruction applied before the prompt

        Returns:
            LLMResult with the reply text and the model that produced it

        Raises:
            LLMError: If generation fails
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the name of this LLM provider."""
        pass


class LLMError(ProviderError):
    """Base exception for LLM errors."""

    pass


class LLMTimeoutError(LLMError, ProviderTimeoutError):
    """Raised when generation times out."""

    pass


class LLMRateLimitError(LLMError, ProviderRateLimitError):
    """Raised when rate limit is exceeded."""

    pass


class LLMEmptyResponseError(LLMError):
    """Raised when the model returns no usable text (e.g. safety block)."""

    pass
