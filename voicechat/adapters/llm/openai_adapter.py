"""OpenAI Chat Completions LLM Adapter implementation."""

import time
from typing import Optional

from openai import APIError

from voicechat.adapters.llm.base import (
    LLMAdapter,
    LLMResult,
    LLMError,
    LLMTimeoutError,
    LLMRateLimitError,
    LLMEmptyResponseError,
)
from voicechat.adapters.openai_client import OpenAIClientMixin
from voicechat.config import get_settings


class OpenAILLMAdapter(OpenAIClientMixin, LLMAdapter):
    """OpenAI Chat Completions adapter for text generation."""

    DEFAULT_MODEL = "gpt-4o-mini"
    ERROR = LLMError
    TIMEOUT_ERROR = LLMTimeoutError
    RATE_LIMIT_ERROR = LLMRateLimitError

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """Initialize OpenAI LLM adapter.

        Args:
            api_key: OpenAI API key. If not provided, uses settings.
            model: Model name. If not provided, uses settings or the default.
        """
        self._configure_client(api_key)
        self.model = model or get_settings().llm_model or self.DEFAULT_MODEL

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
    ) -> LLMResult:
        """Generate a reply using the Chat Completions API."""
        start_time = time.perf_counter()

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
            )
        except APIError as e:
            raise self._translate_error(e) from e

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        content = response.choices[0].message.content if response.choices else None
        text = (content or "").strip()
        if not text:
            raise LLMEmptyResponseError(
                message="Model returned no text",
                provider=self.PROVIDER_NAME,
            )

        return LLMResult(text=text, model=response.model or self.model, latency_ms=latency_ms)
