"""Google Gemini LLM Adapter implementation."""

import logging
import time
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from voicechat.adapters.llm.base import (
    LLMAdapter,
    LLMResult,
    LLMError,
    LLMTimeoutError,
    LLMRateLimitError,
    LLMEmptyResponseError,
)
from voicechat.config import get_settings

logger = logging.getLogger(__name__)


class GeminiLLMAdapter(LLMAdapter):
    """Gemini API adapter for text generation."""

    PROVIDER_NAME = "gemini"
    DEFAULT_MODEL = "gemini-1.5-flash"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """Initialize Gemini adapter.

        Args:
            api_key: Gemini API key. If not provided, uses settings.
            model: Model name. If not provided, uses settings or the default.
        """
        settings = get_settings()
        self.api_key = api_key or settings.gemini_api_key
        self.model = model or settings.llm_model or self.DEFAULT_MODEL
        self.timeout = settings.request_timeout_seconds
        if self.api_key:
            genai.configure(api_key=self.api_key)

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
    ) -> LLMResult:
        """Generate a reply using Gemini."""
        if not self.api_key:
            raise LLMError(
                message="GEMINI_API_KEY is not configured",
                provider=self.PROVIDER_NAME,
            )

        start_time = time.perf_counter()
        model = genai.GenerativeModel(
            self.model,
            system_instruction=system_prompt or None,
        )

        try:
            response = await model.generate_content_async(
                prompt,
                request_options={"timeout": self.timeout},
            )
        except google_exceptions.DeadlineExceeded as e:
            raise LLMTimeoutError(
                message="Request timed out",
                provider=self.PROVIDER_NAME,
                details={"timeout": self.timeout},
            ) from e
        except google_exceptions.ResourceExhausted as e:
            raise LLMRateLimitError(
                message="Rate limit exceeded",
                provider=self.PROVIDER_NAME,
                details={"error": str(e)},
            ) from e
        except google_exceptions.GoogleAPIError as e:
            raise LLMError(
                message=str(e),
                provider=self.PROVIDER_NAME,
                details={"status_code": getattr(e, "code", None)},
            ) from e

        text = self._extract_text(response)
        latency_ms = int((time.perf_counter() - start_time) * 1000)
        logger.debug("Gemini response: %s", text)

        return LLMResult(text=text, model=self.model, latency_ms=latency_ms)

    def _extract_text(self, response) -> str:
        """Pull the reply text out of a Gemini response.

        ``response.text`` raises ValueError when the candidate was blocked
        or carries no text parts.
        """
        try:
            text = response.text
        except ValueError as e:
            feedback = getattr(response, "prompt_feedback", None)
            raise LLMEmptyResponseError(
                message="Model returned no text",
                provider=self.PROVIDER_NAME,
                details={"prompt_feedback": str(feedback) if feedback else None},
            ) from e

        text = (text or "").strip()
        if not text:
            raise LLMEmptyResponseError(
                message="Model returned no text",
                provider=self.PROVIDER_NAME,
            )
        return text

    def get_provider_name(self) -> str:
        return self.PROVIDER_NAME
