"""Gemini STT Adapter - multimodal transcription through the Gemini API."""

import time
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from voicechat.adapters.stt.base import (
    STTAdapter,
    STTResult,
    STTError,
    STTTimeoutError,
    STTInvalidAudioError,
    STTRateLimitError,
)
from voicechat.config import get_settings


class GeminiSTTAdapter(STTAdapter):
    """Transcribes audio by sending it inline to a Gemini model."""

    PROVIDER_NAME = "gemini"
    DEFAULT_MODEL = "gemini-1.5-flash"
    DEFAULT_MIME_TYPE = "audio/webm"
    INSTRUCTION = (
        "Transcribe the speech in this audio{language}. "
        "Return only the transcribed text, with no commentary. "
        "If there is no speech, return an empty response."
    )

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """Initialize Gemini STT adapter."""
        settings = get_settings()
        self.api_key = api_key or settings.gemini_api_key
        self.model = model or self.DEFAULT_MODEL
        self.timeout = settings.request_timeout_seconds
        if self.api_key:
            genai.configure(api_key=self.api_key)

    async def transcribe(
        self,
        audio: bytes,
        language: str = "en",
        hints: Optional[list[str]] = None,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> STTResult:
        """Transcribe audio with a Gemini model."""
        if not audio:
            raise STTInvalidAudioError(
                message="Audio is empty",
                provider=self.PROVIDER_NAME,
            )
        if not self.api_key:
            raise STTError(
                message="GEMINI_API_KEY is not configured",
                provider=self.PROVIDER_NAME,
            )

        start_time = time.perf_counter()

        instruction = self.INSTRUCTION.format(
            language=f" (language: {language})" if language else ""
        )
        if hints:
            instruction += " Vocabulary hints: " + ", ".join(hints) + "."

        mime_type = self._mime_type(content_type)
        model = genai.GenerativeModel(self.model)

        try:
            response = await model.generate_content_async(
                [instruction, {"mime_type": mime_type, "data": audio}],
                request_options={"timeout": self.timeout},
            )
        except google_exceptions.DeadlineExceeded as e:
            raise STTTimeoutError(
                message="Request timed out",
                provider=self.PROVIDER_NAME,
                details={"timeout": self.timeout},
            ) from e
        except google_exceptions.ResourceExhausted as e:
            raise STTRateLimitError(
                message="Rate limit exceeded",
                provider=self.PROVIDER_NAME,
                details={"error": str(e)},
            ) from e
        except google_exceptions.InvalidArgument as e:
            raise STTInvalidAudioError(
                message=str(e),
                provider=self.PROVIDER_NAME,
                details={"mime_type": mime_type},
            ) from e
        except google_exceptions.GoogleAPIError as e:
            raise STTError(
                message=str(e),
                provider=self.PROVIDER_NAME,
                details={"status_code": getattr(e, "code", None)},
            ) from e

        try:
            text = response.text
        except ValueError:
            # No text parts: treat as silence
            text = ""

        text = (text or "").strip()
        latency_ms = int((time.perf_counter() - start_time) * 1000)

        return STTResult(
            text=text,
            confidence=0.9 if text else 0.0,
            language=language,
            latency_ms=latency_ms,
        )

    def _mime_type(self, content_type: Optional[str]) -> str:
        """Strip codec parameters; fall back for generic binary uploads."""
        if not content_type:
            return self.DEFAULT_MIME_TYPE
        base = content_type.split(";", 1)[0].strip().lower()
        if base.startswith("audio/"):
            return base
        if base == "video/webm":
            return "audio/webm"
        return self.DEFAULT_MIME_TYPE

    def get_provider_name(self) -> str:
        return self.PROVIDER_NAME
