"""OpenAI speech synthesis for spoken replies."""

import time
from typing import Optional

from openai import APIError

from voicechat.adapters.openai_client import OpenAIClientMixin
from voicechat.adapters.tts.base import (
    TTSAdapter,
    TTSResult,
    TTSError,
    TTSTimeoutError,
    TTSTextTooLongError,
    TTSRateLimitError,
    estimate_duration_ms,
)
from voicechat.config import get_settings


class OpenAITTSAdapter(OpenAIClientMixin, TTSAdapter):
    """Speaks replies through the OpenAI ``audio.speech`` endpoint as MP3."""

    ERROR = TTSError
    TIMEOUT_ERROR = TTSTimeoutError
    RATE_LIMIT_ERROR = TTSRateLimitError

    MODEL = "tts-1"
    MAX_TEXT_LENGTH = 4096
    VOICES = ["alloy", "echo", "fable", "onyx", "nova", "shimmer"]
    FALLBACK_VOICE = "nova"
    MIN_SPEED, MAX_SPEED = 0.25, 4.0

    def __init__(self, api_key: Optional[str] = None):
        self._configure_client(api_key)
        configured = get_settings().tts_voice
        self.default_voice = configured if configured in self.VOICES else self.FALLBACK_VOICE

    async def synthesize(
        self,
        text: str,
        language: str = "en",
        voice: Optional[str] = None,
        speed: float = 1.0,
    ) -> TTSResult:
        """Speak ``text``; OpenAI voices are multilingual so ``language`` is unused.

        Unknown voice names fall back to the configured default and ``speed``
        is clamped to what the endpoint accepts.
        """
        if len(text) > self.MAX_TEXT_LENGTH:
            raise TTSTextTooLongError(
                message=f"Reply is {len(text)} characters, limit is {self.MAX_TEXT_LENGTH}",
                provider=self.PROVIDER_NAME,
                details={"text_length": len(text), "max_length": self.MAX_TEXT_LENGTH},
            )

        chosen_voice = voice if voice in self.VOICES else self.default_voice
        speed = min(self.MAX_SPEED, max(self.MIN_SPEED, speed))
        started = time.perf_counter()

        try:
            speech = await self.client.audio.speech.create(
                model=self.MODEL,
                voice=chosen_voice,
                input=text,
                speed=speed,
                response_format="mp3",
            )
        except APIError as e:
            raise self._translate_error(e) from e

        return TTSResult(
            audio=speech.content,
            format="mp3",
            duration_ms=estimate_duration_ms(text, speed),
            latency_ms=int((time.perf_counter() - started) * 1000),
        )
