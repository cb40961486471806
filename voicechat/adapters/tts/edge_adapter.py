"""TTS Adapter using edge-tts (Microsoft Edge read-aloud voices).

Free, fast and needs no API key, which makes it the default voice.
"""

import asyncio
import time
from typing import Optional

import edge_tts

from voicechat.adapters.tts.base import (
    TTSAdapter,
    TTSResult,
    TTSError,
    TTSTimeoutError,
    estimate_duration_ms,
)
from voicechat.config import get_settings


class EdgeTTSAdapter(TTSAdapter):
    """TTS adapter using Microsoft Edge TTS (via edge-tts)."""

    PROVIDER_NAME = "edge"

    # Voice mapping for languages
    VOICES = {
        "en": "en-US-AriaNeural",
        "de": "de-DE-KatjaNeural",
        "es": "es-ES-ElviraNeural",
        "fr": "fr-FR-DeniseNeural",
        "it": "it-IT-ElsaNeural",
        "pt": "pt-BR-FranciscaNeural",
        "ru": "ru-RU-SvetlanaNeural",
        "kk": "kk-KZ-AigulNeural",
        "ja": "ja-JP-NanamiNeural",
        "zh": "zh-CN-XiaoxiaoNeural",
    }
    DEFAULT_LANGUAGE = "en"

    def __init__(self, voice: Optional[str] = None):
        """Initialize TTS adapter.

        Args:
            voice: Voice used when a call names none. If not provided, uses settings.
        """
        settings = get_settings()
        self.voice = voice or settings.tts_voice or None
        self.timeout = settings.request_timeout_seconds

    def select_voice(self, language: str, voice: Optional[str] = None) -> str:
        """Pick the voice for a call: explicit, configured, then per language."""
        if voice:
            return voice
        if self.voice:
            return self.voice
        key = (language or self.DEFAULT_LANGUAGE).split("-", 1)[0].lower()
        return self.VOICES.get(key, self.VOICES[self.DEFAULT_LANGUAGE])

    @staticmethod
    def speed_to_rate(speed: float) -> str:
        """Convert a speed multiplier to edge-tts' signed percentage."""
        speed = max(0.5, min(2.0, speed))
        return f"{round((speed - 1.0) * 100):+d}%"

    async def synthesize(
        self,
        text: str,
        language: str = "en",
        voice: Optional[str] = None,
        speed: float = 1.0,
    ) -> TTSResult:
        """Synthesize speech using edge-tts."""
        start_time = time.perf_counter()
        voice_name = self.select_voice(language, voice)

        try:
            communicate = edge_tts.Communicate(
                text,
                voice_name,
                rate=self.speed_to_rate(speed),
            )
            audio_data = await asyncio.wait_for(self._collect(communicate), self.timeout)

        except asyncio.TimeoutError as e:
            raise TTSTimeoutError(
                message="Request timed out",
                provider=self.PROVIDER_NAME,
                details={"timeout": self.timeout},
            ) from e

        except Exception as e:
            raise TTSError(
                message=str(e) or type(e).__name__,
                provider=self.PROVIDER_NAME,
                details={"voice": voice_name},
            ) from e

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        return TTSResult(
            audio=audio_data,
            format="mp3",  # edge-tts outputs MP3
            duration_ms=estimate_duration_ms(text, max(0.5, min(2.0, speed))) or 1000,
            latency_ms=latency_ms,
        )

    async def _collect(self, communicate) -> bytes:
        """Collect audio chunks from the edge-tts stream."""
        audio_chunks = []
        async for chunk in communicate.stream():
            if chunk["type"] == "audio":
                audio_chunks.append(chunk["data"])
        return b"".join(audio_chunks)

    def get_provider_name(self) -> str:
        return self.PROVIDER_NAME
