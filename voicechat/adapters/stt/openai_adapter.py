"""OpenAI Whisper STT Adapter implementation."""

import io
import time
from typing import Optional

from openai import APIError, BadRequestError

from voicechat.adapters.stt.base import (
    STTAdapter,
    STTResult,
    STTWord,
    STTError,
    STTTimeoutError,
    STTInvalidAudioError,
    STTRateLimitError,
)
from voicechat.adapters.openai_client import OpenAIClientMixin


class OpenAISTTAdapter(OpenAIClientMixin, STTAdapter):
    """OpenAI Whisper API adapter for Speech-to-Text."""

    ERROR = STTError
    TIMEOUT_ERROR = STTTimeoutError
    RATE_LIMIT_ERROR = STTRateLimitError
    SUPPORTED_FORMATS = ["flac", "mp3", "mp4", "mpeg", "mpga", "m4a", "ogg", "wav", "webm"]
    DEFAULT_FILENAME = "audio.webm"

    def __init__(self, api_key: Optional[str] = None):
        """Initialize OpenAI STT adapter.

        Args:
            api_key: OpenAI API key. If not provided, uses settings.
        """
        self._configure_client(api_key)

    async def transcribe(
        self,
        audio: bytes,
        language: str = "en",
        hints: Optional[list[str]] = None,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> STTResult:
        """Transcribe audio using OpenAI Whisper API.

        Args:
            audio: Audio data as bytes
            language: Language code; empty string lets Whisper detect it
            hints: Optional prompt hints for better recognition
            filename: Upload name, forwarded so Whisper can detect the container

        Returns:
            STTResult with transcription
        """
        if not audio:
            raise STTInvalidAudioError(
                message="Audio is empty",
                provider=self.PROVIDER_NAME,
            )

        start_time = time.perf_counter()

        # Prepare prompt from hints
        prompt = " ".join(hints) if hints else None

        # Create file-like object for API
        audio_file = io.BytesIO(audio)
        audio_file.name = self._upload_name(filename)

        try:
            # Use verbose_json for word-level timestamps
            kwargs = {
                "model": "whisper-1",
                "file": audio_file,
                "response_format": "verbose_json",
                "timestamp_granularities": ["word"],
            }
            if language:
                kwargs["language"] = language
            if prompt:
                kwargs["prompt"] = prompt
            response = await self.client.audio.transcriptions.create(**kwargs)

        except BadRequestError as e:
            if "Invalid file format" in str(e):
                raise STTInvalidAudioError(
                    message=f"Invalid audio format. Supported: {self.SUPPORTED_FORMATS}",
                    provider=self.PROVIDER_NAME,
                ) from e
            raise self._translate_error(e) from e

        except APIError as e:
            raise self._translate_error(e) from e

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        # Parse word-level data if available
        words: list[STTWord] = []
        if getattr(response, "words", None):
            for w in response.words:
                words.append(
                    STTWord(
                        word=w.word,
                        start=w.start,
                        end=w.end,
                        confidence=1.0,  # Whisper doesn't provide per-word confidence
                    )
                )

        return STTResult(
            text=(response.text or "").strip(),
            confidence=self._estimate_confidence(response),
            words=words,
            language=language or getattr(response, "language", None) or "",
            latency_ms=latency_ms,
        )

    def _upload_name(self, filename: Optional[str]) -> str:
        """Pick a file name whose extension Whisper accepts."""
        if filename and "." in filename:
            ext = filename.rsplit(".", 1)[1].lower()
            if ext in self.SUPPORTED_FORMATS:
                return f"audio.{ext}"
        return self.DEFAULT_FILENAME

    def _estimate_confidence(self, response) -> float:
        """Estimate confidence score from Whisper response.

        Whisper doesn't provide confidence directly, so we use heuristics:
        - Check if no_speech_prob is available
        - Default to high confidence for successful transcriptions
        """
        segments = getattr(response, "segments", None)
        if segments:
            # Average no_speech_prob across segments (lower is better)
            no_speech_probs = [
                s.no_speech_prob
                for s in segments
                if getattr(s, "no_speech_prob", None) is not None
            ]
            if no_speech_probs:
                avg_no_speech = sum(no_speech_probs) / len(no_speech_probs)
                return max(0.0, min(1.0, 1.0 - avg_no_speech))

        # Default confidence for successful transcription
        return 0.85
