"""Base STT Adapter interface and data classes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from voicechat.adapters.errors import (
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)


@dataclass
class STTWord:
    """Individual word with timing and confidence."""

    word: str
    start: float  # seconds
    end: float  # seconds
    confidence: float


@dataclass
class STTResult:
    """Result from STT transcription."""

    text: str
    confidence: float
    words: list[STTWord] = field(default_factory=list)
    language: str = "en"
    latency_ms: int = 0


class STTAdapter(ABC):
    """Abstract base class for Speech-to-Text adapters.

    All STT providers must implement this interface.
    """

    @abstractmethod
    async def transcribe(
        self,
        audio: bytes,
        language: str = "en",
        hints: Optional[list[str]] = None,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> STTResult:
        """Transcribe audio to text.

        Args:
            audio: Audio data as bytes (WAV, MP3, WebM or other supported format)
            language: ISO-639-1 language code
            hints: Optional list of words/phrases to improve recognition
            filename: Upload file name; its extension tells the provider the container
            content_type: MIME type reported by the client

        Returns:
            STTResult with transcribed text, confidence, and word-level details

        Raises:
            STTError: If transcription fails
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the name of this STT provider."""
        pass


class STTError(ProviderError):
    """Base exception for STT errors."""

    pass


class STTTimeoutError(STTError, ProviderTimeoutError):
    """Raised when STT request times out."""

    pass


class STTInvalidAudioError(STTError):
    """Raised when audio format is invalid."""

    pass


class STTRateLimitError(STTError, ProviderRateLimitError):
    """Raised when rate limit is exceeded."""

    pass
