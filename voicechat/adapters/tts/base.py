"""Base TTS Adapter interface and data classes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal, Optional

from voicechat.adapters.errors import (
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)

# Average speaking rate used to estimate clip length
WORDS_PER_MINUTE = 150


@dataclass
class TTSResult:
    """Result from TTS synthesis."""

    audio: bytes
    format: Literal["mp3", "wav", "ogg"]
    duration_ms: int
    latency_ms: int


def estimate_duration_ms(text: str, speed: float = 1.0) -> int:
    """Rough clip length for ``text`` read at ``speed``."""
    word_count = len(text.split())
    return int((word_count / WORDS_PER_MINUTE) * 60 * 1000 / speed)


class TTSAdapter(ABC):
    """Abstract base class for Text-to-Speech adapters.

    All TTS providers must implement this interface.
    """

    @abstractmethod
    async def synthesize(
        self,
        text: str,
        language: str = "en",
        voice: Optional[str] = None,
        speed: float = 1.0,
    ) -> TTSResult:
        """Synthesize text to speech.

        Args:
            text: Text to synthesize
            language: ISO-639-1 language code, used to pick a default voice
            voice: Optional voice identifier
            speed: Speech speed multiplier (0.5 to 2.0)

        Returns:
            TTSResult with audio data and metadata

        Raises:
            TTSError: If synthesis fails
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the name of this TTS provider."""
        pass


class TTSError(ProviderError):
    """Base exception for TTS errors."""

    pass


class TTSTimeoutError(TTSError, ProviderTimeoutError):
    """Raised when TTS request times out."""

    pass


class TTSTextTooLongError(TTSError):
    """Raised when text exceeds maximum length."""

    pass


class TTSRateLimitError(TTSError, ProviderRateLimitError):
    """Raised when rate limit is exceeded."""

    pass
