# External Provider Adapters (LLM/STT/TTS)
from voicechat.adapters.errors import (
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from voicechat.adapters.llm import LLMAdapter, LLMResult
from voicechat.adapters.stt import STTAdapter, STTResult, STTWord
from voicechat.adapters.tts import TTSAdapter, TTSResult

__all__ = [
    "ProviderError",
    "ProviderRateLimitError",
    "ProviderTimeoutError",
    "LLMAdapter",
    "LLMResult",
    "STTAdapter",
    "STTResult",
    "STTWord",
    "TTSAdapter",
    "TTSResult",
]
