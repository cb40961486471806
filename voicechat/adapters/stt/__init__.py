# STT Adapters
from voicechat.adapters.stt.base import STTAdapter, STTResult, STTWord

__all__ = [
    "STTAdapter",
    "STTResult",
    "STTWord",
]

# Lazy imports for adapters with external dependencies
def get_openai_adapter():
    from voicechat.adapters.stt.openai_adapter import OpenAISTTAdapter
    return OpenAISTTAdapter

def get_gemini_adapter():
    from voicechat.adapters.stt.gemini_adapter import GeminiSTTAdapter
    return GeminiSTTAdapter
