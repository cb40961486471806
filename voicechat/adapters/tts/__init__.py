# TTS Adapters
from voicechat.adapters.tts.base import TTSAdapter, TTSResult

__all__ = [
    "TTSAdapter",
    "TTSResult",
]

# Lazy imports for adapters with external dependencies
def get_openai_adapter():
    from voicechat.adapters.tts.openai_adapter import OpenAITTSAdapter
    return OpenAITTSAdapter

def get_edge_adapter():
    from voicechat.adapters.tts.edge_adapter import EdgeTTSAdapter
    return EdgeTTSAdapter
