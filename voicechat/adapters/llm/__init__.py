# LLM Adapters
from voicechat.adapters.llm.base import LLMAdapter, LLMResult

__all__ = [
    "LLMAdapter",
    "LLMResult",
]

# Lazy imports for adapters with external dependencies
def get_gemini_adapter():
    from voicechat.adapters.llm.gemini_adapter import GeminiLLMAdapter
    return GeminiLLMAdapter

def get_openai_adapter():
    from voicechat.adapters.llm.openai_adapter import OpenAILLMAdapter
    return OpenAILLMAdapter
