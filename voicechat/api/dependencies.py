"""FastAPI dependencies."""

from functools import lru_cache

from voicechat.services.chat import ChatService


@lru_cache
def get_chat_service() -> ChatService:
    """Get the process-wide chat service."""
    return ChatService()
