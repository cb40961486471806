"""Shared fixtures: settings pointed at a temp dir and provider doubles."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from voicechat.adapters.llm.base import LLMAdapter, LLMResult
from voicechat.adapters.stt.base import STTAdapter, STTResult
from voicechat.adapters.tts.base import TTSAdapter, TTSResult
from voicechat.config import Settings
from voicechat.services.chat import ChatService
from voicechat.services.uploads import AudioUpload, UploadStore


# Enough bytes to pass the minimum-length check
FAKE_WEBM = b"\x1a\x45\xdf\xa3" + b"\x00" * 2048


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        upload_dir=str(tmp_path / "uploads"),
        gemini_api_key="test-gemini-key",
        openai_api_key="test-openai-key",
        language="en",
        system_prompt="",
    )


@pytest.fixture
def llm() -> MagicMock:
    adapter = MagicMock(spec=LLMAdapter)
    adapter.generate = AsyncMock(
        return_value=LLMResult(text="Hello from the model", model="gemini-1.5-flash", latency_ms=12)
    )
    adapter.get_provider_name.return_value = "gemini"
    return adapter


@pytest.fixture
def stt() -> MagicMock:
    adapter = MagicMock(spec=STTAdapter)
    adapter.transcribe = AsyncMock(
        return_value=STTResult(text="What time is it?", confidence=0.9, language="en", latency_ms=30)
    )
    adapter.get_provider_name.return_value = "openai"
    return adapter


@pytest.fixture
def tts() -> MagicMock:
    adapter = MagicMock(spec=TTSAdapter)
    adapter.synthesize = AsyncMock(
        return_value=TTSResult(audio=b"ID3fake-mp3", format="mp3", duration_ms=1200, latency_ms=40)
    )
    adapter.get_provider_name.return_value = "edge"
    return adapter


@pytest.fixture
def service(llm, stt, tts, settings) -> ChatService:
    return ChatService(
        llm=llm,
        stt=stt,
        tts=tts,
        uploads=UploadStore(settings.upload_dir),
        settings=settings,
    )


@pytest.fixture
def upload() -> AudioUpload:
    return AudioUpload(data=FAKE_WEBM, filename="recording.webm", content_type="audio/webm")
