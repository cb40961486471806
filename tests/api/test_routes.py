"""Route tests through FastAPI's TestClient with provider doubles."""

import base64

import pytest
from fastapi.testclient import TestClient

from voicechat.adapters.llm.base import LLMError, LLMRateLimitError
from voicechat.adapters.stt.base import STTInvalidAudioError, STTResult, STTTimeoutError
from voicechat.adapters.stt.openai_adapter import OpenAISTTAdapter
from voicechat.adapters.tts.base import TTSError, TTSTextTooLongError
from voicechat.api.dependencies import get_chat_service
from voicechat.api.main import app
from voicechat.services.chat import ChatService

FAKE_WEBM = b"\x1a\x45\xdf\xa3" + b"\x00" * 2048


@pytest.fixture
def client(service):
    app.dependency_overrides[get_chat_service] = lambda: service
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def audio_files(data=FAKE_WEBM, content_type="audio/webm"):
    return {"audio": ("recording.webm", data, content_type)}


class TestSystemRoutes:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert {"llm_provider", "stt_provider", "tts_provider"} <= set(body)

    def test_browser_client_served(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "/voice-chat" in response.text

    def test_cors_allows_any_origin(self, client):
        response = client.post(
            "/chat",
            json={"prompt": "Hi"},
            headers={"Origin": "http://localhost:5173"},
        )

        assert response.headers["access-control-allow-origin"] == "*"


class TestChatRoutes:

    def test_chat_returns_text_only(self, client, llm):
        response = client.post("/chat", json={"prompt": "Hello"})

        assert response.status_code == 200
        assert response.json() == {"text": "Hello from the model"}
        llm.generate.assert_awaited_once()

    def test_chat_with_speak_returns_base64_audio(self, client, tts):
        response = client.post("/chat", json={"prompt": "Hello", "speak": True})

        body = response.json()
        assert response.status_code == 200
        assert base64.b64decode(body["audio"]) == b"ID3fake-mp3"
        assert body["audio_format"] == "mp3"
        assert body["mime_type"] == "audio/mpeg"

    def test_chat_speech_route(self, client, tts):
        response = client.post("/chat/speech", json={"prompt": "Hello", "voice": "en-US-GuyNeural"})

        assert response.status_code == 200
        assert response.json()["audio"]
        assert tts.synthesize.call_args.kwargs["voice"] == "en-US-GuyNeural"

    def test_blank_prompt_is_bad_request(self, client, llm):
        response = client.post("/chat", json={"prompt": "   "})

        assert response.status_code == 400
        assert response.json()["code"] == "E002"
        llm.generate.assert_not_called()

    def test_missing_prompt_is_validation_error(self, client):
        response = client.post("/chat", json={})

        assert response.status_code == 422

    def test_llm_failure_is_bad_gateway(self, client, llm):
        llm.generate.side_effect = LLMError(message="upstream exploded", provider="gemini")

        response = client.post("/chat", json={"prompt": "Hello"})

        body = response.json()
        assert response.status_code == 502
        assert body["code"] == "E004"
        assert body["message"] == "Failed to get response from Gemini"
        assert body["details"]["provider"] == "gemini"
        assert body["request_id"]

    def test_llm_rate_limit(self, client, llm):
        llm.generate.side_effect = LLMRateLimitError(message="quota", provider="gemini")

        response = client.post("/chat", json={"prompt": "Hello"})

        assert response.status_code == 429
        assert response.json()["code"] == "E006"

    def test_provider_rejecting_request_is_bad_gateway(self, client, llm):
        llm.generate.side_effect = LLMError(
            message="API key not valid", provider="gemini", details={"status_code": 400}
        )

        response = client.post("/chat", json={"prompt": "Hello"})

        assert response.status_code == 502
        assert response.json()["code"] == "E004"

    def test_reply_too_long_to_speak_is_bad_gateway(self, client, tts):
        tts.synthesize.side_effect = TTSTextTooLongError(
            message="Reply is 5000 characters, limit is 4096", provider="openai"
        )

        response = client.post("/chat", json={"prompt": "Hello", "speak": True})

        assert response.status_code == 502
        assert response.json()["code"] == "E004"

    def test_unexpected_error_is_internal(self, client, llm):
        llm.generate.side_effect = RuntimeError("bug")

        response = client.post("/chat", json={"prompt": "Hello"})

        assert response.status_code == 500
        assert response.json()["code"] == "E999"


class TestVoiceRoutes:

    def test_voice_chat(self, client, stt, llm, tts):
        response = client.post("/voice-chat", files=audio_files())

        body = response.json()
        assert response.status_code == 200
        assert body["transcript"] == "What time is it?"
        assert body["text"] == "Hello from the model"
        assert base64.b64decode(body["audio"]) == b"ID3fake-mp3"
        assert body["mime_type"] == "audio/mpeg"
        assert "stt_ms" in body["timings"]

    def test_voice_chat_without_speech_output(self, client, tts):
        response = client.post("/voice-chat", files=audio_files(), data={"speak": "false"})

        body = response.json()
        assert response.status_code == 200
        assert "audio" not in body
        tts.synthesize.assert_not_called()

    def test_voice_chat_rejects_non_audio(self, client, stt):
        response = client.post("/voice-chat", files=audio_files(content_type="text/plain"))

        assert response.status_code == 400
        assert response.json()["code"] == "E003"
        stt.transcribe.assert_not_called()

    def test_voice_chat_rejects_short_audio(self, client, stt):
        response = client.post("/voice-chat", files=audio_files(data=b"tiny"))

        assert response.status_code == 400
        assert response.json()["message"] == "Audio too short."

    def test_voice_chat_no_speech(self, client, stt, llm):
        stt.transcribe.return_value = STTResult(text="", confidence=0.0)

        response = client.post("/voice-chat", files=audio_files())

        assert response.status_code == 400
        assert response.json()["code"] == "E003"
        llm.generate.assert_not_called()

    def test_voice_chat_requires_file(self, client):
        response = client.post("/voice-chat", data={"speak": "true"})

        assert response.status_code == 422

    def test_voice_chat_stt_timeout(self, client, stt):
        stt.transcribe.side_effect = STTTimeoutError(message="Request timed out", provider="openai")

        response = client.post("/voice-chat", files=audio_files())

        body = response.json()
        assert response.status_code == 504
        assert body["code"] == "E005"
        assert body["message"] == "Failed to transcribe audio with OpenAI"

    def test_voice_chat_tts_failure(self, client, tts):
        tts.synthesize.side_effect = TTSError(message="No audio was received", provider="edge")

        response = client.post("/voice-chat", files=audio_files())

        assert response.status_code == 502
        assert response.json()["message"] == "Failed to synthesize speech with Edge TTS"

    def test_transcribe(self, client, stt):
        response = client.post("/transcribe", files=audio_files(), data={"language": "de"})

        assert response.status_code == 200
        assert response.json() == {
            "text": "What time is it?",
            "language": "en",
            "confidence": 0.9,
            "latency_ms": 30,
        }
        assert stt.transcribe.call_args.kwargs["language"] == "de"

    def test_transcribe_invalid_audio_from_provider(self, client, stt):
        stt.transcribe.side_effect = STTInvalidAudioError(message="bad format", provider="openai")

        response = client.post("/transcribe", files=audio_files())

        assert response.status_code == 400
        assert response.json()["code"] == "E003"

    def test_speak(self, client, tts):
        response = client.post("/speak", json={"text": "Good morning"})

        body = response.json()
        assert response.status_code == 200
        assert base64.b64decode(body["audio"]) == b"ID3fake-mp3"
        assert body["duration_ms"] == 1200
        assert body["audio_format"] == "mp3"

    def test_speak_blank_text(self, client, tts):
        response = client.post("/speak", json={"text": ""})

        assert response.status_code == 400
        tts.synthesize.assert_not_called()

    def test_voice_chat_with_odd_filename(self, client, stt):
        files = {"audio": ("clip.we/bm", FAKE_WEBM, "audio/webm")}

        response = client.post("/voice-chat", files=files)

        assert response.status_code == 200
        stt.transcribe.assert_awaited_once()


def test_voice_chat_without_openai_key_is_bad_gateway(llm, tts, settings):
    stt = OpenAISTTAdapter()
    stt.api_key = ""
    service = ChatService(llm=llm, stt=stt, tts=tts, settings=settings)
    app.dependency_overrides[get_chat_service] = lambda: service

    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.post("/voice-chat", files=audio_files())
    finally:
        app.dependency_overrides.clear()

    body = response.json()
    assert response.status_code == 502
    assert body["code"] == "E004"
    assert body["message"] == "Failed to transcribe audio with OpenAI"
    assert "OPENAI_API_KEY" in body["details"]["error"]
    llm.generate.assert_not_called()
