"""Chat relay service - forwards prompts and recordings to the AI providers.

Every operation is a short linear sequence of provider calls:
text chat is LLM only, speech chat is LLM then TTS, and voice chat is
upload -> transcribe -> generate -> synthesize -> respond -> cleanup.
"""

import base64
import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from voicechat.adapters import llm as llm_adapters
from voicechat.adapters import stt as stt_adapters
from voicechat.adapters import tts as tts_adapters
from voicechat.adapters.llm.base import LLMAdapter, LLMResult
from voicechat.adapters.stt.base import STTAdapter, STTResult
from voicechat.adapters.tts.base import TTSAdapter, TTSResult
from voicechat.config import Settings, get_settings
from voicechat.services.uploads import AudioUpload, UploadStore

logger = logging.getLogger(__name__)

MIME_TYPES = {
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
}


class InvalidPromptError(ValueError):
    """Raised when a prompt is blank or too long."""

    pass


class NoSpeechError(ValueError):
    """Raised when a recording transcribes to nothing."""

    pass


@dataclass
class SpeechAudio:
    """Synthesized reply audio."""

    data: bytes
    format: str
    duration_ms: int = 0

    @property
    def mime_type(self) -> str:
        return MIME_TYPES.get(self.format, "application/octet-stream")

    def to_base64(self) -> str:
        """Encode the audio for a JSON response body."""
        return base64.b64encode(self.data).decode("ascii")

    @classmethod
    def from_result(cls, result: TTSResult) -> "SpeechAudio":
        return cls(data=result.audio, format=result.format, duration_ms=result.duration_ms)


@dataclass
class ChatReply:
    """Result of a text chat turn."""

    prompt: str
    text: str
    audio: Optional[SpeechAudio] = None


@dataclass
class VoiceChatReply:
    """Result of a spoken chat turn."""

    transcript: str
    text: str
    audio: Optional[SpeechAudio] = None
    timings: dict[str, int] = field(default_factory=dict)


class AdapterFactory:
    """Factory for creating LLM/STT/TTS adapters based on provider name."""

    @staticmethod
    def get_llm_adapter(provider: str) -> LLMAdapter:
        """Get LLM adapter for provider.

        Args:
            provider: Provider name

        Returns:
            LLM adapter instance
        """
        if provider == "gemini":
            return llm_adapters.get_gemini_adapter()()
        elif provider == "openai":
            return llm_adapters.get_openai_adapter()()
        else:
            raise ValueError(f"Unknown LLM provider: {provider}")

    @staticmethod
    def get_stt_adapter(provider: str) -> STTAdapter:
        """Get STT adapter for provider."""
        if provider == "openai":
            return stt_adapters.get_openai_adapter()()
        elif provider == "gemini":
            return stt_adapters.get_gemini_adapter()()
        else:
            raise ValueError(f"Unknown STT provider: {provider}")

    @staticmethod
    def get_tts_adapter(provider: str) -> TTSAdapter:
        """Get TTS adapter for provider."""
        if provider == "edge":
            return tts_adapters.get_edge_adapter()()
        elif provider == "openai":
            return tts_adapters.get_openai_adapter()()
        else:
            raise ValueError(f"Unknown TTS provider: {provider}")


def _preview(text: str, limit: int = 200) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


class ChatService:
    """Relays chat and voice requests to the configured providers.

    Adapters are created on first use so a text-only deployment never
    needs STT or TTS credentials.
    """

    def __init__(
        self,
        llm: Optional[LLMAdapter] = None,
        stt: Optional[STTAdapter] = None,
        tts: Optional[TTSAdapter] = None,
        uploads: Optional[UploadStore] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self._llm = llm
        self._stt = stt
        self._tts = tts
        self.uploads = uploads or UploadStore(self.settings.upload_dir)

    @property
    def llm(self) -> LLMAdapter:
        """Get LLM adapter (lazy init)."""
        if self._llm is None:
            self._llm = AdapterFactory.get_llm_adapter(self.settings.llm_provider)
        return self._llm

    @property
    def stt(self) -> STTAdapter:
        """Get STT adapter (lazy init)."""
        if self._stt is None:
            self._stt = AdapterFactory.get_stt_adapter(self.settings.stt_provider)
        return self._stt

    @property
    def tts(self) -> TTSAdapter:
        """Get TTS adapter (lazy init)."""
        if self._tts is None:
            self._tts = AdapterFactory.get_tts_adapter(self.settings.tts_provider)
        return self._tts

    def clean_prompt(self, prompt: Optional[str]) -> str:
        """Strip a prompt and enforce the length bounds."""
        cleaned = (prompt or "").strip()
        if not cleaned:
            raise InvalidPromptError("Prompt must not be empty.")
        if len(cleaned) > self.settings.max_prompt_chars:
            raise InvalidPromptError(
                f"Prompt exceeds {self.settings.max_prompt_chars} characters."
            )
        return cleaned

    async def _generate(self, prompt: str) -> LLMResult:
        result = await self.llm.generate(
            prompt,
            system_prompt=self.settings.system_prompt or None,
        )
        logger.info(
            "%s replied with %d characters in %d ms",
            self.llm.get_provider_name(),
            len(result.text),
            result.latency_ms,
        )
        return result

    async def reply(self, prompt: str) -> ChatReply:
        """Send a prompt to the language model and return its reply."""
        prompt = self.clean_prompt(prompt)
        logger.info("Received prompt: %s", _preview(prompt))

        result = await self._generate(prompt)
        return ChatReply(prompt=prompt, text=result.text)

    async def speak(
        self,
        text: str,
        voice: Optional[str] = None,
        language: Optional[str] = None,
    ) -> SpeechAudio:
        """Synthesize ``text`` to audio."""
        text = (text or "").strip()
        if not text:
            raise InvalidPromptError("Text must not be empty.")

        result = await self.tts.synthesize(
            text,
            language=language or self.settings.language,
            voice=voice,
        )
        logger.info(
            "%s synthesized %d bytes in %d ms",
            self.tts.get_provider_name(),
            len(result.audio),
            result.latency_ms,
        )
        return SpeechAudio.from_result(result)

    async def reply_with_speech(
        self,
        prompt: str,
        voice: Optional[str] = None,
    ) -> ChatReply:
        """Reply to a prompt and synthesize the reply."""
        chat_reply = await self.reply(prompt)
        chat_reply.audio = await self.speak(chat_reply.text, voice=voice)
        return chat_reply

    async def transcribe(
        self,
        upload: AudioUpload,
        language: Optional[str] = None,
    ) -> STTResult:
        """Transcribe an uploaded recording."""
        logger.info(
            "Received audio: %s (%s, %d bytes)",
            upload.filename,
            upload.content_type,
            len(upload.data),
        )
        async with self.uploads.save(upload.data, upload.filename) as path:
            result = await self.stt.transcribe(
                path.read_bytes(),
                language=language or self.settings.language,
                filename=upload.filename or path.name,
                content_type=upload.content_type,
            )
        logger.info(
            "%s transcribed %d characters in %d ms",
            self.stt.get_provider_name(),
            len(result.text),
            result.latency_ms,
        )
        return result

    async def voice_chat(
        self,
        upload: AudioUpload,
        speak: bool = True,
        voice: Optional[str] = None,
        language: Optional[str] = None,
    ) -> VoiceChatReply:
        """Run the spoken-turn pipeline for one recording.

        Raises:
            NoSpeechError: If the transcript is blank.
        """
        timings: dict[str, int] = {}

        stt_result = await self.transcribe(upload, language=language)
        timings["stt_ms"] = stt_result.latency_ms
        transcript = stt_result.text.strip()
        if not transcript:
            raise NoSpeechError("No speech detected.")

        prompt = self.clean_prompt(transcript)
        logger.info("Transcribed prompt: %s", _preview(prompt))
        llm_result = await self._generate(prompt)
        timings["llm_ms"] = llm_result.latency_ms

        audio = None
        if speak:
            start_time = time.perf_counter()
            audio = await self.speak(llm_result.text, voice=voice, language=language)
            timings["tts_ms"] = int((time.perf_counter() - start_time) * 1000)

        return VoiceChatReply(
            transcript=transcript,
            text=llm_result.text,
            audio=audio,
            timings=timings,
        )
