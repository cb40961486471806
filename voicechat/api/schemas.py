"""Pydantic schemas for API requests and responses."""

from typing import Optional

from pydantic import BaseModel, Field


# Chat schemas
class ChatRequest(BaseModel):
    """Text chat request."""
    prompt: str
    speak: bool = False
    voice: Optional[str] = None


class SpeechChatRequest(BaseModel):
    """Text chat request whose reply is always spoken."""
    prompt: str
    voice: Optional[str] = None


class AudioPayload(BaseModel):
    """Base64 audio attached to a response."""
    audio: Optional[str] = Field(default=None, description="Base64-encoded audio")
    audio_format: Optional[str] = None
    mime_type: Optional[str] = None


class ChatResponse(AudioPayload):
    """Chat reply; audio fields are set only when speech was requested."""
    text: str


class VoiceChatResponse(AudioPayload):
    """Spoken chat reply."""
    transcript: str
    text: str
    timings: dict[str, int] = {}


# Speech tool schemas
class TranscribeResponse(BaseModel):
    """Transcription response."""
    text: str
    language: str
    confidence: float
    latency_ms: int


class SpeakRequest(BaseModel):
    """Text-to-speech request."""
    text: str
    voice: Optional[str] = None
    language: Optional[str] = None


class SpeakResponse(BaseModel):
    """Text-to-speech response."""
    audio: str = Field(..., description="Base64-encoded audio")
    audio_format: str
    mime_type: str
    duration_ms: int


# System schemas
class HealthResponse(BaseModel):
    """Service health and configured providers."""
    status: str
    llm_provider: str
    stt_provider: str
    tts_provider: str


# Error schemas
class ErrorResponse(BaseModel):
    """API error response."""
    code: str
    message: str
    details: Optional[dict] = None
    request_id: Optional[str] = None
