"""Voice endpoints: spoken chat, transcription and synthesis."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from voicechat.api.dependencies import get_chat_service
from voicechat.api.schemas import (
    SpeakRequest,
    SpeakResponse,
    TranscribeResponse,
    VoiceChatResponse,
)
from voicechat.services.chat import ChatService
from voicechat.services.uploads import AudioUpload, validate_upload

router = APIRouter(tags=["voice"])


async def _read_upload(audio: UploadFile) -> AudioUpload:
    """Read and validate an uploaded recording."""
    data = await audio.read()
    validate_upload(data, audio.content_type)
    return AudioUpload(data=data, filename=audio.filename, content_type=audio.content_type)


@router.post("/voice-chat", response_model=VoiceChatResponse, response_model_exclude_none=True)
async def voice_chat(
    audio: Annotated[UploadFile, File(description="Recorded speech (WebM, WAV, MP3, OGG)")],
    speak: Annotated[bool, Form()] = True,
    voice: Annotated[Optional[str], Form()] = None,
    language: Annotated[Optional[str], Form()] = None,
    service: ChatService = Depends(get_chat_service),
):
    """Transcribe a recording, reply to it, and optionally speak the reply."""
    upload = await _read_upload(audio)
    reply = await service.voice_chat(upload, speak=speak, voice=voice, language=language)

    response = VoiceChatResponse(
        transcript=reply.transcript,
        text=reply.text,
        timings=reply.timings,
    )
    if reply.audio is not None:
        response.audio = reply.audio.to_base64()
        response.audio_format = reply.audio.format
        response.mime_type = reply.audio.mime_type
    return response


@router.post("/transcribe", response_model=TranscribeResponse)
async def transcribe(
    audio: Annotated[UploadFile, File(description="Recorded speech")],
    language: Annotated[Optional[str], Form()] = None,
    service: ChatService = Depends(get_chat_service),
):
    """Transcribe a recording without replying to it."""
    upload = await _read_upload(audio)
    result = await service.transcribe(upload, language=language)
    return TranscribeResponse(
        text=result.text,
        language=result.language,
        confidence=result.confidence,
        latency_ms=result.latency_ms,
    )


@router.post("/speak", response_model=SpeakResponse)
async def speak(
    request: SpeakRequest,
    service: ChatService = Depends(get_chat_service),
):
    """Synthesize text to speech."""
    audio = await service.speak(request.text, voice=request.voice, language=request.language)
    return SpeakResponse(
        audio=audio.to_base64(),
        audio_format=audio.format,
        mime_type=audio.mime_type,
        duration_ms=audio.duration_ms,
    )
