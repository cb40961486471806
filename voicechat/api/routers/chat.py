"""Text chat endpoints."""

from fastapi import APIRouter, Depends

from voicechat.api.dependencies import get_chat_service
from voicechat.api.schemas import ChatRequest, ChatResponse, SpeechChatRequest
from voicechat.services.chat import ChatReply, ChatService

router = APIRouter(tags=["chat"])


def _to_response(reply: ChatReply) -> ChatResponse:
    if reply.audio is None:
        return ChatResponse(text=reply.text)
    return ChatResponse(
        text=reply.text,
        audio=reply.audio.to_base64(),
        audio_format=reply.audio.format,
        mime_type=reply.audio.mime_type,
    )


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat(
    request: ChatRequest,
    service: ChatService = Depends(get_chat_service),
):
    """Relay a prompt to the language model.

    With ``speak`` set the reply is also synthesized and returned as base64.
    """
    if request.speak:
        reply = await service.reply_with_speech(request.prompt, voice=request.voice)
    else:
        reply = await service.reply(request.prompt)
    return _to_response(reply)


@router.post("/chat/speech", response_model=ChatResponse)
async def chat_with_speech(
    request: SpeechChatRequest,
    service: ChatService = Depends(get_chat_service),
):
    """Relay a prompt and return the reply as text and audio."""
    reply = await service.reply_with_speech(request.prompt, voice=request.voice)
    return _to_response(reply)
