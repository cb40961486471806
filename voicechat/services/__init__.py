# Relay services
from voicechat.services.chat import (
    AdapterFactory,
    ChatReply,
    ChatService,
    InvalidPromptError,
    NoSpeechError,
    SpeechAudio,
    VoiceChatReply,
)
from voicechat.services.uploads import AudioUpload, InvalidUploadError, UploadStore, validate_upload

__all__ = [
    "AdapterFactory",
    "AudioUpload",
    "ChatReply",
    "ChatService",
    "InvalidPromptError",
    "InvalidUploadError",
    "NoSpeechError",
    "SpeechAudio",
    "UploadStore",
    "VoiceChatReply",
    "validate_upload",
]
