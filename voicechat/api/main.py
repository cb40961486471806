"""FastAPI application entry point."""

import logging
import uuid
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from voicechat import __version__
from voicechat.adapters.errors import (
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from voicechat.adapters.llm.base import LLMError
from voicechat.adapters.stt.base import STTError, STTInvalidAudioError
from voicechat.adapters.tts.base import TTSError
from voicechat.api.routers import chat, voice
from voicechat.api.schemas import ErrorResponse, HealthResponse
from voicechat.config import get_settings
from voicechat.services.chat import InvalidPromptError, NoSpeechError
from voicechat.services.uploads import InvalidUploadError

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

PROVIDER_DISPLAY_NAMES = {
    "gemini": "Gemini",
    "openai": "OpenAI",
    "edge": "Edge TTS",
}


def configure_logging(level: str) -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[dict] = None,
    request_id: Optional[str] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            code=code,
            message=message,
            details=details,
            request_id=request_id or str(uuid.uuid4()),
        ).model_dump(),
    )


def describe_provider_error(exc: ProviderError) -> tuple[int, str, str]:
    """Map a provider failure to (HTTP status, error code, client message)."""
    name = PROVIDER_DISPLAY_NAMES.get(exc.provider, exc.provider)

    if isinstance(exc, LLMError):
        message = f"Failed to get response from {name}"
    elif isinstance(exc, STTError):
        message = f"Failed to transcribe audio with {name}"
    elif isinstance(exc, TTSError):
        message = f"Failed to synthesize speech with {name}"
    else:
        message = f"{name} request failed"

    if isinstance(exc, STTInvalidAudioError):
        return status.HTTP_400_BAD_REQUEST, "E003", message
    if isinstance(exc, ProviderRateLimitError):
        return status.HTTP_429_TOO_MANY_REQUESTS, "E006", message
    if isinstance(exc, ProviderTimeoutError):
        return status.HTTP_504_GATEWAY_TIMEOUT, "E005", message
    return status.HTTP_502_BAD_GATEWAY, "E004", message


def custom_openapi(app: FastAPI):
    """Generate custom OpenAPI schema with detailed documentation."""
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description="""
## Voice Chat Relay API

Relays browser chat and voice input to a generative-language API and
optionally speaks the reply.

### Endpoints:
- **Text chat**: `POST /chat`
- **Chat with speech**: `POST /chat/speech`
- **Voice chat**: `POST /voice-chat` (record -> transcribe -> reply -> speak)
- **Tools**: `POST /transcribe`, `POST /speak`

Audio in responses is base64-encoded MP3.

### Errors:
| Code | Description |
|-----|----------|
| E002 | Invalid prompt - empty or too long |
| E003 | Invalid audio - wrong format, empty, too short or no speech |
| E004 | Provider error - upstream API failed |
| E005 | Provider timeout |
| E006 | Rate limited by provider |
| E999 | Internal error |
        """,
        routes=app.routes,
        tags=[
            {"name": "chat", "description": "Text chat relayed to the language model"},
            {"name": "voice", "description": "Speech recognition and synthesis"},
            {"name": "system", "description": "Service status"},
        ],
    )

    app.openapi_schema = openapi_schema
    return app.openapi_schema


def register_exception_handlers(app: FastAPI) -> None:
    """Translate service and provider errors into ErrorResponse bodies."""

    @app.exception_handler(ProviderError)
    async def provider_exception_handler(request: Request, exc: ProviderError):
        status_code, code, message = describe_provider_error(exc)
        request_id = str(uuid.uuid4())
        logger.error(
            "%s API error on %s [%s]: %s",
            exc.provider,
            request.url.path,
            request_id,
            exc.message,
        )
        return error_response(
            status_code,
            code,
            message,
            details={"provider": exc.provider, "error": exc.message},
            request_id=request_id,
        )

    @app.exception_handler(InvalidPromptError)
    async def invalid_prompt_handler(request: Request, exc: InvalidPromptError):
        return error_response(status.HTTP_400_BAD_REQUEST, "E002", str(exc))

    @app.exception_handler(InvalidUploadError)
    async def invalid_upload_handler(request: Request, exc: InvalidUploadError):
        return error_response(status.HTTP_400_BAD_REQUEST, "E003", str(exc))

    @app.exception_handler(NoSpeechError)
    async def no_speech_handler(request: Request, exc: NoSpeechError):
        return error_response(status.HTTP_400_BAD_REQUEST, "E003", str(exc))

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        request_id = str(uuid.uuid4())
        logger.exception("Unhandled error on %s [%s]", request.url.path, request_id)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "E999",
            "Internal server error",
            request_id=request_id,
        )


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Chat and voice relay to cloud AI providers",
        version=__version__,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(chat.router)
    app.include_router(voice.router)

    register_exception_handlers(app)

    # Custom OpenAPI schema
    app.openapi = lambda: custom_openapi(app)

    # Health check
    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health_check():
        """Report service status and the configured providers."""
        return HealthResponse(
            status="healthy",
            llm_provider=settings.llm_provider,
            stt_provider=settings.stt_provider,
            tts_provider=settings.tts_provider,
        )

    # Browser client; mounted last so API routes take precedence
    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")

    logger.info(
        "%s ready (llm=%s, stt=%s, tts=%s)",
        settings.app_name,
        settings.llm_provider,
        settings.stt_provider,
        settings.tts_provider,
    )
    return app


app = create_app()
