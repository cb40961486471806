"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    app_name: str = "Voice Chat Relay"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: list[str] = ["*"]

    # Gemini
    gemini_api_key: str = ""

    # OpenAI
    openai_api_key: str = ""

    # Providers
    llm_provider: Literal["gemini", "openai"] = "gemini"
    llm_model: str = ""
    system_prompt: str = ""
    stt_provider: Literal["openai", "gemini"] = "openai"
    tts_provider: Literal["edge", "openai"] = "edge"
    tts_voice: str = ""
    language: str = "en"
    request_timeout_seconds: float = 30.0

    # Uploads
    upload_dir: str = "uploads"
    max_upload_bytes: int = 10 * 1024 * 1024
    min_audio_bytes: int = 500

    # Prompts
    max_prompt_chars: int = 8000


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
