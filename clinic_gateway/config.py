from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    openai_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "APP_OPENAI_API_KEY"),
        description="Credential for the OpenAI API.",
    )
    host: str = Field(default="0.0.0.0", description="Interface the server binds to.")
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("PORT", "APP_PORT"),
        description="Port the server listens on.",
    )
    chat_model: str = Field(
        default="gpt-3.5-turbo",
        description="Chat-completion model used for translation and summaries.",
    )
    transcription_model: str = Field(
        default="whisper-1", description="Speech-to-text model for uploads."
    )
    translation_temperature: float = Field(
        default=0.3, description="Sampling temperature for translations."
    )
    summary_temperature: float = Field(
        default=0.5, description="Sampling temperature for summaries."
    )
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Deadline in seconds applied to every upstream call.",
    )
    max_retries: int = Field(
        default=2, ge=0, description="Retries performed by the OpenAI client itself."
    )
    upload_dir: Path = Field(
        default=Path("uploads"),
        description="Directory where audio uploads are staged.",
    )
    cors_origins: List[str] = Field(
        default=["*"], description="Origins allowed by the CORS middleware."
    )
    log_level: str = Field(default="INFO", description="Root logging level.")

    class Config:
        env_prefix = "APP_"
        env_file = ".env"
        case_sensitive = False
        populate_by_name = True


@lru_cache
def get_settings() -> Settings:
    """Expose cached settings instance for use across the app."""
    return Settings()
