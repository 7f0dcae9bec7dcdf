"""
Configuration management for the trip planner.
Supports OpenAI-compatible LLM providers: Gemini, OpenAI, OpenRouter, Ollama.
"""
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # LLM Configuration
    llm_provider: Literal["gemini", "openai", "openrouter", "ollama", "mock"] = "gemini"
    llm_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("llm_api_key", "gemini_api_key"),
    )
    llm_base_url: str = ""
    llm_model: str = "gemini-1.5-flash"

    # LLM Parameters
    llm_temperature: float = 0.6
    llm_max_tokens: int = 4000
    llm_timeout_seconds: float = 60.0

    # Photo lookup
    photo_timeout_seconds: float = 8.0
    photo_user_agent: str = "TripPlanner/1.0 (+contact@example.com)"

    # Planning limits
    max_trip_days: int = 30

    # Server Configuration
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


DEFAULT_BASE_URLS = {
    "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
    "openai": "https://api.openai.com/v1",
    "openrouter": "https://openrouter.ai/api/v1",
    "ollama": "http://localhost:11434/v1",
}


def get_llm_config() -> dict:
    """Get LLM configuration based on provider."""
    return {
        "provider": settings.llm_provider,
        "api_key": settings.llm_api_key,
        "base_url": settings.llm_base_url or DEFAULT_BASE_URLS.get(settings.llm_provider, ""),
        "model": settings.llm_model,
        "temperature": settings.llm_temperature,
        "max_tokens": settings.llm_max_tokens,
        "timeout": settings.llm_timeout_seconds,
    }
