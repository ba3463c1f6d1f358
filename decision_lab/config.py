# decision_lab/config.py
"""Configuration management using Pydantic Settings."""
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ProviderName = Literal["anthropic", "openai", "none"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Make-Buy-Partner Decision Lab"
    app_version: str = "1.0.0"
    debug: bool = False

    # AI provider ("none" disables it; analysis and feedback fall back to local rules)
    ai_provider: ProviderName = "anthropic"
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"
    openai_model: str = "gpt-4o"
    ai_max_tokens: int = 4096
    ai_timeout_seconds: float = 60.0

    # HTTP surface
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    # When set, every request except the health check must send it as x-api-key
    api_key: str = ""

    # Content extraction limits
    max_upload_bytes: int = 10 * 1024 * 1024  # 10MB
    max_extracted_chars: int = 50_000
    min_extracted_chars: int = 100
    fetch_timeout_seconds: float = 15.0

    def ai_config(self) -> "AIConfig":
        """Resolve the provider choice into the explicit config the AI client takes."""
        if self.ai_provider == "openai":
            return AIConfig("openai", self.openai_api_key, self.openai_model, self.ai_max_tokens, self.ai_timeout_seconds)
        if self.ai_provider == "anthropic":
            return AIConfig("anthropic", self.anthropic_api_key, self.anthropic_model, self.ai_max_tokens, self.ai_timeout_seconds)
        return AIConfig("none", "", "")


@dataclass(frozen=True)
class AIConfig:
    """Which AI backend to call and with what credentials."""

    provider: ProviderName
    api_key: str
    model: str
    max_tokens: int = 4096
    timeout: float = 60.0

    @property
    def enabled(self) -> bool:
        return self.provider != "none" and bool(self.api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
