"""Application configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SANCTIONED_ADDRESSES: tuple[str, ...] = (
    "0x1234567890123456789012345678901234567890",
    "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # AI
    xai_api_key: str = ""
    xai_model: str = "grok-2-latest"
    ai_enabled: bool = True
    ai_temperature: float = Field(default=0.1, ge=0.0, le=1.0)
    ai_max_tokens: int = Field(default=1000, gt=0)
    ai_timeout_seconds: float = Field(default=20.0, gt=0)

    # LangSmith
    langsmith_api_key: str = ""
    langsmith_project: str = "ura-validator"
    langsmith_tracing: bool = False
    langsmith_endpoint: str = "https://api.smith.langchain.com"

    # Compliance screening
    sanctioned_addresses: list[str] = Field(default_factory=lambda: list(DEFAULT_SANCTIONED_ADDRESSES))

    # Attestation
    attestation_base_url: str = ""
    attestation_api_key: str = ""
    attestation_timeout_seconds: float = 8.0

    # Server
    validator_name: str = "ura-validator-v1"
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    @property
    def ai_configured(self) -> bool:
        return self.ai_enabled and self.xai_api_key.strip() != ""


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
