from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Daemon
    cnd_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the cnd REST API",
        validation_alias=AliasChoices("cnd_url", "CND_URL", "cnd_http_api"),
    )
    request_timeout_seconds: float = Field(default=10.0, description="HTTP request timeout")

    # Polling (test-environment expectations, not production SLAs)
    poll_interval_ms: int = Field(default=200, ge=1, description="Delay between swap state polls")
    poll_timeout_ms: int = Field(default=5000, ge=0, description="Total budget for a single poll loop")

    log_level: str = Field(default="INFO", description="Logging level")


# Global settings instance
settings = Settings()
