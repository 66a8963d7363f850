"""Hook configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TelegramHookSettings(BaseSettings):
    """Telegram hook configuration, read from TELEGRAM_HOOK_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="TELEGRAM_HOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(description="Application name shown in messages")
    username: str = Field(description="Bot id, the part of the token before the colon")
    token: SecretStr = Field(description="Bot secret, the part of the token after the colon")
    chat_id: str = Field(description="Target chat or channel id")
    api_base: str = Field(default="https://api.telegram.org", description="Bot API host")
    check_status: bool = Field(default=True, description="Treat HTTP error statuses as failures")
    log_level: str = Field(default="INFO", description="Root logger level")

    @field_validator("app_name", "username", "chat_id", mode="after")
    @classmethod
    def ensure_not_blank(cls, v: str) -> str:
        """Reject empty identity fields."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("token", mode="after")
    @classmethod
    def ensure_token(cls, v: SecretStr) -> SecretStr:
        """Reject an empty bot secret."""
        if not v.get_secret_value().strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case and check the log level name."""
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return v


@lru_cache
def get_settings() -> TelegramHookSettings:
    """Get cached hook configuration."""
    return TelegramHookSettings()
