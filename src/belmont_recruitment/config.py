"""Configuration management for the Belmont recruitment service."""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Discord
    discord_token: SecretStr = Field(..., description="Bot token")
    guild_id: int = Field(..., description="Guild whose members may review applications")
    application_channel_id: int = Field(..., description="Channel where review cards are posted")
    staff_role_id: int = Field(..., description="Role allowed to approve or reject")
    tickets_channel_id: int = Field(..., description="Channel approved applicants are pointed to")

    # Security
    api_secret: Optional[SecretStr] = Field(None, description="Shared secret expected in X-API-Secret")

    # Server Configuration
    host: str = Field("0.0.0.0", description="Server host")
    port: int = Field(
        3001,
        validation_alias=AliasChoices("port", "bot_port"),
        description="Server port (PORT, falling back to BOT_PORT)"
    )
    allowed_origins: list[str] = Field(["*"], description="CORS allowed origins")
    max_body_bytes: int = Field(128 * 1024, description="Largest accepted request body")

    # Application Configuration
    debug: bool = Field(False, description="Enable debug mode")
    log_level: str = Field("INFO", description="Logging level")
    organization_name: str = Field("Família Belmont", description="Name shown on cards and messages")
    service_banner: str = Field("Belmont API OK", description="Plain-text liveness payload")
    single_decision_guard: bool = Field(
        False,
        description="Reject a second decision on a card already claimed by this process"
    )

    @field_validator("api_secret", mode="before")
    @classmethod
    def _blank_secret_disables(cls, value):
        if value is None:
            return None
        if isinstance(value, SecretStr):
            value = value.get_secret_value()
        return value or None

    @property
    def shared_secret(self) -> Optional[str]:
        """The configured shared secret, or None when the check is disabled."""
        return self.api_secret.get_secret_value() if self.api_secret else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once; raises pydantic.ValidationError when a required value is missing."""
    return Settings()
