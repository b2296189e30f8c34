from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="LINKRANK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Rank Configuration
    damping_factor: float = Field(default=0.85, gt=0.0, lt=1.0)
    rank_threshold: float = Field(default=0.0001, gt=0.0)
    max_propagation_steps: int = Field(default=100_000, ge=0)

    # Logging Configuration
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()


settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
