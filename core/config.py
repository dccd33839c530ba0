"""
Application configuration using Pydantic Settings
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Export settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Linear API
    LINEAR_API_KEY: Optional[str] = None
    LINEAR_API_URL: str = "https://api.linear.app/graphql"
    PAGE_SIZE: int = Field(default=150, ge=1, le=250)
    REQUEST_TIMEOUT: float = Field(default=30.0, gt=0)

    # Destination store
    DATABASE_PATH: str = "./issues.db"
    DUPLICATE_ID_POLICY: Literal["fail", "replace"] = "fail"

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper


def load_settings(**overrides) -> Settings:
    """
    Build settings from the environment, .env file and explicit overrides.

    Overrides whose value is None are ignored so CLI flags that were not
    given fall back to the environment.
    """
    return Settings(**{k: v for k, v in overrides.items() if v is not None})
