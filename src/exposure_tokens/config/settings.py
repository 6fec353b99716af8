"""
Runtime settings for exposure token generation

Only the operational knobs live here. The hashing parameters, sampling
radius, geohash precision and time-window interval are part of the token
format and are deliberately absent.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from EXPOSURE_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="EXPOSURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service identification
    service_name: str = Field(
        default="exposure-tokens",
        description="Name of the service for logging",
    )
    environment: str = Field(
        default="development",
        description="Deployment environment",
    )

    # Logging configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "text"] = Field(
        default="json", description="Log format: json or text"
    )

    # Batch hashing
    hash_workers: Optional[int] = Field(
        default=None,
        ge=1,
        description="Worker processes for token hashing (default: one per core)",
    )

    # Development settings
    debug: bool = Field(
        default=False, description="Log at DEBUG regardless of log_level"
    )


settings = Settings()
