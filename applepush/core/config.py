"""Application configuration using Pydantic Settings"""
import logging
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables"""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None  # Rotating log files are written here when set

    # APNS
    APNS_BUNDLE_ID: Optional[str] = None  # Default apns-topic (e.g., com.example.app)
    APNS_ENFORCE_PAYLOAD_LIMIT: bool = True  # Reject payloads over 4KB (5KB for VoIP)

    @field_validator('LOG_LEVEL', mode='after')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate LOG_LEVEL is a standard logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v}")
        return level

    @property
    def apns_ready(self) -> bool:
        """Check if a default bundle ID is configured."""
        return bool(self.APNS_BUNDLE_ID and self.APNS_BUNDLE_ID.strip())

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
