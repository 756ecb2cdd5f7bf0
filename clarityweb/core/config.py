"""
clarityweb/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, session secret, extraction limits)
- Fails fast at import when the MongoDB URI is missing
- Environment-specific settings
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    MONGODB_URI and SESSION_SECRET have no defaults: instantiation fails without them.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "test", "production"] = "development"

    # MongoDB
    MONGODB_URI: str = Field(
        ...,
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="clarityweb",
        description="MongoDB database name"
    )
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = Field(
        default=5000,
        description="How long the driver waits to find a usable server"
    )

    # Session
    SESSION_SECRET: str = Field(
        ...,
        description="HMAC key used to sign and verify session tokens"
    )
    SESSION_MAX_AGE_SECONDS: int = Field(
        default=30 * 24 * 60 * 60,
        description="Lifetime of an issued session token"
    )

    # Content extraction
    EXTRACTION_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Timeout for fetching a page to extract"
    )
    EXTRACTION_MIN_CONTENT_LENGTH: int = Field(
        default=100,
        description="Extracted text shorter than this is treated as a failed extraction"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    @field_validator("MONGODB_URI")
    @classmethod
    def validate_mongodb_uri(cls, v: str) -> str:
        """Reject blank or non-mongo URIs."""
        if not v or not v.strip():
            raise ValueError("MONGODB_URI must not be empty")
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("MONGODB_URI must start with mongodb:// or mongodb+srv://")
        return v

    @field_validator("SESSION_SECRET")
    @classmethod
    def validate_session_secret(cls, v: str) -> str:
        """Session tokens are HMAC-signed; short keys are rejected."""
        if len(v) < 32:
            raise ValueError("SESSION_SECRET must be at least 32 characters")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


# Global settings instance
settings = Settings()


def validate_settings():
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    if not settings.MONGODB_DB_NAME:
        errors.append("MONGODB_DB_NAME is required")

    if settings.EXTRACTION_TIMEOUT_SECONDS <= 0:
        errors.append("EXTRACTION_TIMEOUT_SECONDS must be positive")

    if settings.SESSION_MAX_AGE_SECONDS <= 0:
        errors.append("SESSION_MAX_AGE_SECONDS must be positive")

    # Production-specific validations
    if settings.is_production and settings.DEBUG:
        errors.append("DEBUG must be disabled in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
