"""
contacts_api/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, JWT secret, mail credentials, upload paths)
- Validates configuration on startup
- Exposes settings as a FastAPI dependency so services receive them explicitly
"""

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="contacts",
        description="MongoDB database name"
    )

    # Auth
    SECRET_KEY: str = Field(
        default="change-me-in-production",
        description="Secret key used to sign bearer tokens"
    )
    JWT_ALGORITHM: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=60,
        description="Bearer token lifetime in minutes"
    )

    # Mail (SendGrid v3 API)
    SENDGRID_API_KEY: Optional[str] = Field(
        default=None,
        description="SendGrid API key; verification links are only logged when unset"
    )
    SENDGRID_BASE_URL: str = Field(
        default="https://api.sendgrid.com",
        description="SendGrid API base URL"
    )
    MAIL_FROM: str = Field(
        default="noreply@example.com",
        description="Sender address for verification emails"
    )
    APP_URL: str = Field(
        default="http://localhost:8000",
        description="Public base URL used to build verification links"
    )

    # Uploads
    UPLOAD_DIR: str = Field(
        default="tmp",
        description="Directory for temporary uploads"
    )
    AVATARS_DIR: str = Field(
        default="public/avatars",
        description="Directory where avatars are stored and served from"
    )
    MAX_AVATAR_SIZE: int = Field(
        default=5 * 1024 * 1024,
        description="Largest accepted avatar upload in bytes"
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

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_secret_key(cls, v, info: ValidationInfo):
        """Ensure secret key is changed in production."""
        if info.data.get("ENVIRONMENT") == "production" and v == "change-me-in-production":
            raise ValueError("SECRET_KEY must be changed in production environment")
        return v

    @field_validator("ACCESS_TOKEN_EXPIRE_MINUTES")
    @classmethod
    def validate_token_lifetime(cls, v):
        if v <= 0:
            raise ValueError("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def mail_enabled(self) -> bool:
        return bool(self.SENDGRID_API_KEY)


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the active settings."""
    return settings


def validate_settings(config: Optional[Settings] = None):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    config = config or settings
    errors = []

    if not config.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    if not config.MONGODB_DB_NAME:
        errors.append("MONGODB_DB_NAME is required")

    if not config.AVATARS_DIR or not config.UPLOAD_DIR:
        errors.append("UPLOAD_DIR and AVATARS_DIR are required")

    # Production-specific validations
    if config.is_production:
        if not config.SENDGRID_API_KEY:
            errors.append("SENDGRID_API_KEY is required in production")
        if config.APP_URL.startswith("http://localhost"):
            errors.append("APP_URL must point to the public host in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
