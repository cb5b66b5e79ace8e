"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./task_manager.db")

    # JWT
    jwt_secret: str = Field(default="change-me-in-production")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expiration_minutes: int = Field(default=60)

    # Mail
    mail_host: str = Field(default="localhost")
    mail_port: int = Field(default=25)
    mail_username: str | None = Field(default=None)
    mail_password: str | None = Field(default=None)
    mail_use_tls: bool = Field(default=False)
    mail_from: str = Field(default="no-reply@localhost")
    mail_timeout_seconds: float = Field(default=10.0)

    # Profile pictures
    upload_dir: str = Field(default="./uploads/profile_pictures")
    max_picture_bytes: int = Field(default=2 * 1024 * 1024)

    # Task constraints
    task_title_max_length: int = Field(default=255)
    task_description_max_length: int = Field(default=2000)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production":
            if self.jwt_secret == "change-me-in-production":  # noqa: S105
                raise ValueError("JWT_SECRET must be changed in production")
            if self.database_url.startswith("sqlite"):
                raise ValueError("DATABASE_URL should not use SQLite in production")
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
