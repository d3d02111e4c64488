"""Configuration management using Pydantic Settings."""

from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "sentrydsn"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # DSN extraction
    auth_header: str = "X-Sentry-Auth"  # Header carrying sentry_key / sentry_secret
    dsn_scheme: str = "https"  # Scheme of the assembled DSN

    @field_validator("dsn_scheme", mode="before")
    @classmethod
    def parse_dsn_scheme(cls, v: Any) -> str:
        """Normalise dsn_scheme and reject anything but http/https."""
        if v is None or v == "":
            return "https"
        scheme = str(v).strip().lower()
        if scheme not in ("http", "https"):
            raise ValueError(f"dsn_scheme must be http or https, got {v!r}")
        return scheme

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v: Any) -> str:
        """Upper-case log_level so it maps onto logging level names."""
        if v is None or v == "":
            return "INFO"
        return str(v).strip().upper()

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_nested_delimiter = "__"


# Global settings instance
settings = Settings()
