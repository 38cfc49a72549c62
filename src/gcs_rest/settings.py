"""GCS REST client configuration settings.

Environment-based configuration for endpoints, timeouts and error handling.
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://www.googleapis.com"
DEFAULT_PUBLIC_BASE_URL = "https://storage.googleapis.com"


class GCSRestSettings(BaseSettings):
    """Configuration for the GCS REST client.

    All settings can be configured via environment variables or .env file.

    Attributes:
        api_base_url: Base URL of the JSON API (metadata, ACL, IAM, media GET)
        upload_base_url: Base URL of the upload endpoint
        public_base_url: Base URL used to build public object URIs
        default_content_type: Content type used when none can be guessed
        request_timeout: HTTP request timeout in seconds
        strict_errors: Raise on error statuses for insert and bucket get too
        log_level: Logging level used by the command line
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        alias="GCS_API_BASE_URL",
        description="Base URL of the Cloud Storage JSON API",
    )
    upload_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        alias="GCS_UPLOAD_BASE_URL",
        description="Base URL of the Cloud Storage upload endpoint",
    )
    public_base_url: str = Field(
        default=DEFAULT_PUBLIC_BASE_URL,
        alias="GCS_PUBLIC_BASE_URL",
        description="Base URL for publicly readable objects",
    )
    default_content_type: str = Field(
        default="application/json",
        alias="GCS_DEFAULT_CONTENT_TYPE",
        description="Content type used when it cannot be guessed from the path",
    )
    request_timeout: float = Field(
        default=30.0,
        alias="GCS_REQUEST_TIMEOUT",
        gt=0,
        description="HTTP request timeout in seconds",
    )
    strict_errors: bool = Field(
        default=False,
        alias="GCS_STRICT_ERRORS",
        description="Normalize error statuses for every operation",
    )
    log_level: str = Field(
        default="INFO",
        alias="GCS_LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @field_validator("api_base_url", "upload_base_url", "public_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and strip the trailing slash."""
        if not v.startswith(("http://", "https://")):
            msg = f"Invalid base URL: {v}. Must start with http:// or https://"
            raise ValueError(msg)
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            msg = f"Invalid log level: {v}"
            raise ValueError(msg)
        return level


_settings_instance: GCSRestSettings | None = None


def get_settings() -> GCSRestSettings:
    """Get default settings (singleton, reads from environment).

    Returns:
        GCSRestSettings instance.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = GCSRestSettings()
    return _settings_instance


def reset_settings() -> None:
    """Reset singleton (for testing)."""
    global _settings_instance
    _settings_instance = None
