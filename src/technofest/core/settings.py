"""Application settings and configuration.

This module defines all configuration options for the Technofest registration
API. Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MEBIBYTE = 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Technofest Registration", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    admin_username: str = Field(default="iamadmin", alias="ADMIN_USERNAME")
    admin_password_hash: str = Field(alias="ADMIN_PASSWORD_HASH")
    credential_strategy: Literal["session", "token"] = Field(
        default="session",
        alias="CREDENTIAL_STRATEGY",
    )
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    credential_ttl_hours: int = Field(default=24, alias="CREDENTIAL_TTL_HOURS")
    cookie_secure: bool = Field(default=False, alias="COOKIE_SECURE")
    trust_forwarded_headers: bool = Field(default=False, alias="TRUST_FORWARDED_HEADERS")

    # Login throttling (brute force protection)
    login_max_attempts: int = Field(default=5, alias="LOGIN_MAX_ATTEMPTS")
    login_window_minutes: int = Field(default=15, alias="LOGIN_WINDOW_MINUTES")
    login_lockout_minutes: int = Field(default=30, alias="LOGIN_LOCKOUT_MINUTES")

    # Database configuration
    database_url: str = Field(default="sqlite:///./technofest.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Registration intake
    register_rate_limit: int = Field(default=10, alias="REGISTER_RATE_LIMIT")
    register_rate_window_minutes: int = Field(default=15, alias="REGISTER_RATE_WINDOW_MINUTES")
    max_upload_bytes: int = Field(default=10 * MEBIBYTE, alias="MAX_UPLOAD_BYTES")
    max_total_upload_bytes: int = Field(default=20 * MEBIBYTE, alias="MAX_TOTAL_UPLOAD_BYTES")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type", "Cookie", "Authorization"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def credential_ttl_seconds(self) -> int:
        """Lifetime of an issued credential in seconds."""
        return self.credential_ttl_hours * 3600

    @property
    def cookie_name(self) -> str:
        """Name of the cookie carrying the admin credential."""
        return "admin_token" if self.credential_strategy == "token" else "admin_session"


settings = Settings()  # type: ignore[call-arg]
