"""
Configuration management for the EstateDesk backend.
Loads settings from YAML configuration files.
"""

import os
from pathlib import Path

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from YAML config files."""

    # Application
    app_env: str = Field(default="development", alias="APP_ENV")
    app_debug: bool = Field(default=False, alias="APP_DEBUG")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")

    # Logging Configuration
    log_to_file: bool = Field(default=False, alias="LOG_TO_FILE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file_path: str = Field(default="logs/app.log", alias="LOG_FILE_PATH")
    log_format: str = Field(default="json", alias="LOG_FORMAT")
    log_max_bytes: int = Field(default=50 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 50MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./estatedesk.db",
        alias="DATABASE_URL",
    )
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")
    # Only for local development and tests; deployments run `alembic upgrade head`
    database_auto_create: bool = Field(default=False, alias="DATABASE_AUTO_CREATE")
    database_ssl_check_hostname: bool = Field(
        default=True, alias="DATABASE_SSL_CHECK_HOSTNAME"
    )
    database_ssl_verify_cert: bool = Field(
        default=True, alias="DATABASE_SSL_VERIFY_CERT"
    )
    database_ssl_verify_identity: bool = Field(
        default=True, alias="DATABASE_SSL_VERIFY_IDENTITY"
    )

    # CORS
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"], alias="CORS_ORIGINS"
    )

    # Frontend (used to build share links)
    frontend_url: str = Field(default="http://localhost:3000", alias="FRONTEND_URL")

    # JWT Configuration
    jwt_secret_key: str = Field(
        default="your-secret-key-change-this-in-production", alias="JWT_SECRET_KEY"
    )
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_hours: int = Field(default=24, alias="ACCESS_TOKEN_EXPIRE_HOURS")
    admin_token_expire_hours: int = Field(default=8, alias="ADMIN_TOKEN_EXPIRE_HOURS")

    # Security
    bcrypt_rounds: int = Field(default=12, alias="BCRYPT_ROUNDS")
    max_password_attempts: int = Field(default=5, alias="MAX_PASSWORD_ATTEMPTS")
    lockout_duration_minutes: int = Field(default=15, alias="LOCKOUT_DURATION_MINUTES")
    # Lets the literal bearer "test" act as account 1 on fixture routes.
    # Never enable outside local development.
    allow_test_token: bool = Field(default=False, alias="ALLOW_TEST_TOKEN")

    # Uploads and sharing
    upload_max_bytes: int = Field(default=5 * 1024 * 1024, alias="UPLOAD_MAX_BYTES")
    share_default_expiry_days: int = Field(default=7, alias="SHARE_DEFAULT_EXPIRY_DAYS")
    share_token_length: int = Field(default=16, alias="SHARE_TOKEN_LENGTH")

    # System Initialization (optional)
    init_admin_username: str | None = Field(default=None, alias="INIT_ADMIN_USERNAME")
    init_admin_email: str | None = Field(default=None, alias="INIT_ADMIN_EMAIL")
    init_admin_password: str | None = Field(default=None, alias="INIT_ADMIN_PASSWORD")

    class Config:
        case_sensitive = False
        extra = "ignore"
        populate_by_name = True

    @classmethod
    def from_yaml(cls, config_path: str | Path, **overrides) -> "Settings":
        """Build settings from a YAML mapping; keyword overrides win."""
        with open(config_path, encoding="utf-8") as f:
            values = yaml.safe_load(f) or {}
        if not isinstance(values, dict):
            raise ValueError(f"{config_path} must contain a YAML mapping")
        values.update(overrides)
        return cls(**values)


def get_settings() -> Settings:
    """Load the settings file named by the CONFIG environment variable.

    Raises:
        ValueError: CONFIG is unset or the file is not a mapping.
        FileNotFoundError: CONFIG points at a missing file.
    """
    config_path = os.getenv("CONFIG")
    if not config_path:
        raise ValueError(
            "CONFIG is not set. Point it at a settings file, "
            "e.g. CONFIG=resources/config/local.yaml"
        )

    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Settings file {path} does not exist")

    return Settings.from_yaml(path)


settings = get_settings()
