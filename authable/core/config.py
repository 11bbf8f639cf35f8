from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# authable/core/config.py -> PACKAGE_DIR == authable
PACKAGE_DIR = Path(__file__).resolve().parents[1]
PACKAGE_ROOT = PACKAGE_DIR.parent

BUILTIN_USER = "authable.models.User"
BUILTIN_TOKEN = "authable.models.Token"
BUILTIN_CLIENT = "authable.models.Client"
BUILTIN_APP = "authable.models.App"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class AuthableSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_prefix="",
        case_sensitive=False,
    )

    # Model roles: the built-in model identifier or a caller model
    resource_owner: str = Field(
        default=BUILTIN_USER, validation_alias="AUTHABLE_RESOURCE_OWNER"
    )
    token_store: str = Field(
        default=BUILTIN_TOKEN, validation_alias="AUTHABLE_TOKEN_STORE"
    )
    client: str = Field(default=BUILTIN_CLIENT, validation_alias="AUTHABLE_CLIENT")
    app: str = Field(default=BUILTIN_APP, validation_alias="AUTHABLE_APP")

    # Migrations
    repo: str = Field(default="Authable.Repo", validation_alias="AUTHABLE_REPO")
    migrations_path: str = Field(
        default="priv/repo/migrations", validation_alias="AUTHABLE_MIGRATIONS_PATH"
    )

    # Consumer application package; defaults to the app_path basename
    otp_app: str | None = Field(default=None, validation_alias="AUTHABLE_OTP_APP")

    log_level: str = Field(default="INFO", validation_alias="AUTHABLE_LOG_LEVEL")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        if v is None:
            return "INFO"
        if not isinstance(v, str):
            raise TypeError("AUTHABLE_LOG_LEVEL must be a string")
        level = v.strip().upper() or "INFO"
        if level not in LOG_LEVELS:
            raise ValueError(
                f"AUTHABLE_LOG_LEVEL must be one of: {', '.join(LOG_LEVELS)}"
            )
        return level

    @field_validator("resource_owner", "token_store", "client", "app", mode="before")
    @classmethod
    def strip_identifier(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("model identifiers must be non-empty strings")
        return v.strip()
