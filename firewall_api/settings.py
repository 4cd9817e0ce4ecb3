"""Process settings for the firewall control-plane.

Values come from ``AWALL_API_*`` environment variables, with CLI flags layered
on top by :mod:`firewall_api.cli`. Settings are read once at startup; the
config context and CORS policy derived from them never change afterwards.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources.base import PydanticBaseSettingsSource
from pydantic_settings.sources.providers.env import EnvSettingsSource

DEFAULT_CONFIG_FILE = "/etc/awall/private/base.json"
DEFAULT_ACTIVATE_COMMAND = "awall"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7878

DEFAULT_CORS_METHODS = ("DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT")
DEFAULT_CORS_MAX_AGE = 86400


def _csv_to_list(value: str) -> List[str]:
    items = [part.strip() for part in value.split(",")]
    return [item for item in items if item]


def _json_or_csv_to_list(value: str) -> List[str]:
    text = value.strip()
    if not text:
        return []
    if text.startswith("["):
        try:
            decoded = json.loads(text)
        except (json.JSONDecodeError, TypeError, ValueError):
            return _csv_to_list(text)
        if isinstance(decoded, (list, tuple)):
            return [str(item).strip() for item in decoded if str(item).strip()]
        return []
    return _csv_to_list(text)


class _CsvFriendlyEnvSettingsSource(EnvSettingsSource):
    def decode_complex_value(self, field_name: str, field: Any, value: Any) -> Any:
        try:
            return super().decode_complex_value(field_name, field, value)
        except ValueError:
            return value


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="AWALL_API_", extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            _CsvFriendlyEnvSettingsSource(settings_cls),
            dotenv_settings,
            file_secret_settings,
        )

    # --- Storage ---
    config_file: str = Field(default=DEFAULT_CONFIG_FILE)

    # --- Activation ---
    activate_command: str = Field(default=DEFAULT_ACTIVATE_COMMAND)
    activate_timeout_s: Optional[float] = Field(default=None, gt=0)
    # Report a failed activation as a 500 instead of ignoring it.
    activate_strict: bool = Field(default=False)

    # --- CORS ---
    cors_allow_origin: Optional[str] = Field(default=None)
    cors_allow_methods: List[str] = Field(default_factory=lambda: list(DEFAULT_CORS_METHODS))
    cors_max_age: int = Field(default=DEFAULT_CORS_MAX_AGE, ge=0)

    # --- Server ---
    host: str = Field(default=DEFAULT_HOST)
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)

    # --- Logging ---
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=True)

    @field_validator("cors_allow_methods", mode="before")
    @classmethod
    def _split_methods(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = _json_or_csv_to_list(value)
        if isinstance(value, (list, tuple)):
            return [str(m).strip().upper() for m in value if str(m).strip()]
        return value

    @field_validator("cors_allow_origin", mode="before")
    @classmethod
    def _blank_origin_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def get_settings(**overrides: Any) -> Settings:
    return Settings(**overrides)


__all__ = ["Settings", "get_settings", "DEFAULT_CONFIG_FILE", "DEFAULT_CORS_METHODS"]
