"""Storefront server configuration via environment variables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from shared.validators import StringListEnvSettingsSource, parse_path_prefixes, parse_string_list

if TYPE_CHECKING:
    from pydantic_settings.sources.base import PydanticBaseSettingsSource


class StorefrontSettings(BaseSettings):
    model_config = {"env_prefix": "STOREFRONT_"}

    log_dir: str = "backend/logs/storefront"
    cors_origins: list[str] = []

    # Paths (and everything below them) that require a session token
    protected_prefixes: list[str] = ["/checkout", "/orders", "/account"]
    login_path: str = "/auth/login"

    # API-wide per-client budget (product endpoints)
    rate_limit_requests: int = Field(default=100, ge=1)
    rate_limit_window_seconds: float = Field(default=60.0, gt=0)

    seed_demo_user: bool = True

    @field_validator("cors_origins", mode="before")
    @classmethod
    def validate_cors_origins(cls, v: str | list[str]) -> list[str]:
        return parse_string_list(v, allow_empty=True)

    @field_validator("protected_prefixes", mode="before")
    @classmethod
    def validate_protected_prefixes(cls, v: str | list[str]) -> list[str]:
        return parse_path_prefixes(v)

    @field_validator("login_path")
    @classmethod
    def validate_login_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("login_path must start with '/'")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, StringListEnvSettingsSource(settings_cls), dotenv_settings, file_secret_settings)
