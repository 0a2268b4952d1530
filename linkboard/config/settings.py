from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from .ai import AIProviderConfig
from .site import SiteSettings

logger = logging.getLogger(__name__)


class RuntimeConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    icon_candidate_count: int = Field(default=6, validation_alias="ICON_CANDIDATE_COUNT")

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: Any) -> str:
        log_level = str(value or "INFO").upper()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level not in valid_levels:
            msg = f"Invalid log level: {value}. Must be one of {valid_levels}"
            raise ValueError(msg)
        return log_level

    @field_validator("log_file", mode="before")
    @classmethod
    def _validate_log_file(cls, value: Any) -> str | None:
        if value is None:
            return None
        trimmed = str(value).strip()
        return trimmed or None

    @field_validator("icon_candidate_count", mode="before")
    @classmethod
    def _validate_icon_candidate_count(cls, value: Any) -> int:
        try:
            parsed = int(str(value if value not in (None, "") else 6))
        except ValueError as exc:
            msg = "Icon candidate count must be a valid integer"
            raise ValueError(msg) from exc
        if parsed < 1 or parsed > 24:
            msg = "Icon candidate count must be between 1 and 24"
            raise ValueError(msg)
        return parsed


@dataclass(frozen=True)
class AppConfig:
    ai: AIProviderConfig
    site: SiteSettings
    runtime: RuntimeConfig


class Settings(BaseSettings):
    """Settings loaded from environment variables and an optional ``.env`` file.

    Nested models are populated by matching ``validation_alias`` on each field.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    ai: AIProviderConfig = Field(default_factory=AIProviderConfig)
    site: SiteSettings = Field(default_factory=SiteSettings)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)

    @model_validator(mode="before")
    @classmethod
    def _build_nested_from_env(cls, data: Any) -> Any:
        """Fill nested sections from flat environment variables.

        Constructor arguments take precedence over the environment.
        """
        if not isinstance(data, dict):
            return data

        result = dict(data)
        merged_source = {**os.environ, **data}

        for field_name, field_info in cls.model_fields.items():
            annotation = field_info.annotation
            if not isinstance(annotation, type) or not issubclass(annotation, BaseModel):
                continue

            nested_data: dict[str, Any] = {}
            for nested_field_name, nested_field in annotation.model_fields.items():
                env_value = cls._resolve_env_value(merged_source, nested_field)
                if env_value is not None:
                    nested_data[nested_field_name] = env_value

            if nested_data:
                if isinstance(result.get(field_name), dict):
                    result[field_name] = {**nested_data, **result[field_name]}
                elif field_name not in result:
                    result[field_name] = nested_data

        return result

    @staticmethod
    def _resolve_env_value(data: dict[str, Any], field: Any) -> Any | None:
        aliases: list[str] = []
        alias = field.validation_alias
        if isinstance(alias, AliasChoices):
            aliases.extend(choice for choice in alias.choices if isinstance(choice, str))
        elif isinstance(alias, str):
            aliases.append(alias)

        for name in aliases:
            if name in data:
                return data[name]
        return None

    def as_app_config(self) -> AppConfig:
        return AppConfig(ai=self.ai, site=self.site, runtime=self.runtime)


def load_config(**overrides: Any) -> AppConfig:
    """Load configuration from the environment (and ``.env``).

    Keyword overrides are section dictionaries, e.g. ``ai={"api_key": "..."}``.

    Raises:
        RuntimeError: If configuration validation fails.
    """
    try:
        settings = Settings(**overrides)
    except ValidationError as exc:
        msg = f"Configuration validation failed: {exc}"
        raise RuntimeError(msg) from exc

    if not settings.ai.has_credentials:
        logger.info(
            "ai_provider_not_configured",
            extra={"provider": settings.ai.provider, "model": settings.ai.model},
        )
    return settings.as_app_config()
