from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ._validators import normalize_api_key, validate_base_url, validate_model_name

if TYPE_CHECKING:
    from typing import Self

DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-3.5-turbo",
}


class AIProviderConfig(BaseModel):
    """Provider settings passed through to the description generator.

    ``api_key`` may be empty while the user has not configured a provider yet;
    bulk generation refuses to start in that case.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    provider: str = Field(default="gemini", validation_alias="AI_PROVIDER")
    api_key: str = Field(default="", validation_alias="AI_API_KEY", repr=False)
    base_url: str | None = Field(default=None, validation_alias="AI_BASE_URL")
    model: str = Field(default="", validation_alias="AI_MODEL")

    @field_validator("provider", mode="before")
    @classmethod
    def _validate_provider(cls, value: Any) -> str:
        provider = str(value or "gemini").lower().strip()
        if provider not in DEFAULT_MODELS:
            msg = f"Invalid AI provider: {provider}. Must be one of {sorted(DEFAULT_MODELS)}"
            raise ValueError(msg)
        return provider

    @field_validator("api_key", mode="before")
    @classmethod
    def _validate_api_key(cls, value: Any) -> str:
        return normalize_api_key(None if value is None else str(value), name="AI provider")

    @field_validator("base_url", mode="before")
    @classmethod
    def _validate_base_url(cls, value: Any) -> str | None:
        return validate_base_url(None if value is None else str(value))

    @model_validator(mode="after")
    def _apply_provider_defaults(self) -> Self:
        model = self.model.strip() or DEFAULT_MODELS[self.provider]
        object.__setattr__(self, "model", validate_model_name(model))
        if self.provider != "openai" and self.base_url is not None:
            # Base URL only applies to OpenAI-compatible endpoints.
            object.__setattr__(self, "base_url", None)
        return self

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)
