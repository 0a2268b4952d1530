from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DEFAULT_SITE_TITLE = "CloudNav - 我的导航"
DEFAULT_NAV_TITLE = "CloudNav"
CARD_STYLES = ("detailed", "simple")


class SiteSettings(BaseModel):
    """Dashboard branding. Blank values fall back to the defaults."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(default=DEFAULT_SITE_TITLE, validation_alias="SITE_TITLE")
    nav_title: str = Field(default=DEFAULT_NAV_TITLE, validation_alias="NAV_TITLE")
    favicon: str = Field(default="", validation_alias="SITE_FAVICON")
    card_style: str = Field(default="detailed", validation_alias="CARD_STYLE")

    @field_validator("title", "nav_title", mode="before")
    @classmethod
    def _default_when_blank(cls, value: Any, info: ValidationInfo) -> str:
        text = str(value or "").strip()
        return text or cls.model_fields[info.field_name].default

    @field_validator("favicon", mode="before")
    @classmethod
    def _strip_favicon(cls, value: Any) -> str:
        return str(value or "").strip()

    @field_validator("card_style", mode="before")
    @classmethod
    def _validate_card_style(cls, value: Any) -> str:
        style = str(value or "detailed").lower().strip()
        if style not in CARD_STYLES:
            msg = f"Invalid card style: {style}. Must be one of {list(CARD_STYLES)}"
            raise ValueError(msg)
        return style
