from __future__ import annotations

from ._validators import normalize_api_key, validate_base_url, validate_model_name
from .ai import DEFAULT_MODELS, AIProviderConfig
from .settings import AppConfig, RuntimeConfig, Settings, load_config
from .site import SiteSettings

__all__ = [
    "DEFAULT_MODELS",
    "AIProviderConfig",
    "AppConfig",
    "RuntimeConfig",
    "Settings",
    "SiteSettings",
    "load_config",
    "normalize_api_key",
    "validate_base_url",
    "validate_model_name",
]
