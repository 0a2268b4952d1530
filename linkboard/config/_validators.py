from __future__ import annotations


def validate_model_name(model: str) -> str:
    """Validate an LLM model identifier (Gemini, OpenAI and OpenAI-compatible IDs)."""
    if not model:
        msg = "Model name cannot be empty"
        raise ValueError(msg)
    if len(model) > 100:
        msg = "Model name too long"
        raise ValueError(msg)

    allowed = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_.:/")
    if ".." in model or any(ch not in allowed for ch in model):
        msg = "Model name contains invalid characters"
        raise ValueError(msg)

    return model


def normalize_api_key(value: str | None, *, name: str) -> str:
    """Strip an API key; empty stays empty (means "not configured yet")."""
    key = (value or "").strip()
    if not key:
        return ""
    if len(key) > 500:
        msg = f"{name} API key appears to be too long"
        raise ValueError(msg)
    if any(char in key for char in (" ", "\n", "\t")):
        msg = f"{name} API key contains invalid characters"
        raise ValueError(msg)
    return key


def validate_base_url(value: str | None) -> str | None:
    if value in (None, ""):
        return None
    url = str(value).strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        msg = "Base URL must start with http:// or https://"
        raise ValueError(msg)
    return url
