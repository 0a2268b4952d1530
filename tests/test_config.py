"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from linkboard.config import AIProviderConfig, RuntimeConfig, SiteSettings, load_config

ENV_VARS = (
    "AI_PROVIDER",
    "AI_API_KEY",
    "AI_BASE_URL",
    "AI_MODEL",
    "SITE_TITLE",
    "NAV_TITLE",
    "SITE_FAVICON",
    "CARD_STYLE",
    "LOG_LEVEL",
    "LOG_FILE",
    "ICON_CANDIDATE_COUNT",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a stray .env in the working tree from leaking into tests.
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestAIProviderConfig:
    def test_defaults_to_gemini_without_credentials(self) -> None:
        config = AIProviderConfig()

        assert config.provider == "gemini"
        assert config.model == "gemini-2.5-flash"
        assert config.api_key == ""
        assert not config.has_credentials

    def test_openai_defaults_and_base_url(self) -> None:
        config = AIProviderConfig(
            provider="OpenAI", api_key="  sk-test  ", base_url="https://api.example.com/v1/"
        )

        assert config.provider == "openai"
        assert config.model == "gpt-3.5-turbo"
        assert config.api_key == "sk-test"
        assert config.base_url == "https://api.example.com/v1"
        assert config.has_credentials

    def test_base_url_ignored_for_gemini(self) -> None:
        config = AIProviderConfig(provider="gemini", base_url="https://api.example.com")
        assert config.base_url is None

    def test_explicit_model_is_kept(self) -> None:
        config = AIProviderConfig(provider="openai", model="deepseek-chat")
        assert config.model == "deepseek-chat"

    def test_unknown_provider_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AIProviderConfig(provider="claude-desktop")

    def test_api_key_with_whitespace_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AIProviderConfig(api_key="sk test")

    def test_invalid_model_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AIProviderConfig(model="../etc/passwd")

    def test_invalid_base_url_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AIProviderConfig(provider="openai", base_url="ftp://example.com")

    def test_api_key_hidden_from_repr(self) -> None:
        assert "sk-secret" not in repr(AIProviderConfig(api_key="sk-secret"))


class TestSiteSettings:
    def test_blank_values_fall_back_to_defaults(self) -> None:
        settings = SiteSettings(title="  ", nav_title="")

        assert settings.title == "CloudNav - 我的导航"
        assert settings.nav_title == "CloudNav"
        assert settings.card_style == "detailed"
        assert settings.favicon == ""

    def test_invalid_card_style(self) -> None:
        with pytest.raises(ValidationError):
            SiteSettings(card_style="fancy")


class TestRuntimeConfig:
    def test_icon_candidate_count_bounds(self) -> None:
        assert RuntimeConfig(icon_candidate_count="8").icon_candidate_count == 8
        with pytest.raises(ValidationError):
            RuntimeConfig(icon_candidate_count=0)
        with pytest.raises(ValidationError):
            RuntimeConfig(icon_candidate_count="many")

    def test_log_level_normalized(self) -> None:
        assert RuntimeConfig(log_level="debug").log_level == "DEBUG"


class TestLoadConfig:
    def test_reads_flat_environment(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("AI_PROVIDER", "openai")
        clean_env.setenv("AI_API_KEY", "sk-env")
        clean_env.setenv("AI_BASE_URL", "https://llm.internal/v1")
        clean_env.setenv("NAV_TITLE", "导航")
        clean_env.setenv("ICON_CANDIDATE_COUNT", "3")

        cfg = load_config()

        assert cfg.ai.provider == "openai"
        assert cfg.ai.api_key == "sk-env"
        assert cfg.ai.base_url == "https://llm.internal/v1"
        assert cfg.site.nav_title == "导航"
        assert cfg.runtime.icon_candidate_count == 3

    def test_defaults_without_environment(self, clean_env: pytest.MonkeyPatch) -> None:
        cfg = load_config()

        assert cfg.ai.provider == "gemini"
        assert not cfg.ai.has_credentials
        assert cfg.site.nav_title == "CloudNav"
        assert cfg.runtime.log_level == "INFO"

    def test_overrides_take_precedence(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("AI_API_KEY", "from-env")

        cfg = load_config(ai={"api_key": "from-override"})

        assert cfg.ai.api_key == "from-override"

    def test_invalid_environment_raises_runtime_error(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(RuntimeError, match="Configuration validation failed"):
            load_config()
