"""Tests for configuration module."""

import pytest

from superpowers.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        settings = Settings()
        assert settings.env == "development"
        assert settings.llm_provider == "ollama"
        assert settings.script_timeout_seconds == 50.0
        assert settings.query_files_top_k == 8
        assert settings.agent_max_iterations == 10
        assert settings.auth_enabled is False

    def test_is_production(self):
        settings = Settings(env="production")
        assert settings.is_production is True
        assert settings.is_development is False

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("ENV", "staging")
        monkeypatch.setenv("LLM_PROVIDER", "anthropic")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test-api-key")
        monkeypatch.setenv("SCRIPT_TIMEOUT_SECONDS", "5")

        settings = Settings()
        assert settings.env == "staging"
        assert settings.llm_provider == "anthropic"
        assert settings.anthropic_api_key == "test-api-key"
        assert settings.script_timeout_seconds == 5.0

    @pytest.mark.parametrize(
        ("provider", "message"),
        [
            ("anthropic", "ANTHROPIC_API_KEY is required"),
            ("openai", "OPENAI_API_KEY is required"),
            ("custom_openai", "CUSTOM_OPENAI_API_KEY is required"),
        ],
    )
    def test_provider_requires_api_key(self, provider, message):
        with pytest.raises(ValueError, match=message):
            Settings(llm_provider=provider)

    def test_openai_embeddings_require_api_key(self):
        with pytest.raises(ValueError, match="EMBEDDING_PROVIDER=openai"):
            Settings(embedding_provider="openai")

    def test_basic_auth_needs_both_values(self):
        with pytest.raises(ValueError, match="must be set together"):
            Settings(basic_auth_user="admin")

        settings = Settings(basic_auth_user="admin", basic_auth_password="secret")
        assert settings.auth_enabled is True

    @pytest.mark.parametrize("field", ["script_timeout_seconds", "http_call_timeout_seconds"])
    def test_timeouts_must_be_positive(self, field):
        with pytest.raises(ValueError):
            Settings(**{field: 0})

    @pytest.mark.parametrize("values", [{"llm_temperature": -0.1}, {"llm_temperature": 2.5}, {"llm_max_tokens": 0}])
    def test_sampling_bounds(self, values):
        with pytest.raises(ValueError):
            Settings(**values)


class TestGetSettings:
    def test_caches_result(self):
        assert get_settings() is get_settings()
