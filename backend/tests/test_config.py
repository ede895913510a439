"""Tests for environment-driven settings."""

import pytest

from skillgraph.config import Settings
from skillgraph.errors import ConfigurationError
from skillgraph.models.llm_models import LLMProviderType


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})
    assert settings.serper_api_key is None
    assert settings.hyperbrowser_api_key is None
    assert settings.llm.provider == LLMProviderType.OPENAI
    assert settings.llm.api_key is None
    assert settings.cors_origins == ["http://localhost:3000"]
    assert settings.rate_limit_enabled is True


def test_provider_specific_key_fallback():
    settings = Settings.from_env({
        "SKILLGRAPH_LLM_PROVIDER": "Anthropic",
        "ANTHROPIC_API_KEY": "sk-ant",
        "OPENAI_API_KEY": "sk-openai",
    })
    assert settings.llm.provider == LLMProviderType.ANTHROPIC
    assert settings.llm.api_key == "sk-ant"


def test_explicit_llm_key_wins():
    settings = Settings.from_env({"SKILLGRAPH_LLM_API_KEY": "explicit", "OPENAI_API_KEY": "fallback"})
    assert settings.llm.api_key == "explicit"


def test_unknown_provider_raises():
    with pytest.raises(ConfigurationError, match="SKILLGRAPH_LLM_PROVIDER"):
        Settings.from_env({"SKILLGRAPH_LLM_PROVIDER": "acme"})


def test_cors_and_rate_limit_flags():
    settings = Settings.from_env({
        "CORS_ORIGINS": "http://a.test, http://b.test,",
        "SKILLGRAPH_NO_RATE_LIMIT": "TRUE",
        "SKILLGRAPH_LLM_MODEL": "gpt-4.1",
    })
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.rate_limit_enabled is False
    assert settings.llm.model == "gpt-4.1"
