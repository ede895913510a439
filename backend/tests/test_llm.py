"""Tests for generative provider registry and providers."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from skillgraph.errors import ConfigurationError
from skillgraph.models.llm_models import LLMConfig, LLMProviderType
from skillgraph.services.llm.anthropic_provider import AnthropicProvider
from skillgraph.services.llm.openai_compat import OpenAICompatProvider
from skillgraph.services.llm.registry import (
    DEFAULT_BASE_URLS,
    DEFAULT_MODELS,
    REQUIRES_API_KEY,
    get_provider,
)


@pytest.fixture
def anyio_backend():
    return "asyncio"


def test_all_providers_have_metadata():
    """Every provider type should have entries in all metadata dicts."""
    for p in LLMProviderType:
        assert p in DEFAULT_BASE_URLS, f"Missing default URL for {p}"
        assert p in DEFAULT_MODELS, f"Missing default model for {p}"
        assert p in REQUIRES_API_KEY, f"Missing requires_api_key for {p}"


def test_get_provider_openai_defaults():
    provider = get_provider(LLMConfig(provider=LLMProviderType.OPENAI, api_key="sk-test"))
    assert isinstance(provider, OpenAICompatProvider)
    assert provider.base_url == "https://api.openai.com/v1"
    assert provider.model == "gpt-4o"


def test_get_provider_anthropic():
    provider = get_provider(LLMConfig(provider=LLMProviderType.ANTHROPIC, api_key="sk-ant-test"))
    assert isinstance(provider, AnthropicProvider)
    assert provider.base_url == "https://api.anthropic.com"


def test_get_provider_custom_base_url_and_model():
    provider = get_provider(LLMConfig(
        provider=LLMProviderType.GROQ,
        api_key="gsk",
        base_url="https://proxy.example.com/v1",
        model="llama-3.1-8b-instant",
    ))
    assert isinstance(provider, OpenAICompatProvider)
    assert provider.base_url == "https://proxy.example.com/v1"
    assert provider.model == "llama-3.1-8b-instant"


def test_get_provider_missing_key_raises():
    with pytest.raises(ConfigurationError, match="API key"):
        get_provider(LLMConfig(provider=LLMProviderType.ANTHROPIC))


def test_get_provider_local_requires_model_not_key():
    with pytest.raises(ConfigurationError, match="No model"):
        get_provider(LLMConfig(provider=LLMProviderType.OLLAMA))

    provider = get_provider(LLMConfig(provider=LLMProviderType.OLLAMA, model="llama3"))
    assert isinstance(provider, OpenAICompatProvider)
    assert provider.base_url == "http://localhost:11434/v1"


@pytest.mark.anyio
async def test_openai_complete_returns_message_content():
    provider = OpenAICompatProvider(api_key="sk", base_url="https://api.openai.com/v1", model="gpt-4o")
    create = AsyncMock(return_value=SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content='{"nodes": []}'))],
    ))
    provider._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

    out = await provider.complete([{"role": "user", "content": "hi"}], temperature=0.1)

    assert out == '{"nodes": []}'
    assert create.call_args.kwargs["model"] == "gpt-4o"
    assert create.call_args.kwargs["temperature"] == 0.1


@pytest.mark.anyio
async def test_anthropic_complete_moves_system_message():
    provider = AnthropicProvider(api_key="sk-ant", base_url="https://api.anthropic.com", model="claude-x")
    create = AsyncMock(return_value=SimpleNamespace(
        content=[SimpleNamespace(type="text", text='{"nodes": ')],
    ))
    provider._client = SimpleNamespace(messages=SimpleNamespace(create=create))

    out = await provider.complete(
        [
            {"role": "system", "content": "be precise"},
            {"role": "user", "content": "build a graph"},
        ],
        max_tokens=100,
    )

    assert out == '{"nodes": '
    kwargs = create.call_args.kwargs
    assert kwargs["system"] == "be precise"
    assert kwargs["messages"] == [{"role": "user", "content": "build a graph"}]
    assert kwargs["max_tokens"] == 100
