"""Provider factory and metadata registry."""

from skillgraph.errors import ConfigurationError
from skillgraph.models.llm_models import LLMConfig, LLMProviderType
from skillgraph.services.llm.anthropic_provider import AnthropicProvider
from skillgraph.services.llm.base import BaseLLMProvider
from skillgraph.services.llm.openai_compat import OpenAICompatProvider

# Default base URLs per provider
DEFAULT_BASE_URLS: dict[LLMProviderType, str] = {
    LLMProviderType.OPENAI: "https://api.openai.com/v1",
    LLMProviderType.ANTHROPIC: "https://api.anthropic.com",
    LLMProviderType.MISTRAL: "https://api.mistral.ai/v1",
    LLMProviderType.GROQ: "https://api.groq.com/openai/v1",
    LLMProviderType.XAI: "https://api.x.ai/v1",
    LLMProviderType.OLLAMA: "http://localhost:11434/v1",
    LLMProviderType.LMSTUDIO: "http://localhost:1234/v1",
    LLMProviderType.CUSTOM: "http://localhost:8080/v1",
}

# Default model per provider (used when none is configured).
# Local providers have no sensible default and must be configured.
DEFAULT_MODELS: dict[LLMProviderType, str] = {
    LLMProviderType.OPENAI: "gpt-4o",
    LLMProviderType.ANTHROPIC: "claude-sonnet-4-5-20250929",
    LLMProviderType.MISTRAL: "mistral-large-latest",
    LLMProviderType.GROQ: "llama-3.3-70b-versatile",
    LLMProviderType.XAI: "grok-3-mini",
    LLMProviderType.OLLAMA: "",
    LLMProviderType.LMSTUDIO: "",
    LLMProviderType.CUSTOM: "",
}

# Whether the provider requires an API key
REQUIRES_API_KEY: dict[LLMProviderType, bool] = {
    LLMProviderType.OPENAI: True,
    LLMProviderType.ANTHROPIC: True,
    LLMProviderType.MISTRAL: True,
    LLMProviderType.GROQ: True,
    LLMProviderType.XAI: True,
    LLMProviderType.OLLAMA: False,
    LLMProviderType.LMSTUDIO: False,
    LLMProviderType.CUSTOM: False,
}


def get_provider(config: LLMConfig) -> BaseLLMProvider:
    """Create a provider instance, validating credentials up front."""
    provider_type = config.provider
    if REQUIRES_API_KEY[provider_type] and not config.api_key:
        raise ConfigurationError(f"API key for LLM provider '{provider_type.value}' is not set")

    model = config.model or DEFAULT_MODELS[provider_type]
    if not model:
        raise ConfigurationError(f"No model configured for LLM provider '{provider_type.value}'")

    base_url = config.base_url or DEFAULT_BASE_URLS[provider_type]

    if provider_type == LLMProviderType.ANTHROPIC:
        return AnthropicProvider(api_key=config.api_key, base_url=base_url, model=model)
    return OpenAICompatProvider(api_key=config.api_key, base_url=base_url, model=model)
