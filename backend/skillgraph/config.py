"""Process configuration read from environment variables.

Provider clients are built once per process from these settings (see
``skillgraph.services.pipeline.get_pipeline``); missing credentials fail at
construction time with ConfigurationError.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel

from skillgraph.errors import ConfigurationError
from skillgraph.models.llm_models import LLMConfig, LLMProviderType

# Provider-specific key variables consulted when SKILLGRAPH_LLM_API_KEY is unset
_PROVIDER_KEY_VARS: dict[LLMProviderType, str] = {
    LLMProviderType.OPENAI: "OPENAI_API_KEY",
    LLMProviderType.ANTHROPIC: "ANTHROPIC_API_KEY",
    LLMProviderType.MISTRAL: "MISTRAL_API_KEY",
    LLMProviderType.GROQ: "GROQ_API_KEY",
    LLMProviderType.XAI: "XAI_API_KEY",
}


class Settings(BaseModel):
    serper_api_key: str | None = None
    hyperbrowser_api_key: str | None = None
    llm: LLMConfig = LLMConfig(provider=LLMProviderType.OPENAI)
    cors_origins: list[str] = ["http://localhost:3000"]
    rate_limit_enabled: bool = True

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        provider_name = env.get("SKILLGRAPH_LLM_PROVIDER", "openai").strip().lower()
        try:
            provider = LLMProviderType(provider_name)
        except ValueError:
            raise ConfigurationError(f"Unknown SKILLGRAPH_LLM_PROVIDER: {provider_name}") from None
        api_key = env.get("SKILLGRAPH_LLM_API_KEY")
        if not api_key and provider in _PROVIDER_KEY_VARS:
            api_key = env.get(_PROVIDER_KEY_VARS[provider])

        cors_env = env.get("CORS_ORIGINS", "http://localhost:3000")
        return cls(
            serper_api_key=env.get("SERPER_API_KEY") or None,
            hyperbrowser_api_key=env.get("HYPERBROWSER_API_KEY") or None,
            llm=LLMConfig(
                provider=provider,
                api_key=api_key or None,
                base_url=env.get("SKILLGRAPH_LLM_BASE_URL") or None,
                model=env.get("SKILLGRAPH_LLM_MODEL") or None,
            ),
            cors_origins=[o.strip() for o in cors_env.split(",") if o.strip()],
            rate_limit_enabled=env.get("SKILLGRAPH_NO_RATE_LIMIT", "").lower() != "true",
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
