"""Pydantic models for generative provider configuration."""

from enum import Enum

from pydantic import BaseModel


class LLMProviderType(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    MISTRAL = "mistral"
    GROQ = "groq"
    XAI = "xai"
    OLLAMA = "ollama"
    LMSTUDIO = "lmstudio"
    CUSTOM = "custom"


class LLMConfig(BaseModel):
    provider: LLMProviderType
    api_key: str | None = None
    base_url: str | None = None
    model: str | None = None
