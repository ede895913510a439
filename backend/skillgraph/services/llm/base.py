"""Abstract base class for generative providers."""

from abc import ABC, abstractmethod


class BaseLLMProvider(ABC):
    def __init__(self, api_key: str | None, base_url: str, model: str):
        self.api_key = api_key
        self.base_url = base_url
        self.model = model

    @abstractmethod
    async def complete(self, messages: list[dict], **kwargs) -> str:
        """Send a chat completion request and return the response text."""
        ...
