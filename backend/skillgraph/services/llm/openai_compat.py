"""OpenAI-compatible provider. Covers OpenAI, Mistral, Groq, xAI, Ollama, LM Studio, Custom."""

import openai

from skillgraph.services.llm.base import BaseLLMProvider


class OpenAICompatProvider(BaseLLMProvider):
    """Provider for any OpenAI-compatible API."""

    def __init__(self, api_key: str | None, base_url: str, model: str):
        super().__init__(api_key, base_url, model)
        # Local servers ignore the key but the SDK refuses an empty one
        self._client = openai.AsyncOpenAI(api_key=api_key or "unused", base_url=base_url)

    async def complete(self, messages: list[dict], **kwargs) -> str:
        resp = await self._client.chat.completions.create(
            model=self.model,
            messages=messages,
            **kwargs,
        )
        if not resp.choices:
            return ""
        return resp.choices[0].message.content or ""
