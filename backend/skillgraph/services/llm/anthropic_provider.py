"""Anthropic Claude provider."""

import anthropic

from skillgraph.services.llm.base import BaseLLMProvider


class AnthropicProvider(BaseLLMProvider):
    """Provider for Anthropic Claude models."""

    def __init__(self, api_key: str | None, base_url: str, model: str):
        super().__init__(api_key, base_url, model)
        self._client = anthropic.AsyncAnthropic(api_key=api_key, base_url=base_url)

    async def complete(self, messages: list[dict], **kwargs) -> str:
        # Anthropic API requires system messages as a separate parameter
        system_parts = []
        non_system = []
        for msg in messages:
            if msg.get("role") == "system":
                system_parts.append(msg["content"])
            else:
                non_system.append(msg)

        create_kwargs = {
            "model": self.model,
            "messages": non_system,
            "max_tokens": kwargs.pop("max_tokens", 4096),
            **kwargs,
        }
        if system_parts:
            create_kwargs["system"] = "\n\n".join(system_parts)

        resp = await self._client.messages.create(**create_kwargs)
        return "".join(
            block.text for block in resp.content if getattr(block, "type", "") == "text"
        )
