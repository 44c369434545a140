"""Anthropic Claude adapter."""

from __future__ import annotations

import anthropic

from recruit_copilot.clients.providers.base import BaseProvider
from recruit_copilot.errors import EmptyResponseError, ProviderError
from recruit_copilot.models.chat import ChatMessage, ChatOptions, ChatResult

DEFAULT_MAX_TOKENS = 8192


class AnthropicProvider(BaseProvider):
    """Claude takes the system prompt as a separate parameter."""

    name = "anthropic"

    def __init__(self, api_key: str, default_model: str, timeout: float | None = None):
        super().__init__(api_key, default_model, timeout)
        kwargs: dict = {}
        if api_key:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)

    async def chat(self, messages: list[ChatMessage], options: ChatOptions) -> ChatResult:
        requested_model, vendor_model = self.resolve_model(options)
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        kwargs: dict = {
            "model": vendor_model,
            "max_tokens": options.max_output_tokens or DEFAULT_MAX_TOKENS,
            # Claude caps temperature at 1
            "temperature": min(options.temperature, 1.0),
            "messages": [
                {"role": m.role, "content": m.content} for m in messages if m.role != "system"
            ],
        }
        if system:
            kwargs["system"] = system

        try:
            message = await self.client.messages.create(**kwargs)
        except anthropic.AnthropicError as exc:
            raise ProviderError(self.name, str(exc)) from exc

        text = "".join(
            block.text for block in message.content if getattr(block, "type", "text") == "text"
        )
        if not text:
            raise EmptyResponseError(self.name)

        usage = getattr(message, "usage", None)
        return ChatResult(
            content=text,
            usage=self.make_usage(
                getattr(usage, "input_tokens", 0),
                getattr(usage, "output_tokens", 0),
            ),
            model_used=requested_model,
            vendor_model=vendor_model,
        )
