"""Adapters for vendors speaking the OpenAI chat-completions protocol."""

from __future__ import annotations

import logging

import openai

from recruit_copilot.clients.providers.base import BaseProvider
from recruit_copilot.errors import EmptyResponseError, ProviderError
from recruit_copilot.models.chat import ChatMessage, ChatOptions, ChatResult

logger = logging.getLogger(__name__)


class OpenAICompatibleProvider(BaseProvider):
    """AsyncOpenAI client pointed at ``base_url``."""

    name = "openai"
    base_url: str | None = None

    def __init__(self, api_key: str, default_model: str, timeout: float | None = None):
        super().__init__(api_key, default_model, timeout)
        kwargs: dict = {"api_key": api_key}
        if self.base_url is not None:
            kwargs["base_url"] = self.base_url
        if timeout is not None:
            kwargs["timeout"] = timeout
        kwargs.update(self.client_kwargs())
        self.client = openai.AsyncOpenAI(**kwargs)

    def client_kwargs(self) -> dict:
        return {}

    def temperature(self, requested: float) -> float:
        return requested

    async def chat(self, messages: list[ChatMessage], options: ChatOptions) -> ChatResult:
        requested_model, vendor_model = self.resolve_model(options)
        kwargs: dict = {
            "model": vendor_model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": self.temperature(options.temperature),
        }
        if options.max_output_tokens is not None:
            kwargs["max_tokens"] = options.max_output_tokens

        try:
            response = await self.client.chat.completions.create(**kwargs)
        except openai.OpenAIError as exc:
            raise ProviderError(self.name, str(exc)) from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise EmptyResponseError(self.name)

        usage = response.usage
        return ChatResult(
            content=content,
            usage=self.make_usage(
                getattr(usage, "prompt_tokens", 0),
                getattr(usage, "completion_tokens", 0),
                getattr(usage, "total_tokens", 0),
            ),
            model_used=requested_model,
            vendor_model=vendor_model,
        )


class OpenAIProvider(OpenAICompatibleProvider):
    name = "openai"


class OpenRouterProvider(OpenAICompatibleProvider):
    """OpenRouter routes on the full "vendor/model" id, so it is sent as-is."""

    name = "openrouter"
    base_url = "https://openrouter.ai/api/v1"
    strips_vendor_prefix = False

    def client_kwargs(self) -> dict:
        return {"default_headers": {"X-Title": "recruit-copilot"}}


class KimiProvider(OpenAICompatibleProvider):
    """Moonshot Kimi. The model family only accepts temperature=1."""

    name = "kimi"
    base_url = "https://api.moonshot.cn/v1"
    FIXED_TEMPERATURE = 1.0

    def temperature(self, requested: float) -> float:
        if requested != self.FIXED_TEMPERATURE:
            logger.debug("Kimi ignores temperature=%s, using %s", requested, self.FIXED_TEMPERATURE)
        return self.FIXED_TEMPERATURE
