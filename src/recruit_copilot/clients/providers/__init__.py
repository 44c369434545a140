"""LLM vendor adapters."""
from recruit_copilot.clients.providers.anthropic_provider import AnthropicProvider
from recruit_copilot.clients.providers.base import BaseProvider
from recruit_copilot.clients.providers.google_provider import GoogleProvider
from recruit_copilot.clients.providers.openai_provider import (
    KimiProvider,
    OpenAIProvider,
    OpenRouterProvider,
)

PROVIDERS: dict[str, type[BaseProvider]] = {
    "openai": OpenAIProvider,
    "openrouter": OpenRouterProvider,
    "google": GoogleProvider,
    "gemini": GoogleProvider,
    "kimi": KimiProvider,
    "moonshot": KimiProvider,
    "anthropic": AnthropicProvider,
}

__all__ = [
    "AnthropicProvider",
    "BaseProvider",
    "GoogleProvider",
    "KimiProvider",
    "OpenAIProvider",
    "OpenRouterProvider",
    "PROVIDERS",
]
