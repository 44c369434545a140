"""Common contract for LLM vendor adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod

from recruit_copilot.models.chat import ChatMessage, ChatOptions, ChatResult, TokenUsage


class BaseProvider(ABC):
    """Normalizes one vendor's chat-completion API to ChatMessage -> ChatResult."""

    name: str = "base"
    # Vendors that take bare model ids get "vendor/model" reduced to "model".
    strips_vendor_prefix: bool = True

    def __init__(self, api_key: str, default_model: str, timeout: float | None = None):
        self.api_key = api_key
        self.default_model = default_model
        self.timeout = timeout

    def provider_name(self) -> str:
        return self.name

    def normalize_model(self, model: str) -> str:
        if self.strips_vendor_prefix and "/" in model:
            return model.split("/", 1)[1]
        return model

    def resolve_model(self, options: ChatOptions) -> tuple[str, str]:
        """Return (requested id as configured, id sent to the vendor)."""
        requested = options.model_override or self.default_model
        return requested, self.normalize_model(requested)

    @staticmethod
    def make_usage(prompt: int | None, completion: int | None, total: int | None = None) -> TokenUsage:
        prompt = prompt or 0
        completion = completion or 0
        return TokenUsage(
            prompt_tokens=prompt,
            completion_tokens=completion,
            total_tokens=total or prompt + completion,
        )

    @abstractmethod
    async def chat(self, messages: list[ChatMessage], options: ChatOptions) -> ChatResult:
        """Send *messages* and return the first completion."""
