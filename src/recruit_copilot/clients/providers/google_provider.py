"""Google Gemini adapter."""

from __future__ import annotations

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from recruit_copilot.clients.providers.base import BaseProvider
from recruit_copilot.errors import EmptyResponseError, ProviderError
from recruit_copilot.models.chat import ChatMessage, ChatOptions, ChatResult


def fold_messages(messages: list[ChatMessage]) -> str:
    """Gemini has no system role here: flatten the conversation into one prompt."""
    parts: list[str] = []
    system = next((m for m in messages if m.role == "system"), None)
    if system is not None:
        parts.append(f"System Instructions: {system.content}")
    for m in messages:
        if m.role == "system":
            continue
        speaker = "Assistant" if m.role == "assistant" else "User"
        parts.append(f"{speaker}: {m.content}")
    return "\n\n".join(parts) + "\n\n"


class GoogleProvider(BaseProvider):
    name = "google"

    def __init__(self, api_key: str, default_model: str, timeout: float | None = None):
        super().__init__(api_key, default_model, timeout)
        genai.configure(api_key=api_key)

    async def chat(self, messages: list[ChatMessage], options: ChatOptions) -> ChatResult:
        requested_model, vendor_model = self.resolve_model(options)
        model = genai.GenerativeModel(
            vendor_model,
            generation_config=genai.GenerationConfig(
                temperature=options.temperature,
                max_output_tokens=options.max_output_tokens,
            ),
        )
        request_options = {"timeout": self.timeout} if self.timeout else None

        try:
            response = await model.generate_content_async(
                fold_messages(messages), request_options=request_options
            )
        except google_exceptions.GoogleAPIError as exc:
            raise ProviderError(self.name, str(exc)) from exc

        try:
            text = response.text
        except ValueError:
            # raised when the candidate was blocked or has no parts
            text = ""
        if not text:
            raise EmptyResponseError(self.name)

        meta = getattr(response, "usage_metadata", None)
        return ChatResult(
            content=text,
            usage=self.make_usage(
                getattr(meta, "prompt_token_count", 0),
                getattr(meta, "candidates_token_count", 0),
                getattr(meta, "total_token_count", 0),
            ),
            model_used=requested_model,
            vendor_model=vendor_model,
        )
