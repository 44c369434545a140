"""Provider-neutral chat request/response models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ChatRole = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    role: ChatRole
    content: str


class ChatOptions(BaseModel):
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_output_tokens: int | None = None
    model_override: str | None = None  # may be vendor-qualified, e.g. "google/gemini-..."
    correlation_id: str | None = None


class TokenUsage(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatResult(BaseModel):
    """One completion. ``model_used`` keeps the id as configured, ``vendor_model`` what the vendor saw."""

    model_config = ConfigDict(frozen=True)

    content: str
    usage: TokenUsage = Field(default_factory=TokenUsage)
    model_used: str
    vendor_model: str = ""


def system(content: str) -> ChatMessage:
    return ChatMessage(role="system", content=content)


def user(content: str) -> ChatMessage:
    return ChatMessage(role="user", content=content)


def assistant(content: str) -> ChatMessage:
    return ChatMessage(role="assistant", content=content)
