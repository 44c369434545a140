"""Exception types raised by the LLM core."""

from __future__ import annotations

PREVIEW_CHARS = 200


class RecruitCopilotError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(RecruitCopilotError):
    """Configuration value that cannot be recovered from."""


class ProviderError(RecruitCopilotError):
    """A vendor SDK/HTTP call failed."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"[{provider}] {message}")
        self.provider = provider


class EmptyResponseError(ProviderError):
    """The vendor answered but the completion had no usable content."""

    def __init__(self, provider: str):
        super().__init__(provider, f"No content in {provider} response")


class JsonParseError(ValueError, RecruitCopilotError):
    """No JSON value could be recovered from a model reply."""

    def __init__(self, text: str):
        self.text = text
        self.preview = text[:PREVIEW_CHARS]
        super().__init__(f"Could not extract JSON from text: {self.preview}...")


class UpstreamAPIError(RecruitCopilotError):
    """Non-success status from the external invitation API."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Invitation API returned {status_code}: {body}")
        self.status_code = status_code
        self.body = body
