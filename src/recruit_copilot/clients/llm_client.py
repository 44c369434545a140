"""Provider-agnostic chat client: provider selection, timing, usage, JSON replies."""

from __future__ import annotations

import logging
import sqlite3
import time

from recruit_copilot.clients.providers import PROVIDERS, BaseProvider
from recruit_copilot.config import DEFAULT_PROVIDER, LLMConfig
from recruit_copilot.errors import JsonParseError
from recruit_copilot.models.chat import ChatMessage, ChatOptions, ChatResult
from recruit_copilot.telemetry.cost_calculator import calculate_cost
from recruit_copilot.telemetry.models import UsageRecord
from recruit_copilot.telemetry.usage_store import UsageStore
from recruit_copilot.utils.json_parser import extract_json

logger = logging.getLogger(__name__)


class LLMClient:
    """Async chat client over one configured provider.

    The provider is resolved lazily on first use and then reused for the
    lifetime of the client. Build one client in the composition root and hand
    it to every agent.
    """

    def __init__(
        self,
        config: LLMConfig | None = None,
        *,
        provider: BaseProvider | None = None,
        usage_store: UsageStore | None = None,
    ):
        self.config = config or LLMConfig()
        self._provider = provider
        self.usage_store = usage_store
        self._token_log: list[UsageRecord] = []

    @property
    def provider(self) -> BaseProvider:
        if self._provider is None:
            self._provider = self._create_provider(self.config.provider)
            logger.info(
                "Initialized LLM client: provider=%s model=%s",
                self._provider.provider_name(),
                self.config.model,
            )
        return self._provider

    def _create_provider(self, name: str) -> BaseProvider:
        key = name.strip().lower()
        provider_cls = PROVIDERS.get(key)
        if provider_cls is None:
            logger.warning("Unknown provider %r, falling back to %s", name, DEFAULT_PROVIDER)
            key = DEFAULT_PROVIDER
            provider_cls = PROVIDERS[key]
        return provider_cls(
            api_key=self.config.api_key_for(key),
            default_model=self.config.model,
            timeout=self.config.timeout,
        )

    @property
    def model(self) -> str:
        return self.config.model

    @property
    def provider_name(self) -> str:
        return self.provider.provider_name()

    async def chat_result(
        self,
        messages: list[ChatMessage],
        options: ChatOptions | None = None,
    ) -> ChatResult:
        """Send messages and return the full ChatResult with usage."""
        options = options or ChatOptions(temperature=self.config.temperature)
        provider = self.provider
        model = options.model_override or self.config.model
        logger.debug(
            "LLM call: provider=%s model=%s messages=%d prompt_chars=%d correlation_id=%s",
            provider.provider_name(),
            model,
            len(messages),
            sum(len(m.content) for m in messages),
            options.correlation_id,
        )

        start = time.monotonic()
        try:
            result = await provider.chat(messages, options)
        except Exception as exc:
            duration_ms = int((time.monotonic() - start) * 1000)
            logger.error(
                "LLM call failed: provider=%s model=%s duration_ms=%d correlation_id=%s",
                provider.provider_name(),
                model,
                duration_ms,
                options.correlation_id,
                exc_info=True,
            )
            self._record(
                UsageRecord(
                    correlation_id=options.correlation_id,
                    provider=provider.provider_name(),
                    model=model,
                    duration_ms=duration_ms,
                    success=False,
                    error_message=str(exc),
                )
            )
            raise

        duration_ms = int((time.monotonic() - start) * 1000)
        usage = result.usage
        logger.info(
            "LLM call completed: provider=%s model=%s tokens=%d/%d/%d duration_ms=%d correlation_id=%s",
            provider.provider_name(),
            result.model_used,
            usage.prompt_tokens,
            usage.completion_tokens,
            usage.total_tokens,
            duration_ms,
            options.correlation_id,
        )
        self._record(
            UsageRecord(
                correlation_id=options.correlation_id,
                provider=provider.provider_name(),
                model=result.model_used,
                prompt_tokens=usage.prompt_tokens,
                completion_tokens=usage.completion_tokens,
                total_tokens=usage.total_tokens,
                duration_ms=duration_ms,
                estimated_cost_usd=calculate_cost(
                    result.vendor_model or result.model_used,
                    usage.prompt_tokens,
                    usage.completion_tokens,
                ),
            )
        )
        return result

    async def chat(
        self,
        messages: list[ChatMessage],
        options: ChatOptions | None = None,
    ) -> str:
        """Send messages and return the reply text."""
        result = await self.chat_result(messages, options)
        return result.content

    async def chat_json(
        self,
        messages: list[ChatMessage],
        options: ChatOptions | None = None,
    ) -> dict | list:
        """Send messages and parse JSON from the reply.

        Raises JsonParseError (with a 200-char preview) when no JSON is found.
        """
        text = await self.chat(messages, options)
        try:
            return extract_json(text)
        except JsonParseError as exc:
            logger.error(
                "Failed to parse JSON response: preview=%r correlation_id=%s",
                exc.preview,
                options.correlation_id if options else None,
            )
            raise

    def _record(self, record: UsageRecord) -> None:
        self._token_log.append(record)
        if self.usage_store is None:
            return
        try:
            self.usage_store.save(record)
        except sqlite3.Error:
            logger.warning("Could not persist usage record %s", record.id, exc_info=True)

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "prompt": sum(r.prompt_tokens for r in self._token_log),
            "completion": sum(r.completion_tokens for r in self._token_log),
            "cost_usd": sum(r.estimated_cost_usd for r in self._token_log),
            "calls": [(r.model, r.prompt_tokens, r.completion_tokens) for r in self._token_log],
            "failures": sum(1 for r in self._token_log if not r.success),
        }
        self._token_log.clear()
        return summary
