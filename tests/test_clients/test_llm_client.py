"""Tests for LLMClient (provider selection, usage accounting, JSON replies)."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from recruit_copilot.clients.llm_client import LLMClient
from recruit_copilot.clients.providers import OpenRouterProvider
from recruit_copilot.config import LLMConfig
from recruit_copilot.errors import JsonParseError, ProviderError
from recruit_copilot.models.chat import ChatOptions, system, user
from recruit_copilot.telemetry.usage_store import UsageStore

MESSAGES = [system("You are terse."), user("Say hi")]


class TestProviderResolution:
    def test_provider_is_created_lazily(self):
        with patch("recruit_copilot.clients.providers.openai_provider.openai.AsyncOpenAI") as mock_cls:
            llm = LLMClient(LLMConfig(provider="openrouter", api_keys={"openrouter": "k"}))
            mock_cls.assert_not_called()
            assert llm.provider_name == "openrouter"
            mock_cls.assert_called_once()

    def test_provider_is_reused(self):
        with patch("recruit_copilot.clients.providers.openai_provider.openai.AsyncOpenAI"):
            llm = LLMClient(LLMConfig(provider="openai", api_keys={"openai": "k"}))
            assert llm.provider is llm.provider

    def test_unknown_provider_falls_back_to_openrouter(self, caplog):
        with patch("recruit_copilot.clients.providers.openai_provider.openai.AsyncOpenAI"):
            llm = LLMClient(LLMConfig(provider="nonsense"))
            with caplog.at_level("WARNING"):
                provider = llm.provider
        assert isinstance(provider, OpenRouterProvider)
        assert "nonsense" in caplog.text

    def test_provider_name_is_case_insensitive(self):
        with patch("recruit_copilot.clients.providers.openai_provider.openai.AsyncOpenAI"):
            llm = LLMClient(LLMConfig(provider="  Kimi "))
            assert llm.provider_name == "kimi"

    def test_config_key_and_timeout_reach_the_sdk(self):
        with patch("recruit_copilot.clients.providers.openai_provider.openai.AsyncOpenAI") as mock_cls:
            LLMClient(LLMConfig(provider="openai", timeout=30, api_keys={"openai": "sk-1"})).provider
        kwargs = mock_cls.call_args.kwargs
        assert kwargs["api_key"] == "sk-1"
        assert kwargs["timeout"] == 30


class TestChat:
    async def test_chat_returns_text(self, make_llm):
        llm, provider = make_llm("hello")
        assert await llm.chat(MESSAGES) == "hello"
        assert provider.last_messages == MESSAGES

    async def test_default_options_use_config_temperature(self, make_llm):
        llm, provider = make_llm("ok")
        await llm.chat(MESSAGES)
        assert provider.last_options.temperature == 0.7

    async def test_chat_result_keeps_usage(self, make_llm):
        llm, _ = make_llm("ok")
        result = await llm.chat_result(MESSAGES)
        assert result.usage.prompt_tokens == 120
        assert result.usage.completion_tokens == 40
        assert result.model_used == "google/gemini-3-flash-preview"

    async def test_provider_error_propagates_unchanged(self, make_llm):
        error = ProviderError("scripted", "rate limited")
        llm, _ = make_llm(error)
        with pytest.raises(ProviderError) as info:
            await llm.chat(MESSAGES)
        assert info.value is error


class TestChatJson:
    async def test_fenced_json(self, make_llm):
        llm, _ = make_llm('```json\n{"subject": "Hi"}\n```')
        assert await llm.chat_json(MESSAGES) == {"subject": "Hi"}

    async def test_prose_raises_with_preview(self, make_llm):
        llm, _ = make_llm("I cannot help with that.")
        with pytest.raises(JsonParseError) as info:
            await llm.chat_json(MESSAGES, ChatOptions(correlation_id="req-9"))
        assert info.value.preview == "I cannot help with that."


class TestUsageAccounting:
    async def test_token_summary_accumulates_and_resets(self, make_llm):
        llm, _ = make_llm("a", "b")
        await llm.chat(MESSAGES)
        await llm.chat(MESSAGES)

        summary = llm.get_token_summary()
        assert summary["prompt"] == 240
        assert summary["completion"] == 80
        assert summary["failures"] == 0
        assert len(summary["calls"]) == 2
        assert summary["cost_usd"] > 0

        assert llm.get_token_summary()["calls"] == []

    async def test_failures_are_counted(self, make_llm):
        llm, _ = make_llm(ProviderError("scripted", "down"))
        with pytest.raises(ProviderError):
            await llm.chat(MESSAGES)
        summary = llm.get_token_summary()
        assert summary["failures"] == 1
        assert summary["prompt"] == 0

    async def test_records_are_persisted(self, make_llm, tmp_path):
        store = UsageStore(tmp_path / "usage.db")
        llm, _ = make_llm("ok", ProviderError("scripted", "down"), usage_store=store)

        await llm.chat(MESSAGES, ChatOptions(correlation_id="req-1"))
        with pytest.raises(ProviderError):
            await llm.chat(MESSAGES, ChatOptions(correlation_id="req-1"))

        records = store.get_records(correlation_id="req-1")
        assert len(records) == 2
        assert sorted(r.success for r in records) == [False, True]
        failed = next(r for r in records if not r.success)
        assert "down" in failed.error_message

    async def test_model_override_is_recorded(self, make_llm):
        llm, provider = make_llm("ok")
        await llm.chat(MESSAGES, ChatOptions(model_override="openai/gpt-4o"))
        assert provider.last_options.model_override == "openai/gpt-4o"
        assert llm.get_token_summary()["calls"][0][0] == "openai/gpt-4o"
