"""Tests for usage records, cost estimates and the SQLite usage store."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from recruit_copilot.telemetry.cost_calculator import calculate_cost, calculate_total_cost
from recruit_copilot.telemetry.models import UsageRecord
from recruit_copilot.telemetry.usage_store import UsageStore


class TestCostCalculator:
    def test_known_model(self):
        # 1M in at $0.50 + 1M out at $3.00
        assert calculate_cost("gemini-3-flash-preview", 1_000_000, 1_000_000) == pytest.approx(3.5)

    def test_vendor_prefix_is_ignored(self):
        assert calculate_cost("google/gemini-3-flash-preview", 1000, 0) == calculate_cost(
            "gemini-3-flash-preview", 1000, 0
        )

    def test_unknown_model_is_free(self):
        assert calculate_cost("some/unknown-model", 5000, 5000) == 0.0

    def test_total(self):
        calls = [("gpt-4o", 1_000_000, 0), ("gpt-4o", 0, 1_000_000)]
        assert calculate_total_cost(calls) == pytest.approx(12.5)


class TestUsageRecord:
    def test_defaults(self):
        record = UsageRecord(provider="openrouter", model="google/gemini-3-flash-preview")
        assert record.id
        assert record.success is True
        assert record.correlation_id is None
        assert record.total_tokens == 0


@pytest.fixture
def store(tmp_path) -> UsageStore:
    return UsageStore(tmp_path / "nested" / "usage.db")


class TestUsageStore:
    def test_creates_parent_directory(self, tmp_path, store):
        assert (tmp_path / "nested" / "usage.db").exists()

    def test_save_and_get(self, store):
        record = UsageRecord(
            correlation_id="req-1",
            provider="kimi",
            model="kimi-k2-0905-preview",
            prompt_tokens=100,
            completion_tokens=20,
            total_tokens=120,
            duration_ms=850,
            estimated_cost_usd=0.0001,
        )
        store.save(record)

        [loaded] = store.get_records()
        assert loaded.id == record.id
        assert loaded.correlation_id == "req-1"
        assert loaded.total_tokens == 120
        assert loaded.success is True
        assert loaded.timestamp == record.timestamp

    def test_filter_by_correlation_id(self, store):
        store.save(UsageRecord(correlation_id="a", provider="p", model="m"))
        store.save(UsageRecord(correlation_id="b", provider="p", model="m"))
        store.save(UsageRecord(correlation_id="a", provider="p", model="m"))

        assert len(store.get_records(correlation_id="a")) == 2
        assert len(store.get_records(correlation_id="b")) == 1

    def test_newest_first_and_limit(self, store):
        base = datetime(2026, 1, 1, 12, 0, 0)
        for i in range(3):
            store.save(
                UsageRecord(provider="p", model=f"m{i}", timestamp=base + timedelta(minutes=i))
            )
        records = store.get_records(limit=2)
        assert [r.model for r in records] == ["m2", "m1"]

    def test_failed_call_round_trips(self, store):
        store.save(
            UsageRecord(provider="openai", model="gpt-4o", success=False, error_message="boom")
        )
        [loaded] = store.get_records()
        assert loaded.success is False
        assert loaded.error_message == "boom"

    def test_stats(self, store):
        store.save(UsageRecord(provider="p", model="m", prompt_tokens=10, duration_ms=100))
        store.save(
            UsageRecord(provider="p", model="m", prompt_tokens=30, duration_ms=300, success=False)
        )
        stats = store.get_stats()
        assert stats["total_calls"] == 2
        assert stats["total_prompt_tokens"] == 40
        assert stats["avg_duration_ms"] == 200.0
        assert stats["success_rate"] == 50.0

    def test_stats_empty(self, store):
        stats = store.get_stats()
        assert stats["total_calls"] == 0
        assert stats["avg_duration_ms"] is None
        assert stats["success_rate"] == 0.0
