"""Cost estimate for LLM calls."""

from __future__ import annotations

# Pricing per 1M tokens (USD), keyed by the model id without vendor prefix
MODEL_PRICING: dict[str, dict[str, float]] = {
    "gemini-3-flash-preview": {"input": 0.50, "output": 3.00},
    "gemini-2.5-flash": {"input": 0.30, "output": 2.50},
    "gpt-4.1-mini": {"input": 0.40, "output": 1.60},
    "gpt-4o": {"input": 2.50, "output": 10.00},
    "kimi-k2-0905-preview": {"input": 0.60, "output": 2.50},
    "claude-haiku-4-5-20251001": {"input": 1.00, "output": 5.00},
    "claude-sonnet-4-5-20250929": {"input": 3.00, "output": 15.00},
}


def calculate_cost(model_id: str, prompt_tokens: int, completion_tokens: int) -> float:
    """Estimated USD cost of one call. Unknown models cost 0."""
    pricing = MODEL_PRICING.get(model_id.split("/")[-1])
    if pricing is None:
        return 0.0
    return (
        (prompt_tokens / 1_000_000) * pricing["input"]
        + (completion_tokens / 1_000_000) * pricing["output"]
    )


def calculate_total_cost(calls: list[tuple[str, int, int]]) -> float:
    """Sum calculate_cost() over (model_id, prompt_tokens, completion_tokens) tuples."""
    return sum(calculate_cost(model, inp, out) for model, inp, out in calls)
