"""Usage telemetry data models."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class UsageRecord(BaseModel):
    """One LLM call as seen by the orchestrator."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    correlation_id: str | None = None
    timestamp: datetime = Field(default_factory=datetime.now)
    provider: str
    model: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    duration_ms: int = 0
    estimated_cost_usd: float = 0.0
    success: bool = True
    error_message: str | None = None
