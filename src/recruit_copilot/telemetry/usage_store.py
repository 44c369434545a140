"""SQLite-backed LLM usage storage."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from recruit_copilot.telemetry.models import UsageRecord

DEFAULT_DB_PATH = Path.home() / ".recruit-copilot" / "usage.db"

_COLUMNS = (
    "id, correlation_id, timestamp, provider, model, prompt_tokens, completion_tokens, "
    "total_tokens, duration_ms, estimated_cost_usd, success, error_message"
)


class UsageStore:
    """SQLite-backed store for per-call usage records with WAL mode."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS llm_usage (
                    id TEXT PRIMARY KEY,
                    correlation_id TEXT,
                    timestamp TEXT NOT NULL,
                    provider TEXT NOT NULL,
                    model TEXT NOT NULL,
                    prompt_tokens INTEGER NOT NULL DEFAULT 0,
                    completion_tokens INTEGER NOT NULL DEFAULT 0,
                    total_tokens INTEGER NOT NULL DEFAULT 0,
                    duration_ms INTEGER NOT NULL DEFAULT 0,
                    estimated_cost_usd REAL NOT NULL DEFAULT 0.0,
                    success INTEGER NOT NULL DEFAULT 1,
                    error_message TEXT
                )
            """)

    def save(self, record: UsageRecord) -> None:
        """Persist a usage record."""
        with self._connect() as conn:
            conn.execute(
                f"INSERT OR REPLACE INTO llm_usage ({_COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    record.id,
                    record.correlation_id,
                    record.timestamp.isoformat(),
                    record.provider,
                    record.model,
                    record.prompt_tokens,
                    record.completion_tokens,
                    record.total_tokens,
                    record.duration_ms,
                    record.estimated_cost_usd,
                    1 if record.success else 0,
                    record.error_message,
                ),
            )

    def get_records(
        self,
        correlation_id: str | None = None,
        limit: int = 50,
    ) -> list[UsageRecord]:
        """Retrieve records, newest first, optionally for one correlation id."""
        with self._connect() as conn:
            if correlation_id is not None:
                rows = conn.execute(
                    f"SELECT {_COLUMNS} FROM llm_usage WHERE correlation_id = ? "
                    "ORDER BY timestamp DESC LIMIT ?",
                    (correlation_id, limit),
                ).fetchall()
            else:
                rows = conn.execute(
                    f"SELECT {_COLUMNS} FROM llm_usage ORDER BY timestamp DESC LIMIT ?",
                    (limit,),
                ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def get_stats(self) -> dict:
        """Aggregate token, cost and success figures across all records."""
        with self._connect() as conn:
            row = conn.execute(
                """SELECT
                       COUNT(*),
                       SUM(prompt_tokens),
                       SUM(completion_tokens),
                       SUM(estimated_cost_usd),
                       AVG(duration_ms),
                       SUM(CASE WHEN success = 1 THEN 1 ELSE 0 END)
                   FROM llm_usage"""
            ).fetchone()
        return {
            "total_calls": row[0] or 0,
            "total_prompt_tokens": row[1] or 0,
            "total_completion_tokens": row[2] or 0,
            "total_cost_usd": row[3] or 0.0,
            "avg_duration_ms": round(row[4], 1) if row[4] is not None else None,
            "success_rate": (row[5] / row[0] * 100) if row[0] else 0.0,
        }

    @staticmethod
    def _row_to_record(row: tuple) -> UsageRecord:
        return UsageRecord(
            id=row[0],
            correlation_id=row[1],
            timestamp=datetime.fromisoformat(row[2]),
            provider=row[3],
            model=row[4],
            prompt_tokens=row[5],
            completion_tokens=row[6],
            total_tokens=row[7],
            duration_ms=row[8],
            estimated_cost_usd=row[9],
            success=bool(row[10]),
            error_message=row[11],
        )
