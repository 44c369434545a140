"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from recruit_copilot.clients.llm_client import LLMClient
from recruit_copilot.clients.providers.base import BaseProvider
from recruit_copilot.config import DEFAULT_MODEL, LLMConfig
from recruit_copilot.models.chat import ChatMessage, ChatOptions, ChatResult


class ScriptedProvider(BaseProvider):
    """Provider that replays canned replies (or raises canned errors) in order."""

    name = "scripted"

    def __init__(self, replies=(), default_model: str = DEFAULT_MODEL):
        super().__init__(api_key="test-key", default_model=default_model)
        self.replies = list(replies)
        self.calls: list[tuple[list[ChatMessage], ChatOptions]] = []

    async def chat(self, messages: list[ChatMessage], options: ChatOptions) -> ChatResult:
        self.calls.append((list(messages), options))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        requested, vendor = self.resolve_model(options)
        return ChatResult(
            content=reply,
            usage=self.make_usage(120, 40),
            model_used=requested,
            vendor_model=vendor,
        )

    @property
    def last_messages(self) -> list[ChatMessage]:
        return self.calls[-1][0]

    @property
    def last_options(self) -> ChatOptions:
        return self.calls[-1][1]


@pytest.fixture
def make_llm() -> Callable[..., tuple[LLMClient, ScriptedProvider]]:
    """Build an LLMClient backed by a ScriptedProvider replaying ``replies``."""

    def _make(*replies, usage_store=None) -> tuple[LLMClient, ScriptedProvider]:
        provider = ScriptedProvider(replies)
        llm = LLMClient(LLMConfig(), provider=provider, usage_store=usage_store)
        return llm, provider

    return _make


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior Backend Engineer - Acme Payments

About us:
Acme Payments builds the settlement platform used by 2,000 merchants.

Responsibilities:
- Design and build high-throughput payment APIs
- Own the reliability of the ledger service
- Mentor two junior engineers

Requirements:
- 5+ years of backend development with Python or Go
- Production experience with PostgreSQL and Kafka
- Experience with PCI-DSS compliant systems

Nice to have:
- Kubernetes operations experience
- Open source contributions
"""


@pytest.fixture
def sample_resume_text() -> str:
    return """Jane Doe
jane@example.com | +1 555 0100

Experience:
- Globex (2020 - Present) - Backend Engineer
  - Built Python/FastAPI services handling 3M requests per day
  - Cut PostgreSQL query latency by 40% through indexing work

- Initech (2017 - 2020) - Software Engineer
  - Maintained Django REST APIs on AWS

Education:
- BSc Computer Science, State University (2013 - 2017)

Skills: Python, Go, PostgreSQL, Redis, Docker, AWS
"""


@pytest.fixture
def sample_chinese_jd() -> str:
    return """高级后端工程师

岗位职责：
- 负责支付核心系统的设计与开发
- 参与团队技术方案评审

任职要求：
- 五年以上后端开发工作经验，熟悉分布式系统
- 精通 Python 或 Go，熟悉数据库优化
"""
