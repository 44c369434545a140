"""Models for the recruiting consultant chat."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from recruit_copilot.models.base import CamelModel, StrList
from recruit_copilot.models.chat import ChatMessage


class RecruitmentChatContext(CamelModel):
    role: str = ""
    seniority: str = ""
    industry: str = ""
    location: str = ""
    employment_type: str = ""
    team_context: str = ""
    company_stage: str = ""
    compensation: str = ""
    must_haves: StrList = []
    nice_to_haves: StrList = []
    job_description: str = ""
    language: str = ""  # preferred locale, e.g. "zh-CN"


class RecruitmentChatInput(BaseModel):
    history: list[ChatMessage] = []
    message: str
    context: RecruitmentChatContext | None = None


class RecruitmentChatResult(BaseModel):
    reply: str
    action: Literal["create_request"] | None = None
