"""Data models for the recruiting agents."""

from recruit_copilot.models.chat import ChatMessage, ChatOptions, ChatResult, TokenUsage
from recruit_copilot.models.consultant import (
    RecruitmentChatContext,
    RecruitmentChatInput,
    RecruitmentChatResult,
)
from recruit_copilot.models.evaluation import InterviewEvaluation
from recruit_copilot.models.invitation import InvitationAck, InvitationEmail
from recruit_copilot.models.job import ParsedJD
from recruit_copilot.models.match import MatchResult
from recruit_copilot.models.resume import ParsedResume

__all__ = [
    "ChatMessage",
    "ChatOptions",
    "ChatResult",
    "InterviewEvaluation",
    "InvitationAck",
    "InvitationEmail",
    "MatchResult",
    "ParsedJD",
    "ParsedResume",
    "RecruitmentChatContext",
    "RecruitmentChatInput",
    "RecruitmentChatResult",
    "TokenUsage",
]
