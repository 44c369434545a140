"""Recruitment Consultant - multi-turn chat that shapes a hiring brief.

The model signals that the user confirmed the brief by ending its reply with
ACTION_MARKER on its own line. The marker is stripped before the reply is
shown and surfaces as ``action="create_request"``.
"""

from __future__ import annotations

from collections.abc import Sequence

from recruit_copilot.agents.base import AgentSpec, run_agent
from recruit_copilot.clients.llm_client import LLMClient
from recruit_copilot.config import ConsultantConfig
from recruit_copilot.language import LanguageDetector
from recruit_copilot.models.chat import ChatMessage
from recruit_copilot.models.consultant import (
    RecruitmentChatContext,
    RecruitmentChatInput,
    RecruitmentChatResult,
)

ACTION_MARKER = "[[ACTION:CREATE_REQUEST]]"

SYSTEM_PROMPT = f"""\
You are a Recruitment Consultant Agent, a senior recruiter with 15+ years across tech, product, sales, operations and leadership roles.

Your job is to help the user define a clear, complete hiring brief. Be confident, practical and concise.

Behavior guidelines:
- When a role is mentioned, infer a baseline set of responsibilities, must-have skills and expected experience from your domain knowledge.
- Recommend improvements and industry-standard requirements tailored to the role.
- Ask targeted clarifying questions to fill gaps: seniority, scope, team context, tech stack, domain knowledge, location/remote, compensation, timeline, interview process.
- Keep the user aligned with a "Summary so far" section in bullet points.
- Separate requirements into: Must-haves, Nice-to-haves, Responsibilities, Tools/Stack, Soft skills, Success metrics.
- If a job description is provided, extract its key requirements and highlight missing or ambiguous items.
- Always respond in the user's selected language. If a preferred language is provided, use it consistently even if the user writes in another language.

Response format (keep it concise):
1) Recommendations (short bullets)
2) Clarifying questions (2-5 questions)
3) Summary so far (bulleted, only what is confirmed)

If the user explicitly confirms they want to proceed (e.g. "yes", "looks good", "create the request"), append this exact line at the end:
{ACTION_MARKER}

Do not explain the marker. Keep it on its own line."""

_CONTEXT_LABELS = (
    ("role", "Role"),
    ("seniority", "Seniority"),
    ("industry", "Industry"),
    ("location", "Location"),
    ("employment_type", "Employment type"),
    ("team_context", "Team context"),
    ("company_stage", "Company stage"),
    ("compensation", "Compensation"),
)


def build_user_message(message: str, context: RecruitmentChatContext | None = None) -> str:
    """Prefix the user's message with a labelled context block, if any field is set."""
    if context is None:
        return message

    lines = [
        f"{label}: {getattr(context, field)}"
        for field, label in _CONTEXT_LABELS
        if getattr(context, field)
    ]
    if context.must_haves:
        lines.append(f"Must-haves: {', '.join(context.must_haves)}")
    if context.nice_to_haves:
        lines.append(f"Nice-to-haves: {', '.join(context.nice_to_haves)}")
    if context.job_description:
        lines.append(f"Job Description:\n{context.job_description}")

    if not lines:
        return message
    context_block = "\n".join(lines)
    return f"Context:\n{context_block}\n\nUser message:\n{message}"


def extract_action(response: str) -> RecruitmentChatResult:
    detected = ACTION_MARKER in response
    return RecruitmentChatResult(
        reply=response.replace(ACTION_MARKER, "").strip(),
        action="create_request" if detected else None,
    )


def trim_history(history: Sequence[ChatMessage], limit: int) -> list[ChatMessage]:
    """Keep the last ``limit`` user/assistant turns with content."""
    turns = [m for m in history if m.role in ("user", "assistant") and m.content.strip()]
    return turns[-limit:]


def format_input(payload: RecruitmentChatInput) -> str:
    return build_user_message(payload.message, payload.context)


CONSULTANT_SPEC = AgentSpec(
    name="RecruitmentConsultantAgent",
    instructions=SYSTEM_PROMPT,
    format_input=format_input,
    parse_output=extract_action,
    temperature=0.6,
)


class RecruitmentConsultant:
    def __init__(
        self,
        llm: LLMClient,
        config: ConsultantConfig | None = None,
        model: str | None = None,
    ):
        self.llm = llm
        self.config = config or ConsultantConfig()
        self.model = model

    def _prepare(self, chat_input: RecruitmentChatInput) -> RecruitmentChatInput:
        message = chat_input.message.strip()
        if not message:
            raise ValueError("message is required")

        context = chat_input.context
        limit = self.config.max_job_description_chars
        if context is not None and len(context.job_description) > limit:
            context = context.model_copy(
                update={"job_description": context.job_description[:limit]}
            )
        return RecruitmentChatInput(
            history=trim_history(chat_input.history, self.config.max_history_messages),
            message=message,
            context=context,
        )

    async def chat(
        self, chat_input: RecruitmentChatInput, correlation_id: str | None = None
    ) -> RecruitmentChatResult:
        prepared = self._prepare(chat_input)
        context = prepared.context or RecruitmentChatContext()
        return await run_agent(
            CONSULTANT_SPEC,
            self.llm,
            prepared,
            locale_source=context.job_description or prepared.message,
            preferred_language=LanguageDetector.language_from_locale(context.language),
            history=prepared.history,
            correlation_id=correlation_id,
            model=self.model,
        )
