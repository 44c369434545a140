"""JD Writer - drafts a Markdown job description and suggests a title."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from recruit_copilot.agents.base import AgentSpec, run_agent
from recruit_copilot.clients.llm_client import LLMClient
from recruit_copilot.language import LanguageDetector

logger = logging.getLogger(__name__)

MAX_REQUIREMENTS_CHARS = 4000
MAX_EXISTING_JD_CHARS = 6000
MAX_TITLE_CONTEXT_CHARS = 3000
DEFAULT_TITLE = "New Hiring Request"

DRAFT_PROMPT = """\
You are a senior recruitment consultant and job description strategist.
Create a clear, concise and market-ready job description in the response language, optimised for SEO, job boards and ATS screening.

Guidelines:
- Output Markdown only. Do not wrap the response in code fences.
- Use a top-level heading for the job title, then section headings for: Overview, Responsibilities, Requirements, Nice-to-haves, Benefits.
- Headings must be in the response language.
- Keep wording professional, specific and scannable.
- Naturally include key skills, tools and role keywords from the inputs. Avoid keyword stuffing.
- Use industry-standard role naming and seniority when the inputs support it.
- Use bullet lists for Responsibilities and Requirements.
- If an existing JD is provided, refine it for clarity, structure and ATS alignment while honouring the new requirements.
- If information is missing, write a short "TBD" line for that section.
- Do not invent company-specific details, benefits or compensation."""

TITLE_PROMPT = """\
You are a senior recruiter. Generate a concise, professional job title for this hiring request.
Rules:
- Output ONLY the title.
- Keep it short (2-6 words or equivalent length), max 60 characters.
- Use professional wording appropriate to the role.
- No quotes, bullets, or extra commentary."""

_LIST_PREFIX = re.compile(r"^[-*•\d.\s]+")
_QUOTES = re.compile(r"^[\"'`]+|[\"'`]+$")


@dataclass(frozen=True)
class DraftInput:
    title: str = ""
    requirements: str = ""
    job_description: str = ""

    def is_empty(self) -> bool:
        return not (self.title or self.requirements or self.job_description)

    @property
    def language_source(self) -> str:
        return self.job_description or self.requirements or self.title


def format_draft_input(payload: DraftInput) -> str:
    parts = []
    if payload.title:
        parts.append(f"Title: {payload.title}")
    if payload.requirements:
        parts.append(f"Requirements and context:\n{payload.requirements[:MAX_REQUIREMENTS_CHARS]}")
    if payload.job_description:
        parts.append(
            f"Existing JD (revise and improve):\n{payload.job_description[:MAX_EXISTING_JD_CHARS]}"
        )
    return "\n\n".join(parts)


def format_title_input(payload: DraftInput) -> str:
    parts = []
    if payload.title:
        parts.append(f"Role: {payload.title}")
    if payload.requirements:
        parts.append(f"Requirements:\n{payload.requirements[:MAX_TITLE_CONTEXT_CHARS]}")
    if payload.job_description:
        parts.append(f"Job description:\n{payload.job_description[:MAX_TITLE_CONTEXT_CHARS]}")
    return "\n\n".join(parts)


def clean_title(response: str) -> str:
    """First non-empty line without list markers or surrounding quotes."""
    line = next((ln for ln in response.strip().splitlines() if ln.strip()), "")
    line = _LIST_PREFIX.sub("", line).strip()
    return _QUOTES.sub("", line).strip()


DRAFT_SPEC = AgentSpec(
    name="CreateJDAgent",
    instructions=DRAFT_PROMPT,
    format_input=format_draft_input,
    parse_output=str.strip,
    temperature=0.4,
)

TITLE_SPEC = AgentSpec(
    name="TitleSuggestionAgent",
    instructions=TITLE_PROMPT,
    format_input=format_title_input,
    parse_output=clean_title,
    temperature=0.2,
)


def _draft_input(title: str, requirements: str, job_description: str) -> DraftInput:
    draft = DraftInput(
        title=(title or "").strip(),
        requirements=(requirements or "").strip(),
        job_description=(job_description or "").strip(),
    )
    if draft.is_empty():
        raise ValueError("title, requirements or job description is required")
    return draft


class JDWriter:
    def __init__(self, llm: LLMClient, model: str | None = None):
        self.llm = llm
        self.model = model

    async def generate(
        self,
        title: str = "",
        requirements: str = "",
        job_description: str = "",
        language: str | None = None,
        correlation_id: str | None = None,
    ) -> str:
        """Return a Markdown JD draft, revising ``job_description`` when given."""
        draft = _draft_input(title, requirements, job_description)
        return await run_agent(
            DRAFT_SPEC,
            self.llm,
            draft,
            locale_source=draft.language_source,
            preferred_language=LanguageDetector.language_from_locale(language),
            correlation_id=correlation_id,
            model=self.model,
        )

    async def suggest_title(
        self,
        role: str = "",
        requirements: str = "",
        job_description: str = "",
        language: str | None = None,
        correlation_id: str | None = None,
    ) -> str:
        draft = _draft_input(role, requirements, job_description)
        title = await run_agent(
            TITLE_SPEC,
            self.llm,
            draft,
            locale_source=draft.language_source,
            preferred_language=LanguageDetector.language_from_locale(language),
            correlation_id=correlation_id,
            model=self.model,
        )
        title = title or draft.title or DEFAULT_TITLE
        logger.info("Suggested title (%d chars) correlation_id=%s", len(title), correlation_id)
        return title
