"""Invitation drafting - writes a personalised interview invitation email."""

from __future__ import annotations

from dataclasses import dataclass

from recruit_copilot.agents.base import AgentSpec, JsonOutputParser, run_agent
from recruit_copilot.clients.llm_client import LLMClient
from recruit_copilot.models.invitation import InvitationEmail

SYSTEM_PROMPT = """\
You are a professional HR recruiter writing interview invitation emails. Create a personalised, warm and professional invitation for the candidate.

The email should:
1. Address the candidate by name (taken from the resume)
2. Name the specific position
3. Say why they were selected, based on how their qualifications match the JD
4. Stay professional yet welcoming
5. End with a clear call to action

Respond ONLY with this JSON, no additional text:

```json
{
  "subject": "<email subject line>",
  "body": "<full email body, use \\n for line breaks>"
}
```

Make it read as genuine, not templated: reference specific skills or experience from the resume."""


@dataclass(frozen=True)
class InvitationInput:
    resume: str
    jd: str


def format_input(payload: InvitationInput) -> str:
    return f"""## Candidate's Resume:
{payload.resume}

## Job Description:
{payload.jd}

Please generate a professional interview invitation email for this candidate."""


def default_invitation(raw: str) -> InvitationEmail:
    return InvitationEmail(body=raw)


INVITE_SPEC = AgentSpec(
    name="InviteAgent",
    instructions=SYSTEM_PROMPT,
    format_input=format_input,
    parse_output=JsonOutputParser(InvitationEmail, default_invitation),
)


class InviteAgent:
    """Drafts the email with the LLM.

    Sending through the external invitation service is InvitationClient's
    job; both take ``(resume, jd, ...)``.
    """

    def __init__(self, llm: LLMClient, model: str | None = None):
        self.llm = llm
        self.model = model

    async def generate_invitation(
        self, resume: str, jd: str, correlation_id: str | None = None
    ) -> InvitationEmail:
        return await run_agent(
            INVITE_SPEC,
            self.llm,
            InvitationInput(resume=resume, jd=jd),
            locale_source=jd,
            correlation_id=correlation_id,
            model=self.model,
            json_mode=True,
        )
