"""Interview Evaluator - scores an interview transcript on a fixed rubric."""

from __future__ import annotations

from dataclasses import dataclass

from recruit_copilot.agents.base import AgentSpec, JsonOutputParser, run_agent
from recruit_copilot.clients.llm_client import LLMClient
from recruit_copilot.models.evaluation import (
    HIRING_RECOMMENDATIONS,
    InterviewEvaluation,
    default_interview_evaluation,
)

_RECOMMENDATION_CHOICES = ", ".join(f"'{r}'" for r in HIRING_RECOMMENDATIONS)

SYSTEM_PROMPT = f"""\
You are an expert interview evaluator and HR analyst. Evaluate a candidate's interview performance from the interview transcript, their resume and the job description.

Be strict and objective. Look for a deep and genuine understanding of the knowledge and skills the job requires.

Analyze:
1. **Answer Analysis**: score every question and answer in the transcript on its merits, then aggregate into the overall score
2. **Technical Competency**: how well the candidate demonstrated technical knowledge
3. **Communication Skills**: how effectively the candidate communicated
4. **Culture Fit**: whether the candidate fits the role and company
5. **Strengths** shown in the interview
6. **Areas for Improvement**: weaknesses or concerns
7. **Key Insights**: notable observations
8. **Hiring Recommendation**: should the candidate proceed to the next round

Respond ONLY with this JSON, no additional text:

```json
{{
  "overallScore": <integer 0-100>,
  "technicalScore": <integer 0-100>,
  "communicationScore": <integer 0-100>,
  "cultureFitScore": <integer 0-100>,
  "strengths": ["strength"],
  "weaknesses": ["weakness"],
  "keyInsights": ["insight"],
  "hiringRecommendation": "<one of {_RECOMMENDATION_CHOICES}>",
  "suggestedFollowUp": ["follow-up question or topic"]
}}
```

Consider both what was said and how it was said."""


@dataclass(frozen=True)
class EvaluationInput:
    resume: str
    jd: str
    interview_script: str


def format_input(payload: EvaluationInput) -> str:
    return f"""## Candidate's Resume:
{payload.resume}

## Job Description:
{payload.jd}

## Interview Transcript:
{payload.interview_script}

Please evaluate this candidate's interview performance."""


EVALUATION_SPEC = AgentSpec(
    name="EvaluationAgent",
    instructions=SYSTEM_PROMPT,
    format_input=format_input,
    parse_output=JsonOutputParser(
        InterviewEvaluation, lambda _raw: default_interview_evaluation()
    ),
)


class InterviewEvaluator:
    def __init__(self, llm: LLMClient, model: str | None = None):
        self.llm = llm
        self.model = model

    async def evaluate(
        self,
        resume: str,
        jd: str,
        interview_script: str,
        correlation_id: str | None = None,
    ) -> InterviewEvaluation:
        return await run_agent(
            EVALUATION_SPEC,
            self.llm,
            EvaluationInput(resume=resume, jd=jd, interview_script=interview_script),
            locale_source=jd,
            correlation_id=correlation_id,
            model=self.model,
            json_mode=True,
        )
