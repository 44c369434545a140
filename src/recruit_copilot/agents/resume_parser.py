"""Resume Parser - lossless extraction of a resume into ParsedResume."""

from __future__ import annotations

from dataclasses import dataclass

from recruit_copilot.agents.base import AgentSpec, JsonOutputParser, run_agent
from recruit_copilot.clients.llm_client import LLMClient
from recruit_copilot.models.resume import ParsedResume, default_parsed_resume

SYSTEM_PROMPT = """\
You are an expert resume parser. Extract ALL information from the resume text into a structured format.

## CRITICAL INSTRUCTION - DO NOT LOSE ANY CONTENT:
- Extract EVERY piece of information from the resume
- Do NOT summarize or truncate any descriptions
- Include the COMPLETE text of each job, project and achievement description
- Every bullet point, every sentence, every detail must be preserved
- If a job has several bullet points, include ALL of them in its description
- Copy the EXACT text from the resume - do not paraphrase or shorten

Extract:
1. **Personal Information**: name, email, phone, address, LinkedIn, GitHub, portfolio
2. **Professional Summary / Objective**: the COMPLETE summary text
3. **Skills**: technical, soft, languages, tools, frameworks
4. **Work Experience**: COMPLETE details for EACH position
5. **Projects**: every project with its COMPLETE description
6. **Education**: every entry
7. **Certifications**: with dates
8. **Awards / Achievements**
9. **Languages** spoken
10. **Other Sections**: volunteer work, publications, patents, anything else

Respond ONLY with this JSON, no additional text:

```json
{
  "name": "<full name>",
  "email": "<email or empty string>",
  "phone": "<phone or empty string>",
  "address": "<address>",
  "linkedin": "<LinkedIn URL>",
  "github": "<GitHub URL>",
  "portfolio": "<portfolio URL>",
  "skills": {
    "technical": ["skill"],
    "soft": ["skill"],
    "languages": ["language"],
    "tools": ["tool"],
    "frameworks": ["framework"],
    "other": ["other skill"]
  },
  "experience": [
    {
      "company": "<company>",
      "role": "<job title>",
      "location": "<location>",
      "startDate": "<start date>",
      "endDate": "<end date or 'Present'>",
      "duration": "<calculated duration>",
      "description": "<COMPLETE description - ALL bullet points exactly as written>",
      "achievements": ["<achievement - complete text>"],
      "technologies": ["tech"]
    }
  ],
  "projects": [
    {
      "name": "<project>",
      "role": "<role>",
      "date": "<date/duration>",
      "description": "<COMPLETE description>",
      "technologies": ["tech"],
      "link": "<link>"
    }
  ],
  "education": [
    {
      "institution": "<school>",
      "degree": "<degree>",
      "field": "<field of study>",
      "startDate": "<start date>",
      "endDate": "<graduation date>",
      "gpa": "<GPA>",
      "achievements": ["<honors, activities>"],
      "coursework": ["<course>"]
    }
  ],
  "certifications": [
    {"name": "<name>", "issuer": "<issuer>", "date": "<date>", "expiryDate": "<expiry>", "credentialId": "<id>"}
  ],
  "awards": [
    {"name": "<award>", "issuer": "<issuer>", "date": "<date>", "description": "<description>"}
  ],
  "languages": [
    {"language": "<language>", "proficiency": "<level>"}
  ],
  "volunteerWork": [
    {"organization": "<organization>", "role": "<role>", "duration": "<period>", "description": "<COMPLETE description>"}
  ],
  "publications": ["<complete citation>"],
  "patents": ["<complete info>"],
  "summary": "<COMPLETE professional summary exactly as written>",
  "otherSections": {
    "<section name>": "<COMPLETE content>"
  }
}
```

REMEMBER: Include EVERY word, EVERY bullet point, EVERY detail from the original resume. Do NOT summarize or abbreviate anything."""


@dataclass(frozen=True)
class ResumeParseInput:
    resume_text: str


def format_input(payload: ResumeParseInput) -> str:
    return f"""## Resume Text:
{payload.resume_text}

Please parse this resume and extract structured information."""


RESUME_PARSE_SPEC = AgentSpec(
    name="ResumeParseAgent",
    instructions=SYSTEM_PROMPT,
    format_input=format_input,
    parse_output=JsonOutputParser(ParsedResume, default_parsed_resume),
)


class ResumeParser:
    def __init__(self, llm: LLMClient, model: str | None = None):
        self.llm = llm
        self.model = model

    async def parse(self, resume_text: str, correlation_id: str | None = None) -> ParsedResume:
        """Parse a resume. ``raw_text`` always echoes the input."""
        result = await run_agent(
            RESUME_PARSE_SPEC,
            self.llm,
            ResumeParseInput(resume_text),
            correlation_id=correlation_id,
            model=self.model,
            json_mode=True,
        )
        return result.model_copy(update={"raw_text": resume_text})
