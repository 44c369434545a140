"""JD Parser - lossless extraction of a job description into ParsedJD."""

from __future__ import annotations

from dataclasses import dataclass

from recruit_copilot.agents.base import AgentSpec, JsonOutputParser, run_agent
from recruit_copilot.clients.llm_client import LLMClient
from recruit_copilot.models.job import ParsedJD, default_parsed_jd

SYSTEM_PROMPT = """\
You are an expert job description parser. Extract ALL information from the job description text into a structured format.

## CRITICAL INSTRUCTION - DO NOT LOSE ANY CONTENT:
- Extract EVERY piece of information from the job description
- Do NOT summarize or truncate any text
- Include the COMPLETE text of each requirement, responsibility and qualification
- Every bullet point, every sentence, every detail must be preserved
- Copy the EXACT text from the JD - do not paraphrase or shorten
- If there are 20 requirements listed, include ALL 20 in the output

Extract:
1. **Job Title**: the exact position title
2. **Company Information**: company name, about the company, team description
3. **Location**: city, remote options
4. **Job Overview**: the complete summary/overview section
5. **Requirements / Must-Have**: every required skill, experience and qualification
6. **Nice-to-Have / Preferred**: every preferred qualification
7. **Responsibilities**: every duty, complete text for each
8. **Qualifications**: education, certifications, experience, skills
9. **Benefits / Perks**
10. **Salary / Compensation**
11. **Other Information**: any other section (culture, application process, ...)

Respond ONLY with this JSON, no additional text:

```json
{
  "title": "<exact job title>",
  "company": "<company name>",
  "companyDescription": "<COMPLETE 'About Us' section>",
  "team": "<COMPLETE team/department description>",
  "location": "<location details>",
  "workType": "<Remote/Hybrid/On-site/Flexible>",
  "employmentType": "<Full-time/Part-time/Contract/...>",
  "experienceLevel": "<Junior/Mid/Senior/Lead/...>",
  "jobOverview": "<COMPLETE overview section>",
  "requirements": {
    "mustHave": ["<requirement - COMPLETE text exactly as written>"],
    "niceToHave": ["<preferred qualification - COMPLETE text>"]
  },
  "responsibilities": ["<responsibility - COMPLETE text exactly as written>"],
  "qualifications": {
    "education": ["<education requirement>"],
    "certifications": ["<certification requirement>"],
    "experience": ["<experience requirement>"],
    "skills": {
      "technical": ["<skill>"],
      "soft": ["<skill>"],
      "tools": ["<tool>"],
      "languages": ["<programming language>"]
    }
  },
  "benefits": ["<benefit - COMPLETE text>"],
  "compensation": {
    "salary": "<salary range>",
    "bonus": "<bonus>",
    "equity": "<equity/stock>",
    "other": "<other compensation>"
  },
  "applicationProcess": "<application instructions>",
  "deadline": "<application deadline>",
  "contactInfo": "<contact information>",
  "additionalInfo": {
    "<section name>": "<COMPLETE content of any other section>"
  }
}
```

REMEMBER:
- Include EVERY word, EVERY bullet point, EVERY requirement from the original JD
- If the JD has 15 responsibilities, ALL 15 must appear in the output
- Preserve the original wording exactly"""


@dataclass(frozen=True)
class JDParseInput:
    jd_text: str


def format_input(payload: JDParseInput) -> str:
    return f"""## Job Description Text:
{payload.jd_text}

Please parse this job description and extract structured information."""


JD_PARSE_SPEC = AgentSpec(
    name="JDParseAgent",
    instructions=SYSTEM_PROMPT,
    format_input=format_input,
    parse_output=JsonOutputParser(ParsedJD, default_parsed_jd),
)


class JDParser:
    def __init__(self, llm: LLMClient, model: str | None = None):
        self.llm = llm
        self.model = model

    async def parse(self, jd_text: str, correlation_id: str | None = None) -> ParsedJD:
        """Parse a job description. ``raw_text`` always echoes the input."""
        result = await run_agent(
            JD_PARSE_SPEC,
            self.llm,
            JDParseInput(jd_text),
            locale_source=jd_text,
            correlation_id=correlation_id,
            model=self.model,
            json_mode=True,
        )
        return result.model_copy(update={"raw_text": jd_text})
