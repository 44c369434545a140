"""Resume Matcher - scores a candidate against a job description.

The model is told the scoring caps below; ``apply_must_have_caps`` enforces
them again on whatever comes back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from recruit_copilot.agents.base import AgentSpec, JsonOutputParser, run_agent
from recruit_copilot.clients.llm_client import LLMClient
from recruit_copilot.models.match import MatchResult, default_match_result

logger = logging.getLogger(__name__)

# Highest overall score allowed when a must-have of this severity is missing.
SEVERITY_CAPS = {"dealbreaker": 25, "critical": 45, "significant": 65}
DEALBREAKER_MUST_HAVE_SCORE_CAP = 20

# (label, lowest overall score for the label), best first
GRADE_BANDS = [
    ("A+", 95), ("A", 85), ("B+", 75), ("B", 65), ("C+", 55), ("C", 45), ("D", 30), ("F", 0),
]
VERDICT_BANDS = [
    ("Strong Match", 85), ("Good Match", 70), ("Moderate Match", 50), ("Weak Match", 30),
    ("Not Qualified", 0),
]
RECOMMENDATION_BANDS = [
    ("Strongly Recommend", 85), ("Recommend", 70), ("Consider", 50), ("Not Recommended", 0),
]


def _describe(bands: list[tuple[str, int]], quote: bool = False) -> str:
    parts = []
    upper = 100
    for label, floor in bands:
        name = f'"{label}"' if quote else label
        parts.append(f"{name} ({floor}-{upper})")
        upper = floor - 1
    return ", ".join(parts)


SYSTEM_PROMPT = f"""\
You are an expert HR consultant and technical recruiter with deep experience evaluating candidates. Your assessment must be rigorous and evidence-based.

## STEP 1: EXTRACT MUST-HAVES AND NICE-TO-HAVES
Before scoring, read the job description and list:
- **Must-haves**: explicitly required skills, experiences and qualifications ("required", "must have", "minimum", "at least").
- **Nice-to-haves**: preferred or bonus items ("preferred", "plus", "bonus", "ideally").
Judge each must-have against the resume with concrete evidence.

## STEP 2: CRITICAL SCORING RULES
Every missing must-have gets a severity: Dealbreaker, Critical or Significant.
- **Dealbreaker missing** (e.g. a required license, a legally required certification, a core skill with zero evidence): overallMatchScore.score MUST NOT exceed {SEVERITY_CAPS["dealbreaker"]}, grade MUST be "F", overallFit.verdict MUST be "Not Qualified", overallFit.hiringRecommendation MUST be "Disqualified", mustHaveAnalysis.disqualified MUST be true.
- **Critical missing**: overallMatchScore.score MUST NOT exceed {SEVERITY_CAPS["critical"]}.
- **Significant missing**: overallMatchScore.score MUST NOT exceed {SEVERITY_CAPS["significant"]}.
- mustHaveAnalysis.mustHaveScore: 90-100 all must-haves met with strong evidence; 70-89 all met, some with thin evidence; 40-69 one or more Significant gaps; 20-39 Critical gaps; 0-{DEALBREAKER_MUST_HAVE_SCORE_CAP} any Dealbreaker.
- Nice-to-haves only differentiate qualified candidates. They never compensate for missing must-haves.

## STEP 3: SCORE
- skillMatchScore (weight 40), experienceValidation (weight 35), candidatePotential (weight 25).
- Grades by overall score: {_describe(GRADE_BANDS)}.
- Verdicts by overall score: {_describe(VERDICT_BANDS, quote=True)}.
- Hiring recommendations by overall score: {_describe(RECOMMENDATION_BANDS, quote=True)}; "Disqualified" for any Dealbreaker.
- Verify skill claims against actual work. Flag inflated titles, unexplained gaps and skills listed without application.

## STEP 4: INTERVIEW PLAN
Suggest interview questions per category and the areas to probe deeper, prioritised Critical/High/Medium/Low.

Respond ONLY with this JSON, no additional text:

```json
{{
  "resumeAnalysis": {{
    "candidateName": "<name>", "totalYearsExperience": "<years>", "currentRole": "<role>",
    "technicalSkills": ["skill"], "softSkills": ["skill"], "industries": ["industry"],
    "educationLevel": "<level>", "certifications": ["cert"], "keyAchievements": ["achievement"]
  }},
  "jdAnalysis": {{
    "jobTitle": "<title>", "seniorityLevel": "<level>", "requiredYearsExperience": "<years>",
    "mustHaveSkills": ["skill"], "niceToHaveSkills": ["skill"], "industryFocus": "<industry>",
    "keyResponsibilities": ["responsibility"]
  }},
  "mustHaveAnalysis": {{
    "extractedMustHaves": {{
      "skills": [{{"skill": "<skill>", "reason": "<why required>", "explicitlyStated": true}}],
      "experiences": [{{"experience": "<experience>", "reason": "<why>", "minimumYears": "<years>"}}],
      "qualifications": [{{"qualification": "<qualification>", "reason": "<why>"}}]
    }},
    "candidateEvaluation": {{
      "meetsAllMustHaves": false,
      "matchedSkills": [{{"skill": "<skill>", "candidateEvidence": "<evidence>", "proficiency": "<level>"}}],
      "missingSkills": [{{"skill": "<skill>", "severity": "Dealbreaker|Critical|Significant", "canBeLearnedQuickly": false, "alternativeEvidence": "<related evidence>"}}],
      "matchedExperiences": [{{"experience": "<experience>", "candidateEvidence": "<evidence>", "exceeds": false}}],
      "missingExperiences": [{{"experience": "<experience>", "severity": "Dealbreaker|Critical|Significant", "gap": "<gap>", "partiallyMet": "<partial>"}}],
      "matchedQualifications": ["qualification"],
      "missingQualifications": [{{"qualification": "<qualification>", "severity": "Dealbreaker|Critical|Significant", "alternative": "<alternative>"}}]
    }},
    "mustHaveScore": <0-100>,
    "disqualified": false,
    "disqualificationReasons": ["reason"],
    "gapAnalysis": "<analysis>"
  }},
  "niceToHaveAnalysis": {{
    "extractedNiceToHaves": {{
      "skills": [{{"skill": "<skill>", "valueAdd": "<value>"}}],
      "experiences": [{{"experience": "<experience>", "valueAdd": "<value>"}}],
      "qualifications": [{{"qualification": "<qualification>", "valueAdd": "<value>"}}]
    }},
    "candidateEvaluation": {{
      "matchedSkills": ["skill"], "matchedExperiences": ["experience"],
      "matchedQualifications": ["qualification"], "bonusSkills": ["skill"]
    }},
    "niceToHaveScore": <0-100>,
    "competitiveAdvantage": "<advantage>"
  }},
  "skillMatch": {{
    "matchedMustHave": [{{"skill": "<skill>", "proficiencyLevel": "<level>", "evidenceFromResume": "<evidence>"}}],
    "missingMustHave": [{{"skill": "<skill>", "importance": "<importance>", "mitigationPossibility": "<mitigation>"}}],
    "matchedNiceToHave": ["skill"], "missingNiceToHave": ["skill"], "additionalRelevantSkills": ["skill"]
  }},
  "skillMatchScore": {{
    "score": <0-100>,
    "breakdown": {{"mustHaveScore": <0-100>, "niceToHaveScore": <0-100>, "depthOfExpertise": <0-100>}},
    "skillApplicationAnalysis": "<analysis>",
    "credibilityFlags": {{"hasRedFlags": false, "concerns": ["concern"], "positiveIndicators": ["indicator"]}}
  }},
  "experienceMatch": {{"required": "<required>", "candidate": "<candidate>", "yearsGap": "<gap>", "assessment": "<assessment>"}},
  "experienceValidation": {{
    "score": <0-100>, "relevanceToRole": "<relevance>",
    "gaps": [{{"area": "<area>", "severity": "<severity>", "canBeAddressed": "<how>"}}],
    "strengths": [{{"area": "<area>", "impact": "<impact>"}}],
    "careerProgression": "<analysis>"
  }},
  "candidatePotential": {{
    "growthTrajectory": "<trajectory>", "leadershipIndicators": ["indicator"], "learningAgility": "<agility>",
    "uniqueValueProps": ["value"], "cultureFitIndicators": ["indicator"], "riskFactors": ["risk"]
  }},
  "overallMatchScore": {{
    "score": <0-100>, "grade": "<A+|A|B+|B|C+|C|D|F>",
    "breakdown": {{"skillMatchWeight": 40, "skillMatchScore": <0-100>, "experienceWeight": 35, "experienceScore": <0-100>, "potentialWeight": 25, "potentialScore": <0-100>}},
    "confidence": "<High|Medium|Low>"
  }},
  "overallFit": {{
    "verdict": "<verdict>", "summary": "<summary>", "topReasons": ["reason"],
    "interviewFocus": ["focus"], "hiringRecommendation": "<recommendation>", "suggestedRole": "<role>"
  }},
  "recommendations": {{"forRecruiter": ["item"], "forCandidate": ["item"], "interviewQuestions": ["question"]}},
  "suggestedInterviewQuestions": {{
    "technical": [{{"area": "<area>", "subArea": "<sub area>", "questions": [{{"question": "<question>", "purpose": "<purpose>", "lookFor": ["signal"], "followUps": ["follow-up"], "difficulty": "<Basic|Intermediate|Advanced|Expert>", "timeEstimate": "<minutes>"}}]}}],
    "behavioral": [], "experienceValidation": [], "situational": [], "cultureFit": [], "redFlagProbing": []
  }},
  "areasToProbeDeeper": [
    {{"area": "<area>", "priority": "<Critical|High|Medium|Low>", "reason": "<reason>",
      "subAreas": [{{"name": "<name>", "specificConcerns": ["concern"], "validationQuestions": ["question"], "greenFlags": ["flag"], "redFlags": ["flag"]}}],
      "suggestedApproach": "<approach>"}}
  ]
}}
```"""


@dataclass(frozen=True)
class MatchInput:
    resume: str
    jd: str


def format_input(payload: MatchInput) -> str:
    return f"""## Resume:
{payload.resume}

## Job Description:
{payload.jd}

Evaluate this candidate against the job description following the scoring rules."""


def band_for(bands: list[tuple[str, int]], score: int) -> str:
    return next(label for label, floor in bands if score >= floor)


def _no_better_than(label: str, bands: list[tuple[str, int]], score: int) -> str:
    """Downgrade ``label`` to the band of ``score`` if it ranks higher; unknown labels pass."""
    ranks = [name.lower() for name, _ in bands]
    ceiling = band_for(bands, score)
    current = label.strip().lower()
    if current in ranks and ranks.index(current) < ranks.index(ceiling.lower()):
        return ceiling
    return label


def apply_must_have_caps(result: MatchResult) -> MatchResult:
    """Clamp the overall score according to the most severe missing must-have.

    A capped score also gets the grade of its band, and a verdict or
    recommendation better than that band is pulled down to it.
    """
    severities = set(result.must_have_analysis.missing_severities())
    caps = [cap for severity, cap in SEVERITY_CAPS.items() if severity in severities]
    if not caps:
        return result

    capped = result.model_copy(deep=True)
    overall = capped.overall_match_score
    cap = min(caps)
    if overall.score > cap:
        logger.info("Match score %d capped to %d by missing must-haves", overall.score, cap)
        overall.score = cap
        fit = capped.overall_fit
        overall.grade = band_for(GRADE_BANDS, cap)
        fit.verdict = _no_better_than(fit.verdict, VERDICT_BANDS, cap)
        fit.hiring_recommendation = _no_better_than(
            fit.hiring_recommendation, RECOMMENDATION_BANDS, cap
        )

    if "dealbreaker" in severities:
        analysis = capped.must_have_analysis
        overall.grade = "F"
        capped.overall_fit.verdict = "Not Qualified"
        capped.overall_fit.hiring_recommendation = "Disqualified"
        analysis.disqualified = True
        analysis.must_have_score = min(analysis.must_have_score, DEALBREAKER_MUST_HAVE_SCORE_CAP)
        if not analysis.disqualification_reasons:
            analysis.disqualification_reasons = ["Missing a dealbreaker must-have requirement"]
    return capped


MATCH_SPEC = AgentSpec(
    name="ResumeMatchAgent",
    instructions=SYSTEM_PROMPT,
    format_input=format_input,
    parse_output=JsonOutputParser(MatchResult, default_match_result, apply_must_have_caps),
)


class ResumeMatcher:
    def __init__(self, llm: LLMClient, model: str | None = None):
        self.llm = llm
        self.model = model

    async def match(self, resume: str, jd: str, correlation_id: str | None = None) -> MatchResult:
        """Score ``resume`` against ``jd``. The reply language follows the JD."""
        return await run_agent(
            MATCH_SPEC,
            self.llm,
            MatchInput(resume=resume, jd=jd),
            locale_source=jd,
            correlation_id=correlation_id,
            model=self.model,
            json_mode=True,
        )
