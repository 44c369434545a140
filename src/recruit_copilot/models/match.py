"""Pydantic models for Resume Matcher output."""

from __future__ import annotations

from pydantic import Field

from recruit_copilot.models.base import CamelModel, Score, StrList


class ResumeAnalysis(CamelModel):
    candidate_name: str = "Unknown"
    total_years_experience: str = "Unknown"
    current_role: str = "Unknown"
    technical_skills: StrList = []
    soft_skills: StrList = []
    industries: StrList = []
    education_level: str = "Unknown"
    certifications: StrList = []
    key_achievements: StrList = []


class JDAnalysis(CamelModel):
    job_title: str = "Unknown"
    seniority_level: str = "Unknown"
    required_years_experience: str = "Unknown"
    must_have_skills: StrList = []
    nice_to_have_skills: StrList = []
    industry_focus: str = "Unknown"
    key_responsibilities: StrList = []


# --- must-haves ---


class MustHaveSkill(CamelModel):
    skill: str = ""
    reason: str = ""
    explicitly_stated: bool = False


class MustHaveExperience(CamelModel):
    experience: str = ""
    reason: str = ""
    minimum_years: str = ""


class MustHaveQualification(CamelModel):
    qualification: str = ""
    reason: str = ""


class ExtractedMustHaves(CamelModel):
    skills: list[MustHaveSkill] = []
    experiences: list[MustHaveExperience] = []
    qualifications: list[MustHaveQualification] = []


class MatchedSkill(CamelModel):
    skill: str = ""
    candidate_evidence: str = ""
    proficiency: str = ""


class MissingSkill(CamelModel):
    skill: str = ""
    severity: str = ""  # Dealbreaker / Critical / Significant
    can_be_learned_quickly: bool = False
    alternative_evidence: str = ""


class MatchedExperience(CamelModel):
    experience: str = ""
    candidate_evidence: str = ""
    exceeds: bool = False


class MissingExperience(CamelModel):
    experience: str = ""
    severity: str = ""
    gap: str = ""
    partially_met: str = ""


class MissingQualification(CamelModel):
    qualification: str = ""
    severity: str = ""
    alternative: str = ""


class MustHaveEvaluation(CamelModel):
    meets_all_must_haves: bool = False
    matched_skills: list[MatchedSkill] = []
    missing_skills: list[MissingSkill] = []
    matched_experiences: list[MatchedExperience] = []
    missing_experiences: list[MissingExperience] = []
    matched_qualifications: StrList = []
    missing_qualifications: list[MissingQualification] = []


class MustHaveAnalysis(CamelModel):
    extracted_must_haves: ExtractedMustHaves = Field(default_factory=ExtractedMustHaves)
    candidate_evaluation: MustHaveEvaluation = Field(default_factory=MustHaveEvaluation)
    must_have_score: Score = 0
    disqualified: bool = False
    disqualification_reasons: StrList = []
    gap_analysis: str = "Unable to analyze"

    def missing_severities(self) -> list[str]:
        ev = self.candidate_evaluation
        items = [*ev.missing_skills, *ev.missing_experiences, *ev.missing_qualifications]
        return [item.severity.strip().lower() for item in items if item.severity]


# --- nice-to-haves ---


class NiceToHaveSkill(CamelModel):
    skill: str = ""
    value_add: str = ""


class NiceToHaveExperience(CamelModel):
    experience: str = ""
    value_add: str = ""


class NiceToHaveQualification(CamelModel):
    qualification: str = ""
    value_add: str = ""


class ExtractedNiceToHaves(CamelModel):
    skills: list[NiceToHaveSkill] = []
    experiences: list[NiceToHaveExperience] = []
    qualifications: list[NiceToHaveQualification] = []


class NiceToHaveEvaluation(CamelModel):
    matched_skills: StrList = []
    matched_experiences: StrList = []
    matched_qualifications: StrList = []
    bonus_skills: StrList = []


class NiceToHaveAnalysis(CamelModel):
    extracted_nice_to_haves: ExtractedNiceToHaves = Field(default_factory=ExtractedNiceToHaves)
    candidate_evaluation: NiceToHaveEvaluation = Field(default_factory=NiceToHaveEvaluation)
    nice_to_have_score: Score = 0
    competitive_advantage: str = "Unable to analyze"


# --- skills / experience ---


class MatchedMustHave(CamelModel):
    skill: str = ""
    proficiency_level: str = ""
    evidence_from_resume: str = ""


class MissingMustHave(CamelModel):
    skill: str = ""
    importance: str = ""
    mitigation_possibility: str = ""


class SkillMatch(CamelModel):
    matched_must_have: list[MatchedMustHave] = []
    missing_must_have: list[MissingMustHave] = []
    matched_nice_to_have: StrList = []
    missing_nice_to_have: StrList = []
    additional_relevant_skills: StrList = []


class SkillScoreBreakdown(CamelModel):
    must_have_score: Score = 0
    nice_to_have_score: Score = 0
    depth_of_expertise: Score = 0


class CredibilityFlags(CamelModel):
    has_red_flags: bool = False
    concerns: StrList = []
    positive_indicators: StrList = []


class SkillMatchScore(CamelModel):
    score: Score = 0
    breakdown: SkillScoreBreakdown = Field(default_factory=SkillScoreBreakdown)
    skill_application_analysis: str = "Unable to analyze"
    credibility_flags: CredibilityFlags = Field(default_factory=CredibilityFlags)


class ExperienceMatch(CamelModel):
    required: str = "Unknown"
    candidate: str = "Unknown"
    years_gap: str = "Unknown"
    assessment: str = "Unable to parse response"


class ExperienceGap(CamelModel):
    area: str = ""
    severity: str = ""
    can_be_addressed: str = ""


class ExperienceStrength(CamelModel):
    area: str = ""
    impact: str = ""


class ExperienceValidation(CamelModel):
    score: Score = 0
    relevance_to_role: str = "Unknown"
    gaps: list[ExperienceGap] = []
    strengths: list[ExperienceStrength] = []
    career_progression: str = "Unable to analyze"


class CandidatePotential(CamelModel):
    growth_trajectory: str = "Unable to analyze"
    leadership_indicators: StrList = []
    learning_agility: str = "Unable to analyze"
    unique_value_props: StrList = []
    culture_fit_indicators: StrList = []
    risk_factors: StrList = []


# --- overall ---


class OverallScoreBreakdown(CamelModel):
    skill_match_weight: int = 40
    skill_match_score: Score = 0
    experience_weight: int = 35
    experience_score: Score = 0
    potential_weight: int = 25
    potential_score: Score = 0


class OverallMatchScore(CamelModel):
    score: Score = 0
    grade: str = "F"  # A+/A/B+/B/C+/C/D/F
    breakdown: OverallScoreBreakdown = Field(default_factory=OverallScoreBreakdown)
    confidence: str = "Low"


class OverallFit(CamelModel):
    verdict: str = "Unable to Assess"
    summary: str = ""
    top_reasons: StrList = []
    interview_focus: StrList = []
    hiring_recommendation: str = "Unable to determine"
    suggested_role: str = ""


class Recommendations(CamelModel):
    for_recruiter: StrList = []
    for_candidate: StrList = []
    interview_questions: StrList = []


class InterviewQuestion(CamelModel):
    question: str = ""
    purpose: str = ""
    look_for: StrList = []
    follow_ups: StrList = []
    difficulty: str = ""  # Basic/Intermediate/Advanced/Expert
    time_estimate: str = ""


class InterviewQuestionCategory(CamelModel):
    area: str = ""
    sub_area: str = ""
    questions: list[InterviewQuestion] = []


class SuggestedInterviewQuestions(CamelModel):
    technical: list[InterviewQuestionCategory] = []
    behavioral: list[InterviewQuestionCategory] = []
    experience_validation: list[InterviewQuestionCategory] = []
    situational: list[InterviewQuestionCategory] = []
    culture_fit: list[InterviewQuestionCategory] = []
    red_flag_probing: list[InterviewQuestionCategory] = []


class ProbingSubArea(CamelModel):
    name: str = ""
    specific_concerns: StrList = []
    validation_questions: StrList = []
    green_flags: StrList = []
    red_flags: StrList = []


class ProbingArea(CamelModel):
    area: str = ""
    priority: str = ""  # Critical/High/Medium/Low
    reason: str = ""
    sub_areas: list[ProbingSubArea] = []
    suggested_approach: str = ""


class MatchResult(CamelModel):
    resume_analysis: ResumeAnalysis = Field(default_factory=ResumeAnalysis)
    jd_analysis: JDAnalysis = Field(default_factory=JDAnalysis)
    must_have_analysis: MustHaveAnalysis = Field(default_factory=MustHaveAnalysis)
    nice_to_have_analysis: NiceToHaveAnalysis = Field(default_factory=NiceToHaveAnalysis)
    skill_match: SkillMatch = Field(default_factory=SkillMatch)
    skill_match_score: SkillMatchScore = Field(default_factory=SkillMatchScore)
    experience_match: ExperienceMatch = Field(default_factory=ExperienceMatch)
    experience_validation: ExperienceValidation = Field(default_factory=ExperienceValidation)
    candidate_potential: CandidatePotential = Field(default_factory=CandidatePotential)
    overall_match_score: OverallMatchScore = Field(default_factory=OverallMatchScore)
    overall_fit: OverallFit = Field(default_factory=OverallFit)
    recommendations: Recommendations = Field(default_factory=Recommendations)
    suggested_interview_questions: SuggestedInterviewQuestions = Field(
        default_factory=SuggestedInterviewQuestions
    )
    areas_to_probe_deeper: list[ProbingArea] = []


def default_match_result(response: str) -> MatchResult:
    """Degraded record used when the model reply cannot be parsed."""
    return MatchResult(
        overall_fit=OverallFit(
            summary=response[:500],
            top_reasons=["Unable to process the match analysis"],
        ),
        recommendations=Recommendations(
            for_recruiter=["Unable to generate recommendations - parsing failed"],
        ),
    )
