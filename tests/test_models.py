"""Tests for the structured agent output models."""

import pytest

from recruit_copilot.models.base import CamelModel, Score
from recruit_copilot.models.consultant import RecruitmentChatContext
from recruit_copilot.models.evaluation import InterviewEvaluation, default_interview_evaluation
from recruit_copilot.models.invitation import InvitationAck, InvitationEmail
from recruit_copilot.models.job import ParsedJD, RequirementsDetailed, default_parsed_jd
from recruit_copilot.models.match import MatchResult, default_match_result
from recruit_copilot.models.resume import ParsedResume, SkillsDetailed, default_parsed_resume


class _Scored(CamelModel):
    value: Score = 0


class TestScore:
    @pytest.mark.parametrize(
        "raw,expected",
        [(87, 87), (87.6, 88), ("72", 72), ("72/100", 72), ("65%", 65), (140, 100), (-5, 0)],
    )
    def test_coercion(self, raw, expected):
        assert _Scored(value=raw).value == expected

    @pytest.mark.parametrize("raw", ["high", True, [], {}])
    def test_garbage_is_zero(self, raw):
        assert _Scored(value=raw).value == 0


class TestCamelModel:
    def test_accepts_camel_case(self):
        jd = ParsedJD.model_validate({"jobOverview": "Build things", "workType": "Remote"})
        assert jd.job_overview == "Build things"
        assert jd.work_type == "Remote"

    def test_nulls_mean_default(self):
        jd = ParsedJD.model_validate({"title": None, "responsibilities": None})
        assert jd.title == ""
        assert jd.responsibilities == []

    def test_unknown_keys_are_ignored(self):
        email = InvitationEmail.model_validate({"subject": "Hi", "body": "x", "tone": "warm"})
        assert email.subject == "Hi"

    def test_numbers_in_text_fields_become_strings(self):
        result = MatchResult.model_validate(
            {"resumeAnalysis": {"totalYearsExperience": 7}, "jdAnalysis": {"requiredYearsExperience": 4.5}}
        )
        assert result.resume_analysis.total_years_experience == "7"
        assert result.jd_analysis.required_years_experience == "4.5"

    @pytest.mark.parametrize("raw,expected", [("Rust", ["Rust"]), ("  ", []), (3, ["3"])])
    def test_lone_value_becomes_list(self, raw, expected):
        assert ParsedJD.model_validate({"benefits": raw}).benefits == expected

    def test_to_json_dict_uses_camel_case(self):
        data = InterviewEvaluation(overall_score=80).to_json_dict()
        assert data["overallScore"] == 80
        assert "overall_score" not in data


class TestParsedJD:
    def test_detailed_requirements(self):
        jd = ParsedJD.model_validate(
            {"requirements": {"mustHave": ["5+ years Python"], "niceToHave": ["Kafka"]}}
        )
        assert isinstance(jd.requirements, RequirementsDetailed)
        assert jd.must_haves == ["5+ years Python"]

    def test_flat_requirements(self):
        jd = ParsedJD.model_validate({"requirements": ["Python", "SQL"]})
        assert jd.must_haves == ["Python", "SQL"]

    def test_default_keeps_raw_text(self):
        jd = default_parsed_jd("original text")
        assert jd.raw_text == "original text"
        assert jd.title == ""


class TestParsedResume:
    def test_detailed_skills(self):
        resume = ParsedResume.model_validate(
            {"name": "Jane", "skills": {"technical": ["Python"], "tools": ["Docker"]}}
        )
        assert isinstance(resume.skills, SkillsDetailed)
        assert resume.skills.tools == ["Docker"]

    def test_flat_skills(self):
        resume = ParsedResume.model_validate({"skills": ["Python", "Go"]})
        assert resume.skills == ["Python", "Go"]

    def test_education_field_of_study(self):
        resume = ParsedResume.model_validate(
            {"education": [{"institution": "State U", "field": "Computer Science"}]}
        )
        assert resume.education[0].field == "Computer Science"

    def test_default(self):
        resume = default_parsed_resume("raw")
        assert resume.summary == "Unable to parse resume"
        assert resume.raw_text == "raw"


class TestMatchResult:
    def test_partial_reply_fills_defaults(self):
        result = MatchResult.model_validate({"overallMatchScore": {"score": "81", "grade": "A"}})
        assert result.overall_match_score.score == 81
        assert result.overall_match_score.breakdown.skill_match_weight == 40
        assert result.overall_fit.verdict == "Unable to Assess"
        assert result.areas_to_probe_deeper == []

    def test_missing_severities(self):
        result = MatchResult.model_validate(
            {
                "mustHaveAnalysis": {
                    "candidateEvaluation": {
                        "missingSkills": [{"skill": "Kafka", "severity": "Critical"}],
                        "missingQualifications": [
                            {"qualification": "CPA", "severity": " Dealbreaker "}
                        ],
                        "missingExperiences": [{"experience": "Team lead"}],
                    }
                }
            }
        )
        assert sorted(result.must_have_analysis.missing_severities()) == [
            "critical",
            "dealbreaker",
        ]

    def test_default_match_result(self):
        result = default_match_result("x" * 800)
        assert len(result.overall_fit.summary) == 500
        assert result.overall_fit.top_reasons == ["Unable to process the match analysis"]
        assert result.recommendations.for_recruiter == [
            "Unable to generate recommendations - parsing failed"
        ]
        assert result.overall_match_score.score == 0
        assert result.overall_match_score.grade == "F"


class TestInterviewEvaluation:
    def test_standard_recommendation(self):
        assert InterviewEvaluation(hiring_recommendation="Strong Hire").is_standard_recommendation

    def test_free_text_recommendation_kept(self):
        evaluation = InterviewEvaluation.model_validate({"hiringRecommendation": "Lean hire"})
        assert evaluation.hiring_recommendation == "Lean hire"
        assert not evaluation.is_standard_recommendation

    def test_default(self):
        evaluation = default_interview_evaluation()
        assert evaluation.key_insights == ["Unable to parse evaluation"]
        assert evaluation.hiring_recommendation == "Unable to evaluate"
        assert evaluation.overall_score == 0


class TestInvitation:
    def test_email_defaults(self):
        assert InvitationEmail().subject == "Interview Invitation"

    def test_ack_is_snake_case_on_the_wire(self):
        ack = InvitationAck.model_validate(
            {"email": "jane@example.com", "name": "Jane", "job_title": "Engineer", "user_id": 42}
        )
        assert ack.user_id == 42
        assert ack.to_json_dict()["job_title"] == "Engineer"


class TestChatContext:
    def test_camel_case_context(self):
        context = RecruitmentChatContext.model_validate(
            {"employmentType": "Full-time", "mustHaves": ["Go"], "jobDescription": "JD"}
        )
        assert context.employment_type == "Full-time"
        assert context.must_haves == ["Go"]
