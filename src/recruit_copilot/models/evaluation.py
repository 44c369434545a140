"""Pydantic models for Interview Evaluator output."""

from __future__ import annotations

from recruit_copilot.models.base import CamelModel, Score, StrList

HIRING_RECOMMENDATIONS = ("Strong Hire", "Hire", "Maybe", "No Hire", "Strong No Hire")


class InterviewEvaluation(CamelModel):
    overall_score: Score = 0
    technical_score: Score = 0
    communication_score: Score = 0
    culture_fit_score: Score = 0
    strengths: StrList = []
    weaknesses: StrList = []
    key_insights: StrList = []
    hiring_recommendation: str = "Unable to evaluate"
    suggested_follow_up: StrList = []

    @property
    def is_standard_recommendation(self) -> bool:
        return self.hiring_recommendation in HIRING_RECOMMENDATIONS


def default_interview_evaluation() -> InterviewEvaluation:
    return InterviewEvaluation(key_insights=["Unable to parse evaluation"])
