"""Pydantic models for JD Parser output."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from recruit_copilot.models.base import CamelModel, StrList


class RequirementsDetailed(CamelModel):
    must_have: StrList = []
    nice_to_have: StrList = []


class QualificationSkills(CamelModel):
    technical: StrList = []
    soft: StrList = []
    tools: StrList = []
    languages: StrList = []


class QualificationsDetailed(CamelModel):
    education: StrList = []
    certifications: StrList = []
    experience: StrList = []
    skills: QualificationSkills = Field(default_factory=QualificationSkills)


class CompensationInfo(CamelModel):
    salary: str = ""
    bonus: str = ""
    equity: str = ""
    other: str = ""


class ParsedJD(CamelModel):
    title: str = ""
    company: str = ""
    company_description: str = ""
    team: str = ""
    location: str = ""
    work_type: str = ""  # Remote/Hybrid/On-site/Flexible
    employment_type: str = ""
    experience_level: str = ""
    job_overview: str = ""
    requirements: RequirementsDetailed | StrList = []
    responsibilities: StrList = []
    qualifications: QualificationsDetailed | StrList = []
    benefits: StrList = []
    compensation: CompensationInfo = Field(default_factory=CompensationInfo)
    application_process: str = ""
    deadline: str = ""
    contact_info: str = ""
    additional_info: dict[str, Any] = {}
    raw_text: str = ""

    @property
    def must_haves(self) -> list[str]:
        if isinstance(self.requirements, RequirementsDetailed):
            return self.requirements.must_have
        return list(self.requirements)


def default_parsed_jd(raw_text: str) -> ParsedJD:
    """Degraded record used when the model reply cannot be parsed."""
    return ParsedJD(raw_text=raw_text)
