"""Pydantic models for Resume Parser output."""

from __future__ import annotations

from typing import Any

from recruit_copilot.models.base import CamelModel, StrList


class SkillsDetailed(CamelModel):
    technical: StrList = []
    soft: StrList = []
    languages: StrList = []
    tools: StrList = []
    frameworks: StrList = []
    other: StrList = []


class WorkExperience(CamelModel):
    company: str = ""
    role: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    duration: str = ""
    description: str = ""  # every bullet, verbatim
    achievements: StrList = []
    technologies: StrList = []


class Project(CamelModel):
    name: str = ""
    role: str = ""
    date: str = ""
    description: str = ""
    technologies: StrList = []
    link: str = ""


class Education(CamelModel):
    institution: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: str = ""
    achievements: StrList = []
    coursework: StrList = []


class Certification(CamelModel):
    name: str = ""
    issuer: str = ""
    date: str = ""
    expiry_date: str = ""
    credential_id: str = ""


class Award(CamelModel):
    name: str = ""
    issuer: str = ""
    date: str = ""
    description: str = ""


class LanguageSkill(CamelModel):
    language: str = ""
    proficiency: str = ""


class VolunteerWork(CamelModel):
    organization: str = ""
    role: str = ""
    duration: str = ""
    description: str = ""


class ParsedResume(CamelModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""
    skills: SkillsDetailed | StrList = []
    experience: list[WorkExperience] = []
    projects: list[Project] = []
    education: list[Education] = []
    certifications: list[Certification] = []
    awards: list[Award] = []
    languages: list[LanguageSkill] = []
    volunteer_work: list[VolunteerWork] = []
    publications: StrList = []
    patents: StrList = []
    summary: str = ""
    other_sections: dict[str, Any] = {}
    raw_text: str = ""


def default_parsed_resume(raw_text: str) -> ParsedResume:
    """Degraded record used when the model reply cannot be parsed."""
    return ParsedResume(summary="Unable to parse resume", raw_text=raw_text)
