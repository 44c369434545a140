"""Pydantic models for interview invitations."""

from __future__ import annotations

from recruit_copilot.models.base import CamelModel


class InvitationEmail(CamelModel):
    subject: str = "Interview Invitation"
    body: str = ""


class InvitationAck(CamelModel):
    """Acknowledgement returned by the external invitation API (snake_case on the wire)."""

    email: str = ""
    name: str = ""
    job_title: str = ""
    user_id: str | int = ""
    message: str = ""

    def to_json_dict(self) -> dict:
        return self.model_dump()
