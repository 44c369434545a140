"""Client for the external interview-invitation API."""

from __future__ import annotations

import logging

import httpx

from recruit_copilot.config import InvitationConfig
from recruit_copilot.errors import ConfigurationError, UpstreamAPIError
from recruit_copilot.models.invitation import InvitationAck

logger = logging.getLogger(__name__)


class InvitationClient:
    """Delegates invitation sending to the hosted invitation service."""

    def __init__(
        self,
        config: InvitationConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or InvitationConfig()
        if not self.config.api_url:
            raise ConfigurationError(
                "Invitation API URL required. Set INVITATION_API_URL env var or invitation.api_url."
            )
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    async def send_invitation(
        self,
        resume: str,
        jd: str,
        *,
        recruiter_email: str,
        interviewer_requirement: str = "",
        correlation_id: str | None = None,
    ) -> InvitationAck:
        """POST the candidate to the invitation API and return its acknowledgement."""
        payload = {
            "recruiter_email": recruiter_email,
            "jd_content": jd,
            "interviewer_requirement": interviewer_requirement,
            "resume_text": resume,
        }
        logger.info(
            "Sending invitation: recruiter=%s correlation_id=%s", recruiter_email, correlation_id
        )
        async with httpx.AsyncClient(
            timeout=self.config.timeout, transport=self._transport
        ) as client:
            response = await client.post(
                self.config.api_url, json=payload, headers=self._headers()
            )

        if not response.is_success:
            logger.error(
                "Invitation API failed: status=%d correlation_id=%s",
                response.status_code,
                correlation_id,
            )
            raise UpstreamAPIError(response.status_code, response.text)

        return InvitationAck.model_validate(response.json())
