# Interview Generation Client
"""
HTTP client for the interview generation endpoint.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from practice_interview.config import APP_CONFIG, GENERATION_CONFIG

from .models import InterviewSpec

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """The generation endpoint rejected the request or answered nonsense."""


@dataclass
class GenerationResult:
    success: bool
    error: Optional[str] = None
    interview_id: Optional[str] = None


class InterviewGenerationClient:
    """
    Posts an InterviewSpec to the generation endpoint.

    Usage:
        client = InterviewGenerationClient("http://localhost:8000")
        result = await client.request_generation(spec)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        interview_type: Optional[str] = None,
    ):
        self.base_url = (base_url or APP_CONFIG["public_base_url"]).rstrip("/")
        self.endpoint_path = GENERATION_CONFIG["endpoint_path"]
        self.interview_type = interview_type or GENERATION_CONFIG["interview_type"]
        self._transport = transport

    async def request_generation(self, spec: InterviewSpec) -> GenerationResult:
        """
        Send one generation request.

        Raises:
            GenerationError: non-2xx status or a malformed response body
            httpx.HTTPError: transport failure
        """
        body = spec.to_request_body(self.interview_type)

        async with httpx.AsyncClient(base_url=self.base_url, transport=self._transport) as client:
            response = await client.post(self.endpoint_path, json=body)

        if not response.is_success:
            raise GenerationError(
                f"Generation failed with status {response.status_code} "
                f"{response.reason_phrase}: {response.text or 'No error details available.'}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise GenerationError(f"Malformed generation response: {response.text!r}") from e

        if not isinstance(payload, dict) or not isinstance(payload.get("success"), bool):
            raise GenerationError(f"Malformed generation response: {payload!r}")

        return GenerationResult(
            success=payload["success"],
            error=payload.get("error"),
            interview_id=payload.get("interviewId"),
        )
