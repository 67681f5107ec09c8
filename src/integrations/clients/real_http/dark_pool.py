"""
Real dark pool backend HTTP client.

Forwards a validated submission to the execution backend with the shared
internal credential and classifies what came back.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from src.integrations.contracts.dark_pool import (
    BackendAccepted,
    BackendRejected,
    ForwardOutcome,
    MalformedResponse,
    SubmissionRequest,
    TransportFailure,
)
from src.integrations.policy.response_wrappers import IntegrationResponseError, normalize_backend_response

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-Internal-API-Key"


class RealDarkPoolClient:
    def __init__(
        self,
        base_url: str,
        submit_path: str = "/submit",
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.submit_path = submit_path
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def submit_url(self) -> str:
        return f"{self.base_url}{self.submit_path}"

    async def submit(self, request: SubmissionRequest, api_key: str) -> ForwardOutcome:
        headers: Dict[str, str] = {
            "Content-Type": "application/json",
            API_KEY_HEADER: api_key,
        }
        url = self.submit_url

        try:
            logger.info("Forwarding submission for agent %s to %s", request.agent_id, url)
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.post(url, json=request.to_backend_payload(), headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return TransportFailure(error=str(e) or type(e).__name__)
        except (ValueError, TypeError) as e:
            # request could not be encoded (non-finite floats, non-ASCII header values)
            logger.error("Could not build backend request: %s", e)
            return TransportFailure(error=str(e) or type(e).__name__)

        status_code = response.status_code
        body = _json_or_none(response)
        logger.info("Received backend response: status=%s", status_code)

        if not response.is_success:
            return BackendRejected(status_code=status_code, body=body if isinstance(body, dict) else None)

        if body is None:
            return MalformedResponse(status_code=status_code, detail="Backend returned a non-JSON response")
        try:
            decoded = normalize_backend_response(body)
        except IntegrationResponseError as e:
            return MalformedResponse(status_code=status_code, detail=str(e))
        return BackendAccepted(status_code=status_code, body=decoded)


def _json_or_none(response: httpx.Response) -> Optional[Any]:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
