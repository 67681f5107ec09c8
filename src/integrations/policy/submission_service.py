"""
Submission Service for the dark pool backend

Validated requests arrive here only after the payment gate has settled.
The service:
- checks that the internal credential is configured
- forwards the request through a backend client (real or mock)
- maps every forward outcome to an EntrypointResponse

It never raises for business failures; the caller always gets output + usage.
"""

import logging
from typing import Optional, Protocol

from src.error_handler import ErrorHandler
from src.integrations.contracts.dark_pool import (
    DEFAULT_SUCCESS_MESSAGE,
    FORWARDED_USAGE_TOKENS,
    MISSING_API_KEY_MESSAGE,
    BackendAccepted,
    BackendRejected,
    EntrypointResponse,
    ForwardOutcome,
    MalformedResponse,
    SubmissionRequest,
    SubmissionResult,
    TransportFailure,
    Usage,
)
from src.integrations.policy.response_wrappers import describe_error, message_or_default
from src.utils.config_loader import ProxySettings

logger = logging.getLogger(__name__)


class DarkPoolClient(Protocol):
    async def submit(self, request: SubmissionRequest, api_key: str) -> ForwardOutcome:
        ...


class SubmissionService:
    def __init__(
        self,
        settings: ProxySettings,
        client: DarkPoolClient,
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.settings = settings
        self.client = client
        self.error_handler = error_handler or ErrorHandler()

    async def submit(self, request: SubmissionRequest) -> EntrypointResponse:
        api_key = self.settings.internal_api_key
        if not api_key:
            logger.error("Rejecting submission from %s: INTERNAL_API_KEY not configured", request.agent_id)
            return EntrypointResponse.failure(MISSING_API_KEY_MESSAGE)

        outcome = await self.client.submit(request, api_key)
        return self._to_response(outcome)

    def _to_response(self, outcome: ForwardOutcome) -> EntrypointResponse:
        if isinstance(outcome, TransportFailure):
            return self.error_handler.handle_transport_failure(outcome.error)

        if isinstance(outcome, BackendRejected):
            message = describe_error(outcome.body, outcome.status_code)
            return self.error_handler.handle_backend_rejection(outcome.status_code, message)

        if isinstance(outcome, MalformedResponse):
            return self.error_handler.handle_malformed_response(outcome.status_code, outcome.detail)

        if isinstance(outcome, BackendAccepted):
            body = outcome.body
            return EntrypointResponse(
                output=SubmissionResult(
                    # the backend may report success=false with a 2xx; pass it through
                    success=bool(body.success),
                    transaction_id=body.transaction_id,
                    message=message_or_default(body, DEFAULT_SUCCESS_MESSAGE),
                    estimated_execution=body.estimated_execution,
                ),
                usage=Usage(total_tokens=FORWARDED_USAGE_TOKENS),
            )

        raise TypeError(f"Unknown forward outcome: {outcome!r}")
