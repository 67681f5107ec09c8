"""
Dark pool backend — MOCK client.

⚠️  This is a mock implementation for development and testing.
    It never calls the network and never checks the credential's value.
    Enable it with INTEGRATIONS_MODE=mock; the real backend client lives in
    clients/real_http/dark_pool.py.
"""

import hashlib
import json
import logging
from collections import deque
from typing import Any, Deque, Dict, Optional

from src.integrations.contracts.dark_pool import (
    BackendAccepted,
    BackendRejected,
    ForwardOutcome,
    SubmissionRequest,
)
from src.integrations.policy.response_wrappers import normalize_backend_response

logger = logging.getLogger(__name__)

BATCH_WINDOW_SECONDS = 30
MAX_RECORDED_SUBMISSIONS = 100


class MockDarkPoolClient:
    """
    Mock dark pool backend.

    Parameters
    ----------
    reject_status : int, optional
        When set, every submission is rejected with this HTTP status.
    reject_error : str, optional
        Error text returned alongside reject_status.
    """

    def __init__(self, reject_status: Optional[int] = None, reject_error: Optional[str] = None):
        self._reject_status = reject_status
        self._reject_error = reject_error
        self.submissions: Deque[Dict[str, Any]] = deque(maxlen=MAX_RECORDED_SUBMISSIONS)

        logger.info("[DARK POOL MOCK] Client initialised (reject_status=%s)", reject_status)

    def _transaction_id(self, payload: Dict[str, Any]) -> str:
        digest = hashlib.sha256(json.dumps(payload, sort_keys=True, default=str).encode("utf-8"))
        return f"dp_{digest.hexdigest()[:16]}"

    async def submit(self, request: SubmissionRequest, api_key: str) -> ForwardOutcome:
        payload = request.to_backend_payload()
        self.submissions.append(payload)
        logger.info("[DARK POOL MOCK] Queued submission agent=%s amount=%s", request.agent_id, request.payment_amount)

        if self._reject_status is not None:
            body = {"success": False}
            if self._reject_error:
                body["error"] = self._reject_error
            return BackendRejected(status_code=self._reject_status, body=body)

        body = normalize_backend_response(
            {
                "success": True,
                "transaction_id": self._transaction_id(payload),
                "message": "Transaction queued for next batch",
                "estimated_execution": f"{BATCH_WINDOW_SECONDS}s",
            }
        )
        return BackendAccepted(status_code=200, body=body)
