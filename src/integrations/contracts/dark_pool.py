"""
Dark pool submission contracts.

Defines the request/response shapes exchanged by the submit entrypoint:
- SubmissionRequest: caller input, validated before the handler runs
- SubmissionResult: the output returned for every outcome
- EntrypointResponse: output paired with the usage value reported for billing

Both the real and the mock backend clients consume SubmissionRequest.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.integrations.policy.response_wrappers import BackendSubmitResponse

# Amounts are validated and forwarded as text, never as numbers.
PAYMENT_AMOUNT_PATTERN = re.compile(r"^\d+\.\d{2}$", re.ASCII)

ERROR_USAGE_TOKENS = 10
FORWARDED_USAGE_TOKENS = 50

MISSING_API_KEY_MESSAGE = "Service misconfigured: Missing API key"
DEFAULT_SUCCESS_MESSAGE = "Transaction submitted to dark pool"


def is_valid_payment_amount(value: str) -> bool:
    return PAYMENT_AMOUNT_PATTERN.fullmatch(value) is not None


def is_absolute_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.hostname) and not any(ch.isspace() for ch in value)


class SubmissionRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    agent_id: str = Field(..., min_length=1, description="Unique identifier for your agent")
    target_endpoint: str = Field(..., description="The x402 endpoint URL to call privately")
    request_payload: Dict[str, Any] = Field(..., description="The request data to send to the endpoint")
    payment_amount: str = Field(..., description='Payment amount in USDC (e.g., "10.00")')

    @field_validator("target_endpoint")
    @classmethod
    def validate_target_endpoint(cls, value: str) -> str:
        if not is_absolute_url(value):
            raise ValueError("target_endpoint must be an absolute URL")
        return value

    @field_validator("request_payload")
    @classmethod
    def validate_request_payload(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        try:
            json.dumps(value, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise ValueError("request_payload must be plain JSON (no NaN or Infinity)") from exc
        return value

    @field_validator("payment_amount")
    @classmethod
    def validate_payment_amount(cls, value: str) -> str:
        if not is_valid_payment_amount(value):
            raise ValueError("payment_amount must look like '10.00' (digits, a dot, two decimals)")
        return value

    def to_backend_payload(self) -> Dict[str, Any]:
        return {
            "agent_id": self.agent_id,
            "target_endpoint": self.target_endpoint,
            "request_payload": self.request_payload,
            "payment_amount": self.payment_amount,
        }


class SubmissionResult(BaseModel):
    success: bool
    transaction_id: Optional[str] = None
    message: str
    estimated_execution: Optional[str] = None


class Usage(BaseModel):
    total_tokens: int


# ---------------------------------------------------------------------------
# Forward outcomes (what a backend client hands back to the handler)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TransportFailure:
    """The POST never produced an HTTP response (DNS, connect, timeout...)."""
    error: str


@dataclass(frozen=True)
class BackendRejected:
    """Non-2xx status. body is None when it was not a JSON object."""
    status_code: int
    body: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class BackendAccepted:
    status_code: int
    body: BackendSubmitResponse


@dataclass(frozen=True)
class MalformedResponse:
    """2xx status whose body could not be decoded."""
    status_code: int
    detail: str


ForwardOutcome = Union[TransportFailure, BackendRejected, BackendAccepted, MalformedResponse]


class InvokeRequest(BaseModel):
    """Invoke envelope used by agent entrypoints: {"input": {...}}"""

    input: SubmissionRequest


class EntrypointResponse(BaseModel):
    entrypoint: str = "submit"
    output: SubmissionResult
    usage: Usage

    @classmethod
    def failure(cls, message: str) -> "EntrypointResponse":
        return cls(
            output=SubmissionResult(success=False, message=message),
            usage=Usage(total_tokens=ERROR_USAGE_TOKENS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
