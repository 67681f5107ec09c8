import base64
import json
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

import httpx
from fastapi import Header, HTTPException, Request, Response, status

from src.utils.config_loader import PaymentsConfig

logger = logging.getLogger(__name__)

X402_VERSION = 1
USDC_DECIMALS = 6


def price_to_atomic_units(price: str, decimals: int = USDC_DECIMALS) -> str:
    """'$0.50' -> '500000' for a 6-decimal token."""
    text = (price or "").strip().lstrip("$").replace(",", "")
    try:
        amount = Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid price: {price!r}") from exc
    if amount < 0:
        raise ValueError(f"Price must not be negative: {price!r}")
    return str(int(amount.scaleb(decimals).to_integral_value()))


def decode_payment_header(value: str) -> Dict[str, Any]:
    try:
        decoded = json.loads(base64.b64decode(value, validate=True).decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as exc:
        raise ValueError("X-PAYMENT is not base64-encoded JSON") from exc
    if not isinstance(decoded, dict):
        raise ValueError("X-PAYMENT must encode a JSON object")
    return decoded


class PaymentGate:
    """
    x402 gate in front of a paid entrypoint.

    Verification and settlement are delegated to the facilitator; the gate only
    issues 402 challenges and relays the facilitator's verdict.
    """

    def __init__(
        self,
        config: PaymentsConfig,
        resource_url: str,
        description: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout_seconds: float = 15.0,
    ):
        self.config = config
        self.resource_url = resource_url
        self.description = description
        self._transport = transport
        self._timeout_seconds = timeout_seconds

    def requirements(self) -> Dict[str, Any]:
        return {
            "scheme": "exact",
            "network": self.config.network,
            "maxAmountRequired": price_to_atomic_units(self.config.price),
            "resource": self.resource_url,
            "description": self.description,
            "mimeType": "application/json",
            "payTo": self.config.pay_to,
            "maxTimeoutSeconds": self.config.max_timeout_seconds,
            "asset": self.config.asset,
            "extra": {"name": "USD Coin", "version": "2"},
        }

    def challenge(self, error: str) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            detail={"x402Version": X402_VERSION, "error": error, "accepts": [self.requirements()]},
        )

    async def check(self, request: Request, response: Response, x_payment: Optional[str]) -> None:
        if not self.config.enabled:
            return

        if not x_payment:
            logger.info("Payment required: path=%s", request.url.path)
            raise self.challenge("X-PAYMENT header is required")

        try:
            payment_payload = decode_payment_header(x_payment)
        except ValueError as e:
            raise self.challenge(str(e))

        body = {
            "x402Version": X402_VERSION,
            "paymentPayload": payment_payload,
            "paymentRequirements": self.requirements(),
        }

        verdict = await self._facilitator("verify", body)
        if not verdict.get("isValid"):
            reason = verdict.get("invalidReason") or "Payment verification failed"
            logger.warning("Payment rejected by facilitator: %s", reason)
            raise self.challenge(str(reason))

        settlement = await self._facilitator("settle", body)
        if not settlement.get("success"):
            reason = settlement.get("errorReason") or "Payment settlement failed"
            logger.warning("Payment settlement failed: %s", reason)
            raise self.challenge(str(reason))

        logger.info("Payment settled: network=%s transaction=%s", settlement.get("network"), settlement.get("transaction"))
        response.headers["X-PAYMENT-RESPONSE"] = base64.b64encode(
            json.dumps(settlement).encode("utf-8")
        ).decode("ascii")

    async def _facilitator(self, action: str, body: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.config.facilitator_url}/{action}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds, transport=self._transport) as client:
                reply = await client.post(url, json=body)
                reply.raise_for_status()
                data = reply.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from facilitator {action}: {e.response.status_code} {e.response.text}")
            raise self.challenge(f"Facilitator {action} failed")
        except httpx.RequestError as e:
            logger.error(f"Request error connecting to facilitator: {e}")
            raise self.challenge(f"Facilitator {action} unavailable")
        except ValueError:
            logger.error("Facilitator %s returned a non-JSON body", action)
            raise self.challenge(f"Facilitator {action} failed")
        return data if isinstance(data, dict) else {}


async def require_payment(
    request: Request,
    response: Response,
    x_payment: Optional[str] = Header(default=None, alias="X-PAYMENT"),
) -> None:
    await request.app.state.payment_gate.check(request, response, x_payment)


def get_submission_service(request: Request):
    return request.app.state.submission_service
