from typing import Any, Dict

from fastapi import APIRouter, Request

from src.api.endpoints.submit import ENTRYPOINT_DESCRIPTION, ENTRYPOINT_KEY, INVOKE_PATH
from src.integrations.contracts.dark_pool import SubmissionRequest, SubmissionResult
from src.utils.config_loader import ProxySettings

api = APIRouter()

AGENT_NAME = "Agent Dark Pool - Private MEV Protection"
AGENT_VERSION = "1.0.0"
AGENT_DESCRIPTION = (
    "Submit transactions to a private mempool with MEV protection. Pay a 5% privacy premium for "
    "atomic batch execution that prevents front-running and sandwich attacks. Transactions are "
    "batched every 30 seconds for maximum privacy."
)


def build_manifest(settings: ProxySettings) -> Dict[str, Any]:
    payments = settings.payments
    base_url = settings.public_base_url
    return {
        "name": AGENT_NAME,
        "version": AGENT_VERSION,
        "description": AGENT_DESCRIPTION,
        "author": "DegenLlama.net",
        "organization": "Daydreams",
        "provider": "Daydreams",
        "framework": "x402 / agent-kit",
        "url": base_url,
        "entrypoints": {
            ENTRYPOINT_KEY: {
                "description": ENTRYPOINT_DESCRIPTION,
                "url": f"{base_url}{INVOKE_PATH}",
                "price": payments.price,
                "input_schema": SubmissionRequest.model_json_schema(),
                "output_schema": SubmissionResult.model_json_schema(),
            }
        },
        "payments": {
            "enabled": payments.enabled,
            "facilitatorUrl": payments.facilitator_url,
            "payTo": payments.pay_to,
            "network": payments.network,
            "asset": payments.asset,
            "defaultPrice": payments.price,
        },
        "ap2": {"required": True, "params": {"roles": ["merchant"]}},
    }


@api.get("/.well-known/agent.json", tags=["Manifest"])
async def agent_manifest(request: Request):
    return build_manifest(request.app.state.settings)
