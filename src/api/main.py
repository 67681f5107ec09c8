"""
FastAPI application - Main entry point
"""

import logging
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.dependencies import PaymentGate
from src.api.endpoints.manifest import AGENT_DESCRIPTION, AGENT_NAME, AGENT_VERSION
from src.api.endpoints.manifest import api as manifest_api
from src.api.endpoints.submit import ENTRYPOINT_DESCRIPTION, INVOKE_PATH
from src.api.endpoints.submit import api as submit_api
from src.integrations.clients.mocks.dark_pool import MockDarkPoolClient
from src.integrations.clients.real_http.dark_pool import RealDarkPoolClient
from src.integrations.policy.submission_service import DarkPoolClient, SubmissionService
from src.utils.config_loader import ProxySettings, load_settings

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    logging.getLogger().setLevel(level)


def select_backend_client(settings: ProxySettings) -> DarkPoolClient:
    if settings.integrations_mode == "mock":
        logger.info("INTEGRATIONS_MODE=mock; using in-process dark pool backend")
        return MockDarkPoolClient()
    return RealDarkPoolClient(
        base_url=settings.backend_url,
        timeout_seconds=settings.backend_timeout_seconds,
    )


def startup_banner(settings: ProxySettings) -> str:
    payments = settings.payments
    return "\n".join(
        [
            "AGENT DARK POOL - PAYMENT PROXY",
            "Private MEV Protection for x402 Agents",
            f"  Server running on port {settings.port}",
            f"  Manifest: {settings.public_base_url}/.well-known/agent.json",
            f"  Payment address: {payments.pay_to}",
            f"  Price: {payments.price} per submission (payments {'enabled' if payments.enabled else 'disabled'})",
            f"  Network: {payments.network}",
            f"  Backend: {settings.backend_url}",
            "  Privacy Premium: 5% of transaction value",
            "  Batch Window: 30 seconds",
        ]
    )


def create_app(
    settings: Optional[ProxySettings] = None,
    client: Optional[DarkPoolClient] = None,
    facilitator_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title=AGENT_NAME, description=AGENT_DESCRIPTION, version=AGENT_VERSION)
    app.state.settings = settings
    app.state.submission_service = SubmissionService(
        settings=settings,
        client=client or select_backend_client(settings),
    )
    app.state.payment_gate = PaymentGate(
        settings.payments,
        resource_url=f"{settings.public_base_url}{INVOKE_PATH}",
        description=ENTRYPOINT_DESCRIPTION,
        transport=facilitator_transport,
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # the rejected input is not echoed back; it may hold values JSON cannot encode
        errors = [{"type": err.get("type"), "loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()]
        return JSONResponse(status_code=422, content={"detail": errors})

    app.include_router(submit_api)
    app.include_router(manifest_api)

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        current = request.app.state.settings
        return {
            "status": "healthy",
            "backend": current.backend_url,
            "api_key_configured": current.has_api_key,
        }

    @app.on_event("startup")
    async def startup_event():
        """Log the startup banner"""
        logger.info("Starting dark pool payment proxy...\n%s", startup_banner(settings))

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Shutting down dark pool payment proxy...")

    return app


settings = load_settings()
configure_logging(settings.log_level)
app = create_app(settings)
