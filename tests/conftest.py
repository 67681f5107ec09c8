"""Pytest fixtures for the submit entrypoint tests."""

import httpx
import pytest

from src.integrations.clients.real_http.dark_pool import RealDarkPoolClient
from src.integrations.contracts.dark_pool import SubmissionRequest
from src.utils.config_loader import ProxySettings
from tests.backend_fakes import BACKEND_URL, RecordingBackend


@pytest.fixture
def settings():
    return ProxySettings(backend_url=BACKEND_URL, internal_api_key="secret-key")


@pytest.fixture
def submission():
    return SubmissionRequest(
        agent_id="agent-7",
        target_endpoint="https://api.example.com/x402/swap",
        request_payload={"token_in": "USDC", "amount": "125.00", "route": [1, 2]},
        payment_amount="125.00",
    )


@pytest.fixture
def make_client():
    def _make(backend: RecordingBackend) -> RealDarkPoolClient:
        return RealDarkPoolClient(base_url=BACKEND_URL, transport=httpx.MockTransport(backend))

    return _make
