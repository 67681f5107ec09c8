import httpx
import pytest

from src.integrations.clients.real_http.dark_pool import RealDarkPoolClient
from src.integrations.contracts.dark_pool import (
    BackendAccepted,
    BackendRejected,
    MalformedResponse,
    TransportFailure,
)
from tests.backend_fakes import RecordingBackend


@pytest.mark.asyncio
async def test_forward_sends_credential_and_verbatim_body(submission, make_client):
    backend = RecordingBackend(body={"success": True})

    outcome = await make_client(backend).submit(submission, "secret-key")

    assert isinstance(outcome, BackendAccepted)
    sent = backend.requests[0]
    assert sent.method == "POST"
    assert str(sent.url) == "https://backend.test/submit"
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.headers["X-Internal-API-Key"] == "secret-key"
    assert "Authorization" not in sent.headers
    assert backend.last_json() == submission.to_backend_payload()


@pytest.mark.asyncio
async def test_trailing_slash_on_base_url_is_ignored(submission):
    backend = RecordingBackend(body={"success": True})
    client = RealDarkPoolClient("https://backend.test/", transport=httpx.MockTransport(backend))

    await client.submit(submission, "k")

    assert str(backend.requests[0].url) == "https://backend.test/submit"


@pytest.mark.asyncio
async def test_non_object_error_body_is_dropped(submission, make_client):
    backend = RecordingBackend(status_code=500, body=["error"])

    outcome = await make_client(backend).submit(submission, "k")

    assert outcome == BackendRejected(status_code=500, body=None)


@pytest.mark.asyncio
async def test_missing_success_is_malformed(submission, make_client):
    backend = RecordingBackend(body={"transaction_id": "tx1"})

    outcome = await make_client(backend).submit(submission, "k")

    assert isinstance(outcome, MalformedResponse)
    assert outcome.status_code == 200


@pytest.mark.asyncio
async def test_exception_without_text_reports_its_type(submission, make_client):
    backend = RecordingBackend(error=httpx.ConnectTimeout(""))

    outcome = await make_client(backend).submit(submission, "k")

    assert outcome == TransportFailure(error="ConnectTimeout")


@pytest.mark.asyncio
async def test_unencodable_payload_is_a_transport_failure(submission, make_client):
    backend = RecordingBackend(body={"success": True})
    request = submission.model_construct(**{**submission.model_dump(), "request_payload": {"v": float("nan")}})

    outcome = await make_client(backend).submit(request, "k")

    assert isinstance(outcome, TransportFailure)
    assert outcome.error
    assert backend.calls == 0


@pytest.mark.asyncio
async def test_unencodable_credential_is_a_transport_failure(submission, make_client):
    backend = RecordingBackend(body={"success": True})

    outcome = await make_client(backend).submit(submission, "clé")

    assert isinstance(outcome, TransportFailure)
    assert "codec" in outcome.error
    assert backend.calls == 0
