from src.error_handler import ErrorHandler


def test_transport_failure_payload():
    eh = ErrorHandler()
    out = eh.handle_transport_failure("ECONNREFUSED").to_dict()
    assert out["output"] == {"success": False, "message": "Failed to submit transaction: ECONNREFUSED"}
    assert out["usage"]["total_tokens"] == 10


def test_backend_rejection_keeps_message(caplog):
    eh = ErrorHandler()
    with caplog.at_level("WARNING"):
        out = eh.handle_backend_rejection(503, "overloaded")
    assert out.output.message == "overloaded"
    assert "status=503" in caplog.text


def test_malformed_response_is_prefixed():
    out = ErrorHandler().handle_malformed_response(200, "Backend returned a non-JSON response")
    assert out.output.message == "Failed to submit transaction: Backend returned a non-JSON response"
