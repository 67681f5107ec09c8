import pytest

from src.integrations.policy.response_wrappers import (
    IntegrationResponseError,
    describe_error,
    message_or_default,
    normalize_backend_response,
)


def test_missing_fields_stay_none():
    decoded = normalize_backend_response({"success": True})

    assert decoded.success is True
    assert decoded.transaction_id is None
    assert decoded.message is None
    assert decoded.estimated_execution is None


def test_empty_string_is_distinguished_from_missing():
    decoded = normalize_backend_response({"success": True, "transaction_id": ""})

    assert decoded.transaction_id == ""
    assert message_or_default(decoded, "fallback") == "fallback"


def test_non_string_fields_are_stringified():
    decoded = normalize_backend_response({"success": True, "transaction_id": 42, "estimated_execution": 30})

    assert decoded.transaction_id == "42"
    assert decoded.estimated_execution == "30"


@pytest.mark.parametrize("raw", [[], "ok", None, {"success": "yes"}, {"message": "no success key"}])
def test_unusable_bodies_raise(raw):
    with pytest.raises(IntegrationResponseError):
        normalize_backend_response(raw)


def test_describe_error_prefers_backend_error():
    assert describe_error({"error": "overloaded"}, 503) == "overloaded"
    assert describe_error({"error": ""}, 503) == "Backend error: 503"
    assert describe_error(None, 500) == "Backend error: 500"
