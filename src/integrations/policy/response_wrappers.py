from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

STRING_FIELDS = ("transaction_id", "message", "estimated_execution", "error")


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(message)
        self.payload = payload if payload is not None else {}


class BackendSubmitResponse(BaseModel):
    """Decoded backend body. None means the key was absent (or null)."""

    success: Optional[bool] = None
    transaction_id: Optional[str] = None
    message: Optional[str] = None
    estimated_execution: Optional[str] = None
    error: Optional[str] = None
    raw: Dict[str, Any] = Field(default_factory=dict)


def normalize_backend_response(raw: Any, *, require_success: bool = True) -> BackendSubmitResponse:
    if not isinstance(raw, dict):
        raise IntegrationResponseError(
            f"Backend response must be a JSON object; got {type(raw).__name__}.",
            payload=raw,
        )

    success = raw.get("success")
    if success is None and require_success:
        raise IntegrationResponseError("Backend response is missing 'success'.", payload=raw)
    if success is not None and not isinstance(success, bool):
        raise IntegrationResponseError(f"Backend 'success' must be a boolean; got {success!r}.", payload=raw)

    payload: Dict[str, Any] = {"success": success, "raw": raw}
    for key in STRING_FIELDS:
        payload[key] = _optional_text(raw.get(key))

    return _build_model(BackendSubmitResponse, payload, raw)


def describe_error(body: Optional[Dict[str, Any]], status_code: int) -> str:
    """Message for a non-2xx backend reply: its 'error' text, else the status."""
    if isinstance(body, dict):
        error = _non_empty(_optional_text(body.get("error")))
        if error is not None:
            return error
    return f"Backend error: {status_code}"


def message_or_default(decoded: BackendSubmitResponse, default: str) -> str:
    return _non_empty(decoded.message) or default


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def _non_empty(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    return value


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
