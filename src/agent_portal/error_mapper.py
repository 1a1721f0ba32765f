from __future__ import annotations

from typing import Any, Mapping

from .exceptions import (
    ApiError,
    AuthError,
    BusinessError,
    ConflictError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    ValidationError,
)

SUCCESS_STATUS = "SUCCESS"
ENVELOPE_STATUSES = {SUCCESS_STATUS, "FAILURE", "FAILED", "ERROR"}


def extract_message(payload: Mapping[str, object] | None, default: str = "Request failed") -> str:
    payload = payload or {}
    for key in ("message", "statusMessage", "error"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return default


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    payload = payload or {}
    code = str(payload.get("code") or payload.get("status") or "HTTP_ERROR")
    message = extract_message(payload)
    details = payload.get("details") or payload.get("errors")
    payload_trace_id = payload.get("trace_id")
    resolved_trace_id = str(payload_trace_id) if payload_trace_id is not None else trace_id
    mapped: type[ApiError]
    if status_code == 401:
        mapped = AuthError
    elif status_code == 403:
        mapped = PermissionError
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = ValidationError
    elif status_code == 409:
        mapped = ConflictError
    elif status_code == 429:
        mapped = RateLimitError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(
        code=code,
        message=message,
        details=details,
        trace_id=resolved_trace_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )


def raise_for_envelope(payload: Any, trace_id: str | None = None, status_code: int = 200) -> Any:
    """Raise BusinessError when a 2xx body reports a non-SUCCESS status.

    Bodies without a string ``status`` field (bare arrays, ``{success: true}``
    wrappers, plain records) pass through unchanged.
    """
    if not isinstance(payload, dict):
        return payload
    status = payload.get("status")
    is_envelope = isinstance(status, str) and (
        "statusMessage" in payload or status.upper() in ENVELOPE_STATUSES
    )
    if is_envelope and status.upper() != SUCCESS_STATUS:
        raise BusinessError(
            code=status,
            message=extract_message(payload, default="Operation was not successful"),
            details=payload.get("data"),
            trace_id=trace_id,
            status_code=status_code,
            raw_payload=payload,
        )
    if payload.get("success") is False:
        raise BusinessError(
            code="FAILED",
            message=extract_message(payload, default="Operation was not successful"),
            details=payload.get("data"),
            trace_id=trace_id,
            status_code=status_code,
            raw_payload=payload,
        )
    return payload
