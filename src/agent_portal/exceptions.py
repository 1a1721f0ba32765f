from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    trace_id: str | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"


class AuthError(ApiError):
    """Authentication failed or session is invalid."""


class PermissionError(ApiError):
    """Authorization denied for the current portal user."""


class NotFoundError(ApiError):
    """The agent, customer, request or notification no longer exists."""


class ValidationError(ApiError):
    """400 or 422: the backend refused the submitted fields."""


class ConflictError(ApiError):
    """409: the record changed state, e.g. a request already processed."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """No HTTP response at all; reported with status 0."""


class BusinessError(ApiError):
    """2xx response that reports failure or cannot be understood."""


class DialogStateError(RuntimeError):
    """Illegal ActionDialog transition."""
