from __future__ import annotations

from dataclasses import dataclass

from ..exceptions import BusinessError
from ..http_client import HttpClient


@dataclass(frozen=True)
class PortalSession:
    access_token: str | None = None
    username: str | None = None
    user_id: int | None = None
    role: str | None = None

    def headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        if self.username:
            headers["x-auth-username"] = self.username
        return headers


@dataclass
class BaseClient:
    http: HttpClient
    session: PortalSession | None = None
    module = "portal"

    def _auth_headers(self) -> dict[str, str]:
        return self.session.headers() if self.session else {}

    def _request(self, method: str, path: str, *, operation: str, **kwargs):
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        return self.http.request(method, path, headers=merged, module=self.module, operation=operation, **kwargs)

    def _payload_error(self, message: str, payload: object) -> BusinessError:
        last = self.http.last_operation
        return BusinessError(
            code="INVALID_PAYLOAD",
            message=message,
            details=None,
            trace_id=last.trace_id if last else None,
            status_code=200,
            raw_payload=payload,
        )


def offset_for(page: int, page_size: int) -> str:
    """CRM endpoints take string offsets computed from a 1-based page."""
    return str(max(0, page - 1) * page_size)
