from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import PortalConfig
from .error_mapper import map_error, raise_for_envelope
from .exceptions import BusinessError, TransportError
from .logger import get_logger, log_action
from .tracing import TRACE_HEADER, TraceContext

ResponseHook = Callable[[requests.Response], None]

logger = get_logger(__name__)


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    trace_id: str | None


@dataclass
class HttpClient:
    config: PortalConfig
    trace: TraceContext | None = None
    session: requests.Session | None = None
    after_response: ResponseHook | None = None
    max_connections: int = 10
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(pool_connections=self.max_connections, pool_maxsize=self.max_connections)
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | list[Any] | None = None,
        params: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
        check_envelope: bool = True,
    ) -> dict[str, Any] | list[Any] | None:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)
        trace_context = self.trace or TraceContext()
        request_headers[TRACE_HEADER] = trace_context.ensure()

        normalized_method = method.upper()
        url = self._build_url(path)
        clean_params = {key: value for key, value in (params or {}).items() if value is not None}

        # Mutations are sent exactly once; only reads are retried.
        attempts = self.config.retries + 1 if normalized_method in {"GET", "HEAD"} else 1
        started = time.monotonic()
        response: requests.Response | None = None
        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    json=json_body,
                    params=clean_params or None,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if attempt >= attempts - 1:
                    self._record_operation(module, operation, started, "error", trace_context.trace_id)
                    log_action(
                        logger,
                        module=module,
                        action=operation,
                        outcome="transport_error",
                        trace_id=trace_context.trace_id,
                        level=logging.WARNING,
                        error=type(exc).__name__,
                    )
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                        trace_id=trace_context.trace_id,
                        status_code=0,
                        raw_payload=None,
                    ) from exc
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
            time.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError("HTTP request failed without response")

        if self.after_response:
            self.after_response(response)
        trace_context.update_from_headers(response.headers)

        if response.ok:
            if not response.content:
                self._record_operation(module, operation, started, "success", trace_context.trace_id)
                return None
            try:
                parsed = response.json()
            except ValueError:
                self._record_operation(module, operation, started, "error", trace_context.trace_id)
                raise BusinessError(
                    code="INVALID_PAYLOAD",
                    message="Response body is not valid JSON",
                    details=None,
                    trace_id=trace_context.trace_id,
                    status_code=response.status_code,
                    raw_payload=response.text,
                ) from None
            if check_envelope:
                try:
                    raise_for_envelope(parsed, trace_id=trace_context.trace_id, status_code=response.status_code)
                except BusinessError:
                    self._record_operation(module, operation, started, "error", trace_context.trace_id)
                    raise
            self._record_operation(module, operation, started, "success", trace_context.trace_id)
            return parsed

        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text or response.reason}
        if not isinstance(payload, dict):
            payload = {"message": response.text, "details": payload}
        trace_context.update_from_payload(payload)
        self._record_operation(module, operation, started, "error", trace_context.trace_id)
        log_action(
            logger,
            module=module,
            action=operation,
            outcome="http_error",
            trace_id=trace_context.trace_id,
            level=logging.WARNING,
            status_code=response.status_code,
        )
        raise map_error(response.status_code, payload, trace_context.trace_id)

    def _record_operation(self, module: str, operation: str, started: float, result: str, trace_id: str | None) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            trace_id=trace_id,
        )
        logger.debug("%s.%s -> %s (%sms)", module, operation, result, self.last_operation.duration_ms)
