from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Mapping

TRACE_HEADER = "X-Trace-ID"


@dataclass
class TraceContext:
    """Trace id sent with every portal request; the server may replace it."""

    trace_id: str | None = None

    def ensure(self) -> str:
        if not self.trace_id:
            self.trace_id = str(uuid.uuid4())
        return self.trace_id

    def adopt(self, value: object) -> None:
        if isinstance(value, str) and value:
            self.trace_id = value

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        self.adopt(headers.get(TRACE_HEADER))

    def update_from_payload(self, payload: Mapping[str, object]) -> None:
        self.adopt(payload.get("trace_id"))
