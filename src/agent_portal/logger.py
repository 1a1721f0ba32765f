from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

_SECRET_MARKERS = ("password", "token", "authorization", "secret")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_json(logger: logging.Logger, payload: dict[str, Any], level: int = logging.INFO) -> None:
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


def log_action(
    logger: logging.Logger,
    *,
    module: str,
    action: str,
    outcome: str,
    trace_id: str | None = None,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    payload: dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": logging.getLevelName(level),
        "module": module,
        "action": action,
        "outcome": outcome,
        "trace_id": trace_id,
    }
    for key, value in context.items():
        if any(marker in key.lower() for marker in _SECRET_MARKERS):
            continue
        payload[key] = value
    log_json(logger, payload, level=level)
