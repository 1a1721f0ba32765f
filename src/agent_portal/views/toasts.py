from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from ..logger import get_logger, log_action

logger = get_logger(__name__)


class ToastVariant(str, Enum):
    DEFAULT = "default"
    SUCCESS = "success"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Toast:
    title: str
    description: str | None = None
    variant: ToastVariant = ToastVariant.DEFAULT
    created_at: datetime | None = None


class ToastCenter:
    """Bounded history of user-visible notices."""

    def __init__(self, max_history: int = 50) -> None:
        self._history: deque[Toast] = deque(maxlen=max_history)

    def notify(
        self,
        title: str,
        description: str | None = None,
        variant: ToastVariant | str = ToastVariant.DEFAULT,
        *,
        module: str = "ui",
        trace_id: str | None = None,
    ) -> Toast:
        resolved = ToastVariant(variant)
        toast = Toast(title=title, description=description, variant=resolved, created_at=datetime.now(timezone.utc))
        self._history.append(toast)
        log_action(
            logger,
            module=module,
            action="toast",
            outcome=resolved.value,
            trace_id=trace_id,
            level=logging.WARNING if resolved is ToastVariant.DESTRUCTIVE else logging.INFO,
            title=title,
            description=description,
        )
        return toast

    @property
    def history(self) -> list[Toast]:
        return list(self._history)

    @property
    def last(self) -> Toast | None:
        return self._history[-1] if self._history else None

    def clear(self) -> None:
        self._history.clear()
