from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..exceptions import ApiError, DialogStateError
from ..logger import get_logger, log_action
from ..validation import ClientValidationError
from .toasts import ToastCenter, ToastVariant

logger = get_logger(__name__)

Perform = Callable[[Any, str], Any]


class DialogStatus(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    SUBMITTING = "submitting"


@dataclass(frozen=True)
class ActionVariant:
    """One submit path of a dialog, e.g. approve or reject."""

    name: str
    perform: Perform
    requires_remarks: bool = False
    default_remarks: str | None = None
    success_title: str = "Success"
    success_message: str | None = None
    failure_title: str = "Action failed"
    validation_message: str = "Remarks are required"


@dataclass(frozen=True)
class SubmitOutcome:
    action: str
    request_sent: bool
    succeeded: bool
    result: Any = None
    error: Exception | None = None


class ActionDialog:
    """Modal state machine: closed -> open -> submitting -> closed.

    Only one submission may be outstanding. A failed request returns the
    dialog to ``OPEN`` with the typed remarks intact so the user can retry.
    """

    def __init__(
        self,
        name: str,
        variants: Sequence[ActionVariant],
        *,
        toasts: ToastCenter,
        on_success: Callable[[], Any] | None = None,
    ) -> None:
        if not variants:
            raise ValueError("ActionDialog needs at least one variant")
        self.name = name
        self.variants = {variant.name: variant for variant in variants}
        self.toasts = toasts
        self.on_success = on_success
        self.status = DialogStatus.CLOSED
        self.target: Any = None
        self.remarks = ""
        self.validation_message: str | None = None
        self.last_error: Exception | None = None

    @property
    def is_open(self) -> bool:
        return self.status is not DialogStatus.CLOSED

    @property
    def submit_enabled(self) -> bool:
        return self.status is DialogStatus.OPEN

    def open(self, target: Any) -> None:
        if self.status is not DialogStatus.CLOSED:
            raise DialogStateError(f"{self.name}: cannot open while {self.status.value}")
        self.target = target
        self.remarks = ""
        self.validation_message = None
        self.last_error = None
        self.status = DialogStatus.OPEN

    def cancel(self) -> None:
        if self.status is DialogStatus.SUBMITTING:
            raise DialogStateError(f"{self.name}: cannot cancel while submitting")
        self._reset()

    def set_remarks(self, remarks: str) -> None:
        if self.status is not DialogStatus.OPEN:
            raise DialogStateError(f"{self.name}: remarks can only change while open")
        self.remarks = remarks
        if remarks.strip():
            self.validation_message = None

    def submit(self, action: str | None = None, *, remarks: str | None = None) -> SubmitOutcome:
        if self.status is DialogStatus.SUBMITTING:
            raise DialogStateError(f"{self.name}: a submission is already in flight")
        if self.status is not DialogStatus.OPEN:
            raise DialogStateError(f"{self.name}: submit requires an open dialog")
        variant = self._variant(action)
        if remarks is not None:
            self.remarks = remarks

        typed = self.remarks.strip()
        if variant.requires_remarks and not typed:
            return self._refuse(variant, variant.validation_message)
        effective_remarks = typed or (variant.default_remarks or "")

        self.status = DialogStatus.SUBMITTING
        self.validation_message = None
        try:
            result = variant.perform(self.target, effective_remarks)
        except ClientValidationError as exc:
            self.status = DialogStatus.OPEN
            return self._refuse(variant, str(exc))
        except ApiError as exc:
            self.status = DialogStatus.OPEN
            self.last_error = exc
            self.toasts.notify(variant.failure_title, exc.message, ToastVariant.DESTRUCTIVE, module=self.name, trace_id=exc.trace_id)
            log_action(
                logger,
                module=self.name,
                action=variant.name,
                outcome="error",
                trace_id=exc.trace_id,
                level=logging.WARNING,
                code=exc.code,
                status_code=exc.status_code,
            )
            return SubmitOutcome(action=variant.name, request_sent=True, succeeded=False, error=exc)
        except Exception:
            self.status = DialogStatus.OPEN
            raise

        self._reset()
        self.toasts.notify(variant.success_title, variant.success_message, ToastVariant.SUCCESS, module=self.name)
        log_action(logger, module=self.name, action=variant.name, outcome="success")
        if self.on_success is not None:
            self.on_success()
        return SubmitOutcome(action=variant.name, request_sent=True, succeeded=True, result=result)

    def _variant(self, action: str | None) -> ActionVariant:
        if action is None:
            if len(self.variants) != 1:
                raise DialogStateError(f"{self.name}: action is required, choose one of {sorted(self.variants)}")
            return next(iter(self.variants.values()))
        variant = self.variants.get(action)
        if variant is None:
            raise DialogStateError(f"{self.name}: unknown action {action!r}")
        return variant

    def _refuse(self, variant: ActionVariant, message: str) -> SubmitOutcome:
        self.validation_message = message
        self.toasts.notify("Validation error", message, ToastVariant.DESTRUCTIVE, module=self.name)
        log_action(logger, module=self.name, action=variant.name, outcome="rejected_validation", level=logging.WARNING)
        return SubmitOutcome(action=variant.name, request_sent=False, succeeded=False)

    def _reset(self) -> None:
        self.status = DialogStatus.CLOSED
        self.target = None
        self.remarks = ""
        self.validation_message = None
