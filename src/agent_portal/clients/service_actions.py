from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..validation import require_text
from .base import BaseClient


class ServiceAction(str, Enum):
    SUSPEND = "suspend"
    REACTIVATE = "reactivate"
    TERMINATE = "terminate"


REASON_REQUIRED = {ServiceAction.SUSPEND, ServiceAction.TERMINATE}


@dataclass
class SubscriptionsClient(BaseClient):
    module = "subscriptions"

    def suspend(self, customer_id: int | str, reason: str):
        return self.service_action(customer_id, ServiceAction.SUSPEND, reason)

    def reactivate(self, customer_id: int | str, reason: str | None = None):
        return self.service_action(customer_id, ServiceAction.REACTIVATE, reason)

    def terminate(self, customer_id: int | str, reason: str):
        return self.service_action(customer_id, ServiceAction.TERMINATE, reason)

    def service_action(self, customer_id: int | str, action: ServiceAction, reason: str | None = None):
        if action in REASON_REQUIRED:
            reason = require_text(reason, "reason")
        body = {"action": action.value, "reason": (reason or "").strip()}
        return self._request(
            "POST",
            f"/api/customers/{customer_id}/service-actions",
            operation=action.value,
            json_body=body,
        )


@dataclass
class PaymentsClient(BaseClient):
    module = "payments"

    def cancel_hardware_payment(self, payment_id: int | str, reason: str):
        body = {
            "reason": require_text(reason, "reason"),
            "userRole": (self.session.role if self.session and self.session.role else ""),
        }
        return self._request(
            "DELETE",
            f"/api/agent-hardware-payments/{payment_id}",
            operation="cancel_payment",
            json_body=body,
        )
