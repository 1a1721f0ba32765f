from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..clients.provisioning import ProvisioningClient
from ..exceptions import ApiError
from ..logger import get_logger, log_action
from ..validation import ClientValidationError
from ..views import ToastCenter, ToastVariant

logger = get_logger(__name__)

ERROR_TITLE = "Error"


class ProvisioningPanel:
    """Device messaging forms: OSD, region OSD, blacklist, fingerprint and B-Mail.

    Each command returns ``True`` when the backend accepted it. Missing
    inputs are refused before any request is sent.
    """

    name = "provisioning"

    def __init__(self, client: ProvisioningClient, *, toasts: ToastCenter) -> None:
        self.client = client
        self.toasts = toasts
        self.sending = False

    def send_osd(self, sc_id: str, message: str, duration: str | int | None = None) -> bool:
        return self._run(
            "send_osd",
            lambda: self.client.send_osd(sc_id, message, duration),
            success=("OSD Message Sent", f"Message sent successfully to device {sc_id}."),
            failure="Failed to send OSD message. Please try again.",
        )

    def send_region_osd(self, region: str, message: str, duration: str | int | None = None) -> bool:
        return self._run(
            "send_region_osd",
            lambda: self.client.send_region_osd(region, message, duration),
            success=("Region OSD Sent", f"Region OSD message sent successfully to {region}."),
            failure="Failed to send Region OSD. Please verify the region code and try again.",
        )

    def blacklist_stb(self, sc_id: str, reason: str) -> bool:
        return self._run(
            "blacklist_stb",
            lambda: self.client.blacklist_stb(sc_id, reason),
            success=("Device Blacklisted", f"STB/Smart Card {sc_id} has been successfully blacklisted."),
            failure="Failed to blacklist device. Please verify the device ID and try again.",
        )

    def send_fingerprint(self, target: str, channel_list: str, x_pos: str | int, y_pos: str | int, duration: str | int) -> bool:
        return self._run(
            "send_fingerprint",
            lambda: self.client.send_fingerprint(target, channel_list, x_pos, y_pos, duration),
            success=("Fingerprint Sent", f"Fingerprint command sent successfully to {target}."),
            failure="Failed to send fingerprint. Please check your inputs and try again.",
        )

    def send_bmail(self, sc_id: str, message: str) -> bool:
        return self._run(
            "send_bmail",
            lambda: self.client.send_bmail(sc_id, message),
            success=("B-Mail Sent", f"Broadcast mail sent successfully to device {sc_id}."),
            failure="Failed to send B-Mail. Please check the device ID and try again.",
        )

    def _run(self, action: str, call: Callable[[], Any], *, success: tuple[str, str], failure: str) -> bool:
        self.sending = True
        try:
            call()
        except ClientValidationError as exc:
            self.toasts.notify("Validation error", str(exc), ToastVariant.DESTRUCTIVE, module=self.name)
            log_action(logger, module=self.name, action=action, outcome="rejected_validation", level=logging.WARNING)
            return False
        except ApiError as exc:
            self.toasts.notify(ERROR_TITLE, failure, ToastVariant.DESTRUCTIVE, module=self.name, trace_id=exc.trace_id)
            log_action(
                logger,
                module=self.name,
                action=action,
                outcome="error",
                trace_id=exc.trace_id,
                level=logging.WARNING,
                status_code=exc.status_code,
            )
            return False
        finally:
            self.sending = False
        title, description = success
        self.toasts.notify(title, description, ToastVariant.SUCCESS, module=self.name)
        log_action(logger, module=self.name, action=action, outcome="success")
        return True
