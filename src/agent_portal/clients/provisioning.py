from __future__ import annotations

from dataclasses import dataclass

from ..validation import require_text
from .base import BaseClient

PROVISIONING_PATH = "/api/provisioning"


def _optional(value: str | int | None) -> str:
    return "" if value is None else str(value).strip()


@dataclass
class ProvisioningClient(BaseClient):
    """Device messaging commands sent to set-top boxes and smart cards."""

    module = "provisioning"

    def send_osd(self, sc_id: str, message: str, duration: str | int | None = None):
        body = {
            "scId": require_text(sc_id, "sc_id"),
            "message": require_text(message, "message"),
            "duration": _optional(duration),
        }
        return self._send("send-osd", body)

    def send_region_osd(self, region: str, message: str, duration: str | int | None = None):
        body = {
            "region": require_text(region, "region"),
            "message": require_text(message, "message"),
            "duration": _optional(duration),
        }
        return self._send("send-region-osd", body)

    def blacklist_stb(self, sc_id: str, reason: str):
        body = {"scId": require_text(sc_id, "sc_id"), "reason": require_text(reason, "reason")}
        return self._send("blacklist-stb", body)

    def send_fingerprint(
        self,
        target: str,
        channel_list: str,
        x_pos: str | int,
        y_pos: str | int,
        duration: str | int,
    ):
        body = {
            "target": require_text(target, "target"),
            "channelList": require_text(channel_list, "channel_list"),
            "xPos": require_text(_optional(x_pos), "x_pos"),
            "yPos": require_text(_optional(y_pos), "y_pos"),
            "duration": require_text(_optional(duration), "duration"),
        }
        return self._send("send-fingerprint", body)

    def send_bmail(self, sc_id: str, message: str):
        body = {"scId": require_text(sc_id, "sc_id"), "message": require_text(message, "message")}
        return self._send("send-bmail", body)

    def _send(self, command: str, body: dict[str, str]):
        return self._request("POST", f"{PROVISIONING_PATH}/{command}", operation=command, json_body=body)
