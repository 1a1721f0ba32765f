from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..models import CollectionPage, Notification, NotificationStatus
from ..normalizers import coerce_row, coerce_rows, normalize_collection
from .base import BaseClient

NOTIFICATIONS_PATH = "/api/notifications"


@dataclass
class NotificationsClient(BaseClient):
    module = "notifications"

    def list_notifications(self, user_id: int | None, status: str | None = None) -> CollectionPage:
        params = {"userId": user_id, "status": None if status in (None, "", "all") else status}
        payload = self._request("GET", NOTIFICATIONS_PATH, operation="list", params=params)
        page = normalize_collection(payload)
        return page.model_copy(update={"rows": coerce_rows(page.rows, Notification)})

    def unread_count(self, user_id: int) -> int:
        payload = self._request("GET", f"{NOTIFICATIONS_PATH}/user/{user_id}/unread-count", operation="unread_count")
        if not isinstance(payload, dict):
            raise self._payload_error("Unread count response was not understood", payload)
        try:
            return int(payload.get("count") or 0)
        except (TypeError, ValueError):
            raise self._payload_error("Unread count response was not understood", payload) from None

    def mark_read(self, notification_id: int) -> Notification | None:
        payload = self._request("PATCH", f"{NOTIFICATIONS_PATH}/{notification_id}/read", operation="mark_read")
        return coerce_row(payload, Notification) if isinstance(payload, dict) and "id" in payload else None

    def mark_all_read(self, user_id: int) -> Any:
        return self._request("PATCH", f"{NOTIFICATIONS_PATH}/user/{user_id}/read-all", operation="mark_all_read")

    def archive(self, notification_id: int) -> Notification | None:
        payload = self._request(
            "PATCH",
            f"{NOTIFICATIONS_PATH}/{notification_id}",
            operation="archive",
            json_body={"status": NotificationStatus.ARCHIVED.value},
        )
        return coerce_row(payload, Notification) if isinstance(payload, dict) and "id" in payload else None

    def delete(self, notification_id: int) -> Any:
        return self._request("DELETE", f"{NOTIFICATIONS_PATH}/{notification_id}", operation="delete")
