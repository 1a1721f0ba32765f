from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from ..clients.notifications import NOTIFICATIONS_PATH, NotificationsClient
from ..exceptions import ApiError
from ..models import CollectionPage, Notification, NotificationStatus
from ..query_cache import QueryKey
from ..views import ColumnDescriptor, ToastVariant, summarize
from .base import ListScreen
from .formatting import time_ago

NOTIFICATION_TYPES = ("system", "agent", "kyc", "inventory", "payment", "service", "security")
NOTIFICATION_PRIORITIES = ("low", "medium", "high", "critical")
STATUS_TABS = ("all", "unread", "read", "archived")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NotificationsScreen(ListScreen):
    name = "notifications"
    columns = (
        ColumnDescriptor("title", "Title"),
        ColumnDescriptor("message", "Message"),
        ColumnDescriptor("type", "Type"),
        ColumnDescriptor("priority", "Priority"),
        ColumnDescriptor("status", "Status"),
        ColumnDescriptor("created_at", "Created"),
    )
    searchable_fields = ("title", "message")
    load_error_title = "Failed to load notifications"

    def __init__(
        self,
        client: NotificationsClient,
        user_id: int,
        *,
        clock: Callable[[], datetime] = _utc_now,
        **kwargs,
    ) -> None:
        self.client = client
        self.user_id = user_id
        self.clock = clock
        self.status_tab = "all"
        self.unread_count = 0
        super().__init__(**kwargs)

    def query_key(self) -> QueryKey:
        return (NOTIFICATIONS_PATH, self.user_id, self.status_tab)

    def cache_prefix(self) -> QueryKey:
        return (NOTIFICATIONS_PATH,)

    def fetch(self) -> CollectionPage:
        return self.client.list_notifications(self.user_id, self.status_tab)

    def set_status_tab(self, tab: str) -> None:
        if tab not in STATUS_TABS:
            raise ValueError(f"Unknown notification tab {tab!r}")
        self.status_tab = tab

    def refresh_unread_count(self) -> int:
        key = (NOTIFICATIONS_PATH, self.user_id, "unread-count")
        try:
            self.unread_count = self.cache.fetch(key, lambda: self.client.unread_count(self.user_id))
        except ApiError as exc:
            self.toasts.notify("Failed to load unread count", exc.message, ToastVariant.DESTRUCTIVE, module=self.name)
        return self.unread_count

    def counts(self) -> dict[str, int]:
        by_status = summarize(self.records, "status", normalize=lambda value: str(value).lower())
        return {
            "total": len(self.records),
            "unread": by_status.get(NotificationStatus.UNREAD.value, 0),
            "read": by_status.get(NotificationStatus.READ.value, 0),
        }

    def time_label(self, notification: Notification) -> str:
        return time_ago(notification.created_at, self.clock())

    def mark_read(self, notification: Notification) -> bool:
        return self.run_action(
            "mark_read",
            lambda: self.client.mark_read(notification.id),
            success_title="Notification marked as read",
            failure_title="Failed to mark notification as read",
        )

    def mark_all_read(self) -> bool:
        return self.run_action(
            "mark_all_read",
            lambda: self.client.mark_all_read(self.user_id),
            success_title="All notifications marked as read",
            failure_title="Failed to mark all notifications as read",
        )

    def archive(self, notification: Notification) -> bool:
        return self.run_action(
            "archive",
            lambda: self.client.archive(notification.id),
            success_title="Notification archived",
            failure_title="Failed to archive notification",
        )

    def delete(self, notification: Notification) -> bool:
        return self.run_action(
            "delete",
            lambda: self.client.delete(notification.id),
            success_title="Notification deleted",
            failure_title="Failed to delete notification",
        )

    def refetch(self) -> bool:
        loaded = super().refetch()
        self.refresh_unread_count()
        return loaded
