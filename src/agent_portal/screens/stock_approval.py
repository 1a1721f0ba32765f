from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path

from ..clients.inventory import INVENTORY_REQUESTS_PATH, InventoryClient
from ..models import CollectionPage, StockRequest
from ..query_cache import QueryKey
from ..views import ActionVariant, ColumnDescriptor, ToastVariant
from .base import ListScreen
from .formatting import format_amount, format_date, parse_datetime, to_local_naive

TABS = ("pending", "approved", "rejected")
DATE_WINDOWS = ("all", "today", "week", "month")
TAB_STATUSES = {
    "pending": {"pending", "in_transit"},
    "approved": {"approved"},
    "rejected": {"rejected"},
}
HIGH_AMOUNT_THRESHOLD = 1_000_000
MEDIUM_QTY_THRESHOLD = 10


def priority_level(request: StockRequest) -> str:
    if request.request_type == "EMERGENCY_REQUEST":
        return "high"
    if request.total_amount and request.total_amount > HIGH_AMOUNT_THRESHOLD:
        return "high"
    try:
        qty = int(request.item_qty) if request.item_qty not in (None, "") else 0
    except (TypeError, ValueError):
        qty = 0
    if qty > MEDIUM_QTY_THRESHOLD:
        return "medium"
    return "low"


def window_start(window: str, now: datetime) -> datetime | None:
    start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if window == "today":
        return start_of_today
    if window == "week":
        # weeks start on Sunday
        return start_of_today - timedelta(days=(start_of_today.weekday() + 1) % 7)
    if window == "month":
        return start_of_today.replace(day=1)
    return None


class StockApprovalScreen(ListScreen):
    name = "stock-approvals"
    columns = (
        ColumnDescriptor("request_id", "Request ID"),
        ColumnDescriptor("status", "Status"),
        ColumnDescriptor("request_type", "Request Type"),
        ColumnDescriptor("item_type", "Item Type"),
        ColumnDescriptor("item_qty", "Quantity"),
        ColumnDescriptor("total_amount", "Total Amount", render=format_amount),
        ColumnDescriptor("module", "Module"),
        ColumnDescriptor("transfer_from", "Transfer From"),
        ColumnDescriptor("transfer_to", "Transfer To"),
        ColumnDescriptor("sap_so_id", "SAP SO ID"),
        ColumnDescriptor("create_dt", "Created", render=format_date),
    )
    searchable_fields = ("request_id", "item_type", "module")
    load_error_title = "Failed to load stock requests"

    def __init__(
        self,
        client: InventoryClient,
        *,
        clock: Callable[[], datetime] = datetime.now,
        **kwargs,
    ) -> None:
        self.client = client
        self.clock = clock
        self.tab = "pending"
        self.date_window = "all"
        super().__init__(**kwargs)
        self.reject_dialog = self.make_dialog(
            "stock_approval.reject",
            [
                ActionVariant(
                    name="reject",
                    perform=lambda request, remarks: self.client.reject_request(request.id, remarks),
                    requires_remarks=True,
                    success_title="Request Rejected",
                    success_message="The stock request has been rejected with remarks.",
                    failure_title="Rejection Failed",
                    validation_message="Please provide rejection remarks",
                )
            ],
        )

    def query_key(self) -> QueryKey:
        return (INVENTORY_REQUESTS_PATH,)

    def fetch(self) -> CollectionPage:
        return self.client.list_requests()

    def predicates(self):
        statuses = TAB_STATUSES[self.tab]
        checks = [lambda request: (request.status or "").lower() in statuses]
        start = window_start(self.date_window, self.clock())
        if start is not None:
            checks.append(lambda request: self._created_since(request, start))
        return checks

    @staticmethod
    def _created_since(request: StockRequest, start: datetime) -> bool:
        created = parse_datetime(request.create_dt)
        if created is None:
            return False
        return to_local_naive(created) >= start

    def set_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown tab {tab!r}")
        self.tab = tab
        self.page_state.page_index = 0

    def set_date_window(self, window: str) -> None:
        if window not in DATE_WINDOWS:
            raise ValueError(f"Unknown date window {window!r}")
        self.date_window = window
        self.page_state.page_index = 0

    def tab_counts(self) -> dict[str, int]:
        return {
            tab: sum(1 for request in self.records if (request.status or "").lower() in statuses)
            for tab, statuses in TAB_STATUSES.items()
        }

    def approve(self, request: StockRequest) -> bool:
        return self.run_action(
            "approve_request",
            lambda: self.client.approve_request(request.id),
            success_title="Request Approved Successfully",
            failure_title="Approval Failed",
        )

    def export_scope(self) -> str:
        return self.tab

    def export(self, scope: str | None = None) -> Path | None:
        if not self.result().filtered_rows:
            self.toasts.notify("Nothing to export", "No records in the current view.", ToastVariant.DEFAULT, module=self.name)
            return None
        return super().export(scope)
