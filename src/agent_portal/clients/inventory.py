from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

from ..models import CollectionPage, InventoryItem, StockRequest, StockTransferRequest
from ..normalizers import coerce_rows, normalize_collection
from ..validation import require_text, validate_transfer_payload
from .base import BaseClient

INVENTORY_PATH = "/api/inventory"
INVENTORY_REQUESTS_PATH = "/api/inventory-requests"
TRANSFERABLE_STATES = {"available", "allocated"}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class InventoryClient(BaseClient):
    clock: Callable[[], datetime] = field(default=_utc_now)
    module = "inventory"

    def list_inventory(self) -> CollectionPage:
        payload = self._request("GET", INVENTORY_PATH, operation="list_inventory")
        page = normalize_collection(payload)
        return page.model_copy(update={"rows": coerce_rows(page.rows, InventoryItem)})

    def list_requests(self) -> CollectionPage:
        payload = self._request("GET", INVENTORY_REQUESTS_PATH, operation="list_requests")
        page = normalize_collection(payload)
        return page.model_copy(update={"rows": coerce_rows(page.rows, StockRequest)})

    def approve_request(self, request_id: int | str):
        body = {
            "status": "APPROVED",
            "updateId": self._actor(),
            "approvalDate": self.clock().isoformat(),
        }
        return self._request("PATCH", f"{INVENTORY_REQUESTS_PATH}/{request_id}", operation="approve_request", json_body=body)

    def reject_request(self, request_id: int | str, remarks: str):
        body = {
            "status": "REJECTED",
            "updateId": self._actor(),
            "rejectionRemarks": require_text(remarks, "remarks"),
            "rejectionDate": self.clock().isoformat(),
        }
        return self._request("PATCH", f"{INVENTORY_REQUESTS_PATH}/{request_id}", operation="reject_request", json_body=body)

    def request_transfer(self, payload: StockTransferRequest | Mapping[str, Any]):
        normalized = validate_transfer_payload(payload)
        return self._request(
            "POST",
            INVENTORY_REQUESTS_PATH,
            operation="request_transfer",
            json_body=normalized.model_dump(mode="json", by_alias=True),
        )

    def _actor(self) -> str:
        if self.session and self.session.username:
            return self.session.username
        return "system"


def available_serials(
    items: Iterable[InventoryItem],
    *,
    material_code: str,
    transfer_from: str,
    location_name: str | None = None,
    selected: Iterable[str] = (),
) -> list[InventoryItem]:
    """Items that can be added to a transfer out of ``transfer_from``."""
    taken = set(selected)
    result: list[InventoryItem] = []
    for item in items:
        owner = item.owner or ""
        location_match = transfer_from in owner or (location_name is not None and owner == location_name)
        if (
            item.material_code == material_code
            and location_match
            and item.serial_number not in taken
            and (item.state or "").lower() in TRANSFERABLE_STATES
        ):
            result.append(item)
    return result
