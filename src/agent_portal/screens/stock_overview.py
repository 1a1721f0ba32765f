from __future__ import annotations

from dataclasses import dataclass

from ..clients.inventory import INVENTORY_PATH, InventoryClient
from ..models import CollectionPage, InventoryItem
from ..query_cache import QueryKey
from ..views import ColumnDescriptor
from ..views.listing_view import read_field
from .base import ListScreen

SCOPES = ("warehouse", "otc", "agent", "repair")
ALL_SCOPES = "all"


def scope_for_owner(owner: str | None) -> str:
    value = (owner or "").lower()
    if value.startswith("warehouse"):
        return "warehouse"
    if value.startswith("otc"):
        return "otc"
    if value.startswith("agent"):
        return "agent"
    if "service" in value or "repair" in value:
        return "repair"
    return "warehouse"


def _lower(record: InventoryItem, key: str) -> str:
    return str(read_field(record, key) or "").lower()


def is_fresh(item: InventoryItem) -> bool:
    return _lower(item, "state") == "available" or _lower(item, "status") == "new"


def is_used(item: InventoryItem) -> bool:
    return _lower(item, "state") == "allocated" or _lower(item, "status") == "used"


def is_faulty(item: InventoryItem) -> bool:
    return _lower(item, "state") == "faulty" or _lower(item, "status") == "damaged"


def _status_contains(record: InventoryItem, accepted: str) -> bool:
    value = read_field(record, "state") or read_field(record, "status") or ""
    return accepted.lower() in str(value).lower()


@dataclass(frozen=True)
class StockOverview:
    total: int
    fresh: int
    used: int
    faulty: int


class StockOverviewScreen(ListScreen):
    name = "stock_overview"
    columns = (
        ColumnDescriptor("serial_number", "Serial Number"),
        ColumnDescriptor("material_code", "Material Code"),
        ColumnDescriptor("material_name", "Material Name"),
        ColumnDescriptor("material_type", "Material Type"),
        ColumnDescriptor("state", "State"),
        ColumnDescriptor("status", "Status"),
        ColumnDescriptor("owner", "Owner"),
    )
    searchable_fields = ("serial_number", "material_code", "material_name")
    default_sort = "material_code"
    load_error_title = "Failed to load inventory"

    def __init__(self, client: InventoryClient, *, scope: str = "warehouse", **kwargs) -> None:
        self.client = client
        self.scope = scope
        super().__init__(**kwargs)

    def query_key(self) -> QueryKey:
        return (INVENTORY_PATH,)

    def fetch(self) -> CollectionPage:
        return self.client.list_inventory()

    def column_matchers(self):
        return {"status": _status_contains}

    def predicates(self):
        if self.scope == ALL_SCOPES:
            return []
        return [lambda item: scope_for_owner(item.owner) == self.scope]

    def set_scope(self, scope: str) -> None:
        if scope != ALL_SCOPES and scope not in SCOPES:
            raise ValueError(f"Unknown stock scope {scope!r}")
        self.scope = scope
        self.filter_state.per_column.pop("owner", None)
        self.page_state.page_index = 0

    def scope_counts(self) -> dict[str, int]:
        counts = {scope: 0 for scope in SCOPES}
        for item in self.records:
            counts[scope_for_owner(item.owner)] += 1
        return counts

    def items_in_scope(self) -> list[InventoryItem]:
        if self.scope == ALL_SCOPES:
            return list(self.records)
        return [item for item in self.records if scope_for_owner(item.owner) == self.scope]

    def overview(self) -> StockOverview:
        items = self.items_in_scope()
        return StockOverview(
            total=len(items),
            fresh=sum(1 for item in items if is_fresh(item)),
            used=sum(1 for item in items if is_used(item)),
            faulty=sum(1 for item in items if is_faulty(item)),
        )

    def export_scope(self) -> str:
        return self.scope
