from .agents import AgentsScreen
from .base import ListScreen
from .customers import CustomersScreen
from .ledger import LedgerScreen
from .notifications import NotificationsScreen
from .provisioning import ProvisioningPanel
from .stock_approval import StockApprovalScreen, priority_level
from .stock_overview import StockOverviewScreen, scope_for_owner

__all__ = [
    "AgentsScreen",
    "CustomersScreen",
    "LedgerScreen",
    "ListScreen",
    "NotificationsScreen",
    "ProvisioningPanel",
    "StockApprovalScreen",
    "StockOverviewScreen",
    "priority_level",
    "scope_for_owner",
]
