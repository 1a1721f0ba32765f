from .agents import AgentsClient
from .base import BaseClient, PortalSession
from .customers import CustomersClient
from .inventory import InventoryClient, available_serials
from .ledger import LedgerClient
from .notifications import NotificationsClient
from .provisioning import ProvisioningClient
from .service_actions import PaymentsClient, ServiceAction, SubscriptionsClient

__all__ = [
    "AgentsClient",
    "BaseClient",
    "CustomersClient",
    "InventoryClient",
    "LedgerClient",
    "NotificationsClient",
    "PaymentsClient",
    "PortalSession",
    "ProvisioningClient",
    "ServiceAction",
    "SubscriptionsClient",
    "available_serials",
]
