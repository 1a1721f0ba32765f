from __future__ import annotations

from typing import Any

from .clients import (
    AgentsClient,
    CustomersClient,
    InventoryClient,
    LedgerClient,
    NotificationsClient,
    PaymentsClient,
    PortalSession,
    ProvisioningClient,
    SubscriptionsClient,
)
from .config import PortalConfig, load_config
from .http_client import HttpClient
from .models import LedgerType
from .query_cache import QueryCache
from .screens import (
    AgentsScreen,
    CustomersScreen,
    LedgerScreen,
    NotificationsScreen,
    ProvisioningPanel,
    StockApprovalScreen,
    StockOverviewScreen,
)
from .tracing import TraceContext
from .views import ToastCenter


class Portal:
    """Wires config, HTTP, cache and toasts into clients and list screens."""

    def __init__(
        self,
        *,
        config: PortalConfig | None = None,
        session: PortalSession | None = None,
        http_client: HttpClient | None = None,
        cache: QueryCache | None = None,
        toasts: ToastCenter | None = None,
    ) -> None:
        self.config = config or load_config()
        self.session = session
        self.trace = TraceContext()
        self.http_client = http_client or HttpClient(config=self.config, trace=self.trace)
        self.cache = cache or QueryCache(ttl_seconds=self.config.cache_ttl_seconds)
        self.toasts = toasts or ToastCenter()

        self.agents = AgentsClient(self.http_client, session)
        self.customers = CustomersClient(self.http_client, session)
        self.inventory = InventoryClient(self.http_client, session)
        self.ledger = LedgerClient(self.http_client, session)
        self.notifications = NotificationsClient(self.http_client, session)
        self.subscriptions = SubscriptionsClient(self.http_client, session)
        self.payments = PaymentsClient(self.http_client, session)
        self.provisioning = ProvisioningClient(self.http_client, session)

    def _screen_kwargs(self) -> dict[str, Any]:
        return {
            "cache": self.cache,
            "toasts": self.toasts,
            "page_size": self.config.page_size,
            "export_dir": self.config.export_dir,
        }

    def agents_screen(self) -> AgentsScreen:
        return AgentsScreen(self.agents, **self._screen_kwargs())

    def customers_screen(self) -> CustomersScreen:
        return CustomersScreen(self.customers, **self._screen_kwargs())

    def stock_overview_screen(self, scope: str = "warehouse") -> StockOverviewScreen:
        return StockOverviewScreen(self.inventory, scope=scope, **self._screen_kwargs())

    def stock_approval_screen(self) -> StockApprovalScreen:
        return StockApprovalScreen(self.inventory, **self._screen_kwargs())

    def ledger_screen(self, ledger_type: LedgerType) -> LedgerScreen:
        kwargs = self._screen_kwargs()
        kwargs.pop("page_size")
        return LedgerScreen(
            self.ledger,
            ledger_type,
            user_id=self.session.user_id if self.session else None,
            demo_data=self.config.demo_data,
            **kwargs,
        )

    def notifications_screen(self) -> NotificationsScreen:
        if self.session is None or self.session.user_id is None:
            raise ValueError("notifications require a session with a user_id")
        return NotificationsScreen(self.notifications, self.session.user_id, **self._screen_kwargs())

    def provisioning_panel(self) -> ProvisioningPanel:
        return ProvisioningPanel(self.provisioning, toasts=self.toasts)
