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
from .config import ConfigError, PortalConfig, load_config
from .exceptions import (
    ApiError,
    AuthError,
    BusinessError,
    ConflictError,
    DialogStateError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    TransportError,
    ValidationError,
)
from .http_client import HttpClient
from .models import (
    Agent,
    CollectionPage,
    Customer,
    InventoryItem,
    LedgerEntry,
    LedgerType,
    Notification,
    StockRequest,
    StockTransferRequest,
)
from .normalizers import normalize_collection
from .portal import Portal
from .query_cache import QueryCache
from .tracing import TraceContext
from .validation import ClientValidationError, ValidationIssue
from .views import (
    ActionDialog,
    ActionVariant,
    ColumnDescriptor,
    DialogStatus,
    FilterState,
    PageState,
    SortState,
    TabularResult,
    TabularView,
    ToastCenter,
)

__all__ = [
    "ActionDialog",
    "ActionVariant",
    "Agent",
    "AgentsClient",
    "ApiError",
    "AuthError",
    "BusinessError",
    "ClientValidationError",
    "CollectionPage",
    "ColumnDescriptor",
    "ConfigError",
    "ConflictError",
    "Customer",
    "CustomersClient",
    "DialogStateError",
    "DialogStatus",
    "FilterState",
    "HttpClient",
    "InventoryClient",
    "InventoryItem",
    "LedgerClient",
    "LedgerEntry",
    "LedgerType",
    "NotFoundError",
    "Notification",
    "NotificationsClient",
    "PageState",
    "PaymentsClient",
    "PermissionError",
    "Portal",
    "PortalConfig",
    "PortalSession",
    "ProvisioningClient",
    "QueryCache",
    "RateLimitError",
    "ServerError",
    "SortState",
    "StockRequest",
    "StockTransferRequest",
    "SubscriptionsClient",
    "TabularResult",
    "TabularView",
    "ToastCenter",
    "TraceContext",
    "TransportError",
    "ValidationError",
    "ValidationIssue",
    "load_config",
    "normalize_collection",
]
