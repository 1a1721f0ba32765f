from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PortalRecord(BaseModel):
    """Base for portal rows: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=to_camel)

    @property
    def record_id(self) -> str | None:
        return None


class ApprovalStage(str, Enum):
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Agent(PortalRecord):
    agent_id: int | str | None = None
    salutation: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    mobile: str | None = None
    phone: str | None = None
    type: str | None = None
    region: str | None = None
    city: str | None = None
    country: str | None = None
    currency: str | None = None
    agent_stage: str | None = None
    sap_bp_id: str | None = None
    create_dt: datetime | str | None = None

    @property
    def record_id(self) -> str | None:
        return None if self.agent_id is None else str(self.agent_id)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Customer(PortalRecord):
    cust_id: int | str | None = None
    salutation: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    mobile: str | None = None
    customer_type: str | None = None
    account_class: str | None = None
    service_type: str | None = None
    region: str | None = None
    city: str | None = None
    customer_stage: str | None = None
    sap_bp_id: str | None = None
    create_dt: datetime | str | None = None

    @property
    def record_id(self) -> str | None:
        return None if self.cust_id is None else str(self.cust_id)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class InventoryItem(PortalRecord):
    id: int | str | None = None
    material_code: str | None = None
    material_name: str | None = None
    material_type: str | None = None
    serial_number: str | None = None
    cas_id: str | None = None
    status: str | None = None
    state: str | None = None
    owner: str | None = None

    @property
    def record_id(self) -> str | None:
        if self.id is not None:
            return str(self.id)
        return self.serial_number


class StockRequest(PortalRecord):
    id: int | str | None = None
    request_id: str | None = None
    request_type: str | None = None
    status: str | None = None
    item_type: str | None = None
    item_qty: int | str | None = None
    total_amount: float | None = None
    module: str | None = None
    transfer_from: str | None = None
    transfer_to: str | None = None
    sap_so_id: str | None = None
    rejection_remarks: str | None = None
    create_dt: datetime | str | None = None

    @property
    def record_id(self) -> str | None:
        return None if self.id is None else str(self.id)


class LedgerType(str, Enum):
    PAYMENT = "payment"
    COMMISSION = "commission"


class LedgerEntry(PortalRecord):
    date: str | None = None
    description: str | None = None
    reference: str | None = None
    type: str | None = None
    amount: float | None = None
    balance: float | None = None
    rate: str | None = None
    gross: float | None = None
    wht: float | None = None
    vat: float | None = None
    net: float | None = None
    status: str | None = None

    @property
    def record_id(self) -> str | None:
        return self.reference


class NotificationStatus(str, Enum):
    UNREAD = "unread"
    READ = "read"
    ARCHIVED = "archived"


class Notification(PortalRecord):
    id: int | None = None
    title: str | None = None
    message: str | None = None
    type: str | None = None
    priority: str | None = None
    status: str | None = None
    user_id: int | None = None
    action_url: str | None = None
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None

    @property
    def record_id(self) -> str | None:
        return None if self.id is None else str(self.id)

    @property
    def is_unread(self) -> bool:
        return (self.status or "").lower() == NotificationStatus.UNREAD.value


class StockTransferRequest(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=to_camel)

    material_type: str
    transfer_from: str
    transfer_to: str
    serial_numbers: list[str] = Field(default_factory=list)
    reason: str = ""
    request_type: str = "TRANSFER"
    device_condition: str = "GOOD"
    condition_remarks: str = ""


class CollectionPage(BaseModel):
    """A fetched collection: rows plus whatever total the server reported."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    rows: list[Any] = Field(default_factory=list)
    total_record_count: int | None = None
    is_demo_data: bool = False
