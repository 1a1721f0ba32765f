from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..clients.ledger import LEDGER_PATHS, LedgerClient
from ..models import CollectionPage, LedgerEntry, LedgerType
from ..query_cache import QueryKey
from ..views import ColumnDescriptor
from .base import ListScreen
from .formatting import format_amount, format_date

LEDGER_PAGE_SIZE = 10

PAYMENT_COLUMNS = (
    ColumnDescriptor("date", "Date", render=format_date),
    ColumnDescriptor("description", "Description"),
    ColumnDescriptor("reference", "Reference"),
    ColumnDescriptor("type", "Type"),
    ColumnDescriptor("amount", "Amount (TSH)", render=format_amount),
    ColumnDescriptor("balance", "Balance (TSH)", render=format_amount),
)

COMMISSION_COLUMNS = (
    ColumnDescriptor("date", "Date", render=format_date),
    ColumnDescriptor("description", "Description"),
    ColumnDescriptor("rate", "Commission Rate"),
    ColumnDescriptor("gross", "Gross Amount", render=format_amount),
    ColumnDescriptor("wht", "WHT (10%)", render=format_amount),
    ColumnDescriptor("vat", "VAT (18%)", render=format_amount),
    ColumnDescriptor("net", "Net Amount", render=format_amount),
    ColumnDescriptor("status", "Status"),
)

DEMO_PAYMENTS = (
    {"date": "2024-01-15", "description": "Customer Payment - STB Sale", "reference": "PAY-2024-001", "type": "Credit", "amount": 125000, "balance": 125000},
    {"date": "2024-01-16", "description": "Commission Payout", "reference": "COM-2024-001", "type": "Debit", "amount": 6250, "balance": 118750},
    {"date": "2024-01-17", "description": "Hardware Return Refund", "reference": "REF-2024-001", "type": "Credit", "amount": 85000, "balance": 203750},
)

DEMO_COMMISSIONS = (
    {"date": "2024-01-15", "description": "STB Sale Commission", "rate": "5%", "gross": 6250, "wht": 625, "vat": 1013, "net": 4612, "status": "Paid"},
    {"date": "2024-01-16", "description": "Subscription Sale Commission", "rate": "8%", "gross": 4800, "wht": 480, "vat": 777, "net": 3543, "status": "Pending"},
)


@dataclass(frozen=True)
class LedgerSummary:
    credits: float
    debits: float
    current_balance: float
    net_commission: float
    pending_commissions: int


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class LedgerScreen(ListScreen):
    """Payment or commission ledger of the signed-in agent.

    An empty server response stays empty unless ``demo_data`` is enabled, in
    which case sample rows are shown and flagged with ``is_demo_data``.
    """

    load_error_title = "Failed to load ledger"

    def __init__(
        self,
        client: LedgerClient,
        ledger_type: LedgerType,
        *,
        user_id: int | str | None = None,
        demo_data: bool = False,
        **kwargs,
    ) -> None:
        self.client = client
        self.ledger_type = ledger_type
        self.user_id = user_id
        self.demo_data = demo_data
        self.date_from: str | None = None
        self.date_to: str | None = None
        self.name = f"{ledger_type.value}-ledger"
        self.columns = PAYMENT_COLUMNS if ledger_type is LedgerType.PAYMENT else COMMISSION_COLUMNS
        self.searchable_fields = ("description", "reference", "type", "status")
        kwargs.setdefault("page_size", LEDGER_PAGE_SIZE)
        super().__init__(**kwargs)

    def query_key(self) -> QueryKey:
        return (LEDGER_PATHS[self.ledger_type], self.user_id, self.date_from, self.date_to)

    def fetch(self) -> CollectionPage:
        page = self.client.list_entries(
            self.ledger_type,
            user_id=self.user_id,
            date_from=self.date_from,
            date_to=self.date_to,
        )
        if page.rows or not self.demo_data:
            return page
        demo_rows = DEMO_PAYMENTS if self.ledger_type is LedgerType.PAYMENT else DEMO_COMMISSIONS
        return CollectionPage(
            rows=[LedgerEntry.model_validate(row) for row in demo_rows],
            total_record_count=len(demo_rows),
            is_demo_data=True,
        )

    def set_date_range(self, date_from: str | None, date_to: str | None) -> None:
        self.date_from = date_from or None
        self.date_to = date_to or None

    def summary(self) -> LedgerSummary:
        rows = self.records
        credits = sum(_as_float(row.amount) for row in rows if (row.type or "").lower() == "credit")
        debits = sum(_as_float(row.amount) for row in rows if (row.type or "").lower() == "debit")
        return LedgerSummary(
            credits=credits,
            debits=debits,
            current_balance=_as_float(rows[-1].balance) if rows else 0.0,
            net_commission=sum(_as_float(row.net) for row in rows),
            pending_commissions=sum(1 for row in rows if (row.status or "").lower() == "pending"),
        )

    def export_scope(self) -> str:
        return str(self.user_id) if self.user_id is not None else "all"
