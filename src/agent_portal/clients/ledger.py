from __future__ import annotations

from dataclasses import dataclass

from ..models import CollectionPage, LedgerEntry, LedgerType
from ..normalizers import coerce_rows, normalize_collection
from .base import BaseClient

LEDGER_PATHS = {
    LedgerType.PAYMENT: "/api/agent/ledger",
    LedgerType.COMMISSION: "/api/agent/commission-ledger",
}


@dataclass
class LedgerClient(BaseClient):
    module = "ledger"

    def list_entries(
        self,
        ledger_type: LedgerType,
        *,
        user_id: int | str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> CollectionPage:
        params = {
            "userId": user_id if user_id is not None else (self.session.user_id if self.session else None),
            "dateFrom": date_from or None,
            "dateTo": date_to or None,
        }
        payload = self._request("GET", LEDGER_PATHS[ledger_type], operation=f"list_{ledger_type.value}", params=params)
        page = normalize_collection(payload)
        return page.model_copy(update={"rows": coerce_rows(page.rows, LedgerEntry)})
