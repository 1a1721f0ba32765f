from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..models import ApprovalStage, CollectionPage, Customer
from ..normalizers import coerce_rows, normalize_collection
from .base import BaseClient, offset_for

CUSTOMERS_PATH = "/crm/v1/get/Customer"
CUSTOMERS_APPROVE_PATH = "/crm/v1/customer/approve"
APPROVE_REMARK = "Verified and approved by admin"
REJECT_REMARK = "Rejected by admin"


@dataclass
class CustomersClient(BaseClient):
    module = "customers"

    def list_customers(self, *, page: int = 1, page_size: int = 100, **filters: Any) -> CollectionPage:
        body: dict[str, Any] = {
            "customerId": 0,
            "userName": "",
            "userType": "",
            "sapBpId": "",
            "firstName": "",
            "offSet": offset_for(page, page_size),
            "limit": str(page_size),
        }
        body.update({key: value for key, value in filters.items() if value is not None})
        payload = self._request("POST", CUSTOMERS_PATH, operation="list", json_body=body)
        page_data = normalize_collection(payload)
        return page_data.model_copy(update={"rows": coerce_rows(page_data.rows, Customer)})

    def approve(self, cust_id: int | str, remark: str | None = None):
        return self._set_stage(cust_id, ApprovalStage.APPROVED, (remark or "").strip() or APPROVE_REMARK)

    def reject(self, cust_id: int | str, remark: str | None = None):
        return self._set_stage(cust_id, ApprovalStage.REJECTED, (remark or "").strip() or REJECT_REMARK)

    def retry(self, cust_id: int | str):
        return self._request("POST", f"/crm/v1/customer/{cust_id}/retry", operation="retry")

    def _set_stage(self, cust_id: int | str, stage: ApprovalStage, remark: str):
        body = {"custId": cust_id, "customerStage": stage.value, "remark": remark}
        return self._request("POST", CUSTOMERS_APPROVE_PATH, operation=stage.value.lower(), json_body=body)
