from __future__ import annotations

from ..clients.customers import APPROVE_REMARK, CUSTOMERS_PATH, REJECT_REMARK, CustomersClient
from ..models import CollectionPage, Customer
from ..query_cache import QueryKey
from ..views import ActionVariant, ColumnDescriptor, summarize
from .base import ListScreen


class CustomersScreen(ListScreen):
    name = "customers"
    columns = (
        ColumnDescriptor("cust_id", "Customer ID"),
        ColumnDescriptor("full_name", "Name"),
        ColumnDescriptor("email", "Email"),
        ColumnDescriptor("mobile", "Mobile"),
        ColumnDescriptor("customer_type", "Type"),
        ColumnDescriptor("service_type", "Service Type"),
        ColumnDescriptor("region", "Region"),
        ColumnDescriptor("customer_stage", "Stage"),
    )
    searchable_fields = ("full_name", "email", "mobile", "cust_id", "sap_bp_id")
    load_error_title = "Failed to load customers"

    def __init__(self, client: CustomersClient, *, fetch_limit: int = 100, **kwargs) -> None:
        self.client = client
        self.fetch_limit = fetch_limit
        super().__init__(**kwargs)
        self.approval_dialog = self.make_dialog(
            "customers.approval",
            [
                ActionVariant(
                    name="approve",
                    perform=lambda customer, remarks: self.client.approve(customer.cust_id, remarks),
                    default_remarks=APPROVE_REMARK,
                    success_title="Customer approved",
                    failure_title="Approval failed",
                ),
                ActionVariant(
                    name="reject",
                    perform=lambda customer, remarks: self.client.reject(customer.cust_id, remarks),
                    default_remarks=REJECT_REMARK,
                    success_title="Customer rejected",
                    failure_title="Rejection failed",
                ),
            ],
        )

    def query_key(self) -> QueryKey:
        return (CUSTOMERS_PATH, self.fetch_limit)

    def fetch(self) -> CollectionPage:
        return self.client.list_customers(page=1, page_size=self.fetch_limit)

    def stage_counts(self) -> dict[str, int]:
        return summarize(self.records, "customer_stage", normalize=lambda value: str(value).upper())

    def retry(self, customer: Customer) -> bool:
        return self.run_action(
            "retry",
            lambda: self.client.retry(customer.cust_id),
            success_title="Retry submitted",
            failure_title="Retry failed",
        )
