from __future__ import annotations

from datetime import datetime, timezone

import pytest
import responses
from responses import matchers

from agent_portal.clients import (
    AgentsClient,
    CustomersClient,
    InventoryClient,
    LedgerClient,
    NotificationsClient,
    PaymentsClient,
    PortalSession,
    ProvisioningClient,
    SubscriptionsClient,
    available_serials,
)
from agent_portal.exceptions import BusinessError
from agent_portal.http_client import HttpClient
from agent_portal.models import Agent, InventoryItem, LedgerType, Notification
from agent_portal.validation import ClientValidationError

BASE_URL = "https://portal.example.com"
SESSION = PortalSession(access_token="tok-1", username="admin01", user_id=5, role="finance")
AUTH_HEADERS = {"Authorization": "Bearer tok-1", "x-auth-username": "admin01"}


def _fixed_clock() -> datetime:
    return datetime(2024, 3, 1, 8, 30, tzinfo=timezone.utc)


@responses.activate
def test_list_agents_sends_crm_body_and_parses_envelope(http: HttpClient) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/crm/v1/fetch/agents",
        match=[
            matchers.header_matcher(AUTH_HEADERS),
            matchers.json_params_matcher(
                {
                    "ipuserId": "admin01",
                    "ipRegion": "",
                    "agentId": 0,
                    "offSet": "0",
                    "limit": "100",
                    "ipRoleType": "ADMIN",
                    "status": "CAPTURED",
                }
            ),
        ],
        json={
            "status": "SUCCESS",
            "statusMessage": "Fetched",
            "data": {"data": [{"agentId": 11, "firstName": "John", "agentStage": "CAPTURED"}], "totalRecordCount": 1},
        },
        status=200,
    )

    page = AgentsClient(http, SESSION).list_agents(region="all", status="CAPTURED")

    assert page.total_record_count == 1
    assert isinstance(page.rows[0], Agent)
    assert page.rows[0].agent_id == 11


@responses.activate
def test_search_agents_uses_offset_from_page(http: HttpClient) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/crm/v1/agents/search",
        match=[matchers.json_params_matcher({"search": "john", "offSet": "20", "limit": "10"})],
        json={"status": "SUCCESS", "data": {"data": [], "totalRecordCount": 0}},
        status=200,
    )

    page = AgentsClient(http, SESSION).search_agents(" john ", page=3, page_size=10)

    assert page.rows == []


@responses.activate
def test_agent_approve_and_reject_bodies(http: HttpClient) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/crm/v1/agents/approve",
        match=[matchers.json_params_matcher({"agentId": 11, "agentStage": "APPROVED", "remark": "Onboarding Approved"})],
        json={"status": "SUCCESS", "statusMessage": "Approved"},
        status=200,
    )
    responses.add(
        responses.POST,
        f"{BASE_URL}/crm/v1/agents/approve",
        match=[matchers.json_params_matcher({"agentId": 11, "agentStage": "REJECTED", "remark": "Missing KYC"})],
        json={"status": "SUCCESS", "statusMessage": "Rejected"},
        status=200,
    )
    client = AgentsClient(http, SESSION)

    client.approve(11)
    client.reject(11, " Missing KYC ")

    assert len(responses.calls) == 2


def test_agent_reject_requires_remark_before_request(http: HttpClient) -> None:
    with responses.RequestsMock() as mocked:
        with pytest.raises(ClientValidationError):
            AgentsClient(http, SESSION).reject(11, "  ")
        assert len(mocked.calls) == 0


@responses.activate
def test_agent_approve_failure_status_raises(http: HttpClient) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/crm/v1/agents/approve",
        json={"status": "FAILURE", "statusMessage": "Agent already approved"},
        status=200,
    )

    with pytest.raises(BusinessError, match="already approved"):
        AgentsClient(http, SESSION).approve(11)


@responses.activate
def test_agent_retry(http: HttpClient) -> None:
    responses.add(responses.POST, f"{BASE_URL}/crm/v1/agents/11/retry", json={"status": "SUCCESS"}, status=200)

    AgentsClient(http, SESSION).retry_onboarding(11)

    assert responses.calls[0].request.headers["x-auth-username"] == "admin01"


@responses.activate
def test_customers_list_defaults_and_stage_remarks(http: HttpClient) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/crm/v1/get/Customer",
        match=[
            matchers.json_params_matcher(
                {
                    "customerId": 0,
                    "userName": "",
                    "userType": "",
                    "sapBpId": "",
                    "firstName": "Asha",
                    "offSet": "0",
                    "limit": "100",
                }
            )
        ],
        json={"status": "SUCCESS", "data": {"data": [{"custId": 3, "firstName": "Asha"}], "totalRecordCount": 1}},
        status=200,
    )
    responses.add(
        responses.POST,
        f"{BASE_URL}/crm/v1/customer/approve",
        match=[matchers.json_params_matcher({"custId": 3, "customerStage": "REJECTED", "remark": "Rejected by admin"})],
        json={"status": "SUCCESS"},
        status=200,
    )
    client = CustomersClient(http, SESSION)

    page = client.list_customers(firstName="Asha")
    client.reject(3)

    assert page.rows[0].cust_id == 3
    assert page.rows[0].full_name == "Asha"


@responses.activate
def test_inventory_request_approve_and_reject_payloads(http: HttpClient) -> None:
    responses.add(
        responses.PATCH,
        f"{BASE_URL}/api/inventory-requests/42",
        match=[
            matchers.json_params_matcher(
                {"status": "APPROVED", "updateId": "admin01", "approvalDate": "2024-03-01T08:30:00+00:00"}
            )
        ],
        json={"success": True, "data": {"id": 42, "status": "APPROVED"}},
        status=200,
    )
    responses.add(
        responses.PATCH,
        f"{BASE_URL}/api/inventory-requests/42",
        match=[
            matchers.json_params_matcher(
                {
                    "status": "REJECTED",
                    "updateId": "admin01",
                    "rejectionRemarks": "Out of budget",
                    "rejectionDate": "2024-03-01T08:30:00+00:00",
                }
            )
        ],
        json={"id": 42, "status": "REJECTED"},
        status=200,
    )
    client = InventoryClient(http, SESSION, clock=_fixed_clock)

    client.approve_request(42)
    client.reject_request(42, "Out of budget")

    assert len(responses.calls) == 2


@responses.activate
def test_transfer_request_posts_camel_case_body(http: HttpClient) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/inventory-requests",
        match=[
            matchers.json_params_matcher(
                {
                    "materialType": "STB001",
                    "transferFrom": "WH_DAR",
                    "transferTo": "OTC_MWANZA",
                    "serialNumbers": ["SN-1"],
                    "reason": "Restock",
                    "requestType": "TRANSFER",
                    "deviceCondition": "GOOD",
                    "conditionRemarks": "",
                }
            )
        ],
        json={"success": True, "data": {"id": 77}},
        status=201,
    )

    result = InventoryClient(http, SESSION).request_transfer(
        {"materialType": "STB001", "transferFrom": "WH_DAR", "transferTo": "OTC_MWANZA", "serialNumbers": ["SN-1"], "reason": "Restock"}
    )

    assert result["data"]["id"] == 77


def test_available_serials_filters_by_material_owner_and_state() -> None:
    items = [
        InventoryItem.model_validate({"materialCode": "STB001", "serialNumber": "A", "owner": "Warehouse - Dar es Salaam", "state": "available"}),
        InventoryItem.model_validate({"materialCode": "STB001", "serialNumber": "B", "owner": "WH_DAR", "state": "allocated"}),
        InventoryItem.model_validate({"materialCode": "STB001", "serialNumber": "C", "owner": "WH_DAR", "state": "faulty"}),
        InventoryItem.model_validate({"materialCode": "SC001", "serialNumber": "D", "owner": "WH_DAR", "state": "available"}),
        InventoryItem.model_validate({"materialCode": "STB001", "serialNumber": "E", "owner": "WH_DAR", "state": "available"}),
    ]

    result = available_serials(
        items,
        material_code="STB001",
        transfer_from="WH_DAR",
        location_name="Warehouse - Dar es Salaam",
        selected=["E"],
    )

    assert [item.serial_number for item in result] == ["A", "B"]


@responses.activate
def test_ledger_paths_and_query(http: HttpClient) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/api/agent/commission-ledger",
        match=[matchers.query_param_matcher({"userId": "5", "dateFrom": "2024-01-01"})],
        json=[{"date": "2024-01-15", "net": 4612, "status": "Paid"}],
        status=200,
    )

    page = LedgerClient(http, SESSION).list_entries(LedgerType.COMMISSION, date_from="2024-01-01", date_to="")

    assert page.rows[0].net == 4612


@responses.activate
def test_notifications_endpoints(http: HttpClient) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/api/notifications",
        match=[matchers.query_param_matcher({"userId": "5", "status": "unread"})],
        json=[{"id": 1, "title": "KYC pending", "status": "unread", "type": "kyc", "priority": "high"}],
        status=200,
    )
    responses.add(responses.GET, f"{BASE_URL}/api/notifications/user/5/unread-count", json={"count": 4}, status=200)
    responses.add(responses.PATCH, f"{BASE_URL}/api/notifications/1/read", json={"id": 1, "status": "read"}, status=200)
    responses.add(
        responses.PATCH,
        f"{BASE_URL}/api/notifications/user/5/read-all",
        json={"message": "All notifications marked as read"},
        status=200,
    )
    responses.add(
        responses.PATCH,
        f"{BASE_URL}/api/notifications/1",
        match=[matchers.json_params_matcher({"status": "archived"})],
        json={"id": 1, "status": "archived"},
        status=200,
    )
    responses.add(
        responses.DELETE,
        f"{BASE_URL}/api/notifications/1",
        json={"message": "Notification deleted successfully"},
        status=200,
    )
    client = NotificationsClient(http, SESSION)

    page = client.list_notifications(5, "unread")
    assert isinstance(page.rows[0], Notification) and page.rows[0].is_unread
    assert client.unread_count(5) == 4
    assert client.mark_read(1).status == "read"
    assert client.mark_all_read(5)["message"] == "All notifications marked as read"
    assert client.archive(1).status == "archived"
    assert client.delete(1)["message"] == "Notification deleted successfully"


@responses.activate
def test_service_actions_require_reason_for_suspend(http: HttpClient) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/customers/3/service-actions",
        match=[matchers.json_params_matcher({"action": "reactivate", "reason": ""})],
        json={"success": True},
        status=200,
    )
    client = SubscriptionsClient(http, SESSION)

    with pytest.raises(ClientValidationError):
        client.suspend(3, "")
    with pytest.raises(ClientValidationError):
        client.terminate(3, " ")
    client.reactivate(3)

    assert len(responses.calls) == 1


@responses.activate
def test_payment_cancel_sends_reason_and_role(http: HttpClient) -> None:
    responses.add(
        responses.DELETE,
        f"{BASE_URL}/api/agent-hardware-payments/9",
        match=[matchers.json_params_matcher({"reason": "Duplicate", "userRole": "finance"})],
        json={"success": False, "message": "Payment is already cancelled"},
        status=200,
    )

    with pytest.raises(BusinessError, match="already cancelled"):
        PaymentsClient(http, SESSION).cancel_hardware_payment(9, "Duplicate")


@responses.activate
def test_provisioning_commands_post_device_payloads(http: HttpClient) -> None:
    base = f"{BASE_URL}/api/provisioning"
    for command, body in (
        ("send-osd", {"scId": "SC-1001", "message": "Renew today", "duration": "30"}),
        ("send-region-osd", {"region": "Arusha", "message": "Maintenance tonight", "duration": ""}),
        ("blacklist-stb", {"scId": "SC-1001", "reason": "Reported stolen"}),
        ("send-fingerprint", {"target": "SC-1001", "channelList": "1,2,3", "xPos": "50", "yPos": "650", "duration": "10"}),
        ("send-bmail", {"scId": "SC-1001", "message": "Your package was upgraded"}),
    ):
        responses.add(
            responses.POST,
            f"{base}/{command}",
            match=[matchers.header_matcher(AUTH_HEADERS), matchers.json_params_matcher(body)],
            json={"success": True},
            status=200,
        )
    client = ProvisioningClient(http, SESSION)

    client.send_osd(" SC-1001 ", "Renew today", 30)
    client.send_region_osd("Arusha", "Maintenance tonight")
    client.blacklist_stb("SC-1001", "Reported stolen")
    client.send_fingerprint("SC-1001", "1,2,3", 50, "650", 10)
    client.send_bmail("SC-1001", "Your package was upgraded")

    assert len(responses.calls) == 5


@pytest.mark.parametrize(
    "command",
    [
        lambda client: client.send_osd("", "hello"),
        lambda client: client.send_region_osd("Arusha", "  "),
        lambda client: client.blacklist_stb("SC-1001", ""),
        lambda client: client.send_fingerprint("SC-1001", "1,2", "", "650", "10"),
        lambda client: client.send_bmail("SC-1001", None),
    ],
)
@responses.activate
def test_provisioning_refuses_missing_inputs_before_sending(http: HttpClient, command) -> None:
    with pytest.raises(ClientValidationError):
        command(ProvisioningClient(http, SESSION))

    assert len(responses.calls) == 0
