from __future__ import annotations

from dataclasses import dataclass

from ..models import Agent, ApprovalStage, CollectionPage
from ..normalizers import coerce_rows, normalize_collection
from ..validation import require_text
from .base import BaseClient, offset_for

AGENTS_PATH = "/crm/v1/fetch/agents"
AGENTS_SEARCH_PATH = "/crm/v1/agents/search"
AGENTS_APPROVE_PATH = "/crm/v1/agents/approve"
APPROVE_REMARK = "Onboarding Approved"


@dataclass
class AgentsClient(BaseClient):
    module = "agents"

    def list_agents(
        self,
        *,
        region: str | None = None,
        status: str | None = None,
        page: int = 1,
        page_size: int = 100,
    ) -> CollectionPage:
        body = {
            "ipuserId": self.session.username if self.session and self.session.username else "",
            "ipRegion": _filter_value(region),
            "agentId": 0,
            "offSet": offset_for(page, page_size),
            "limit": str(page_size),
            "ipRoleType": "ADMIN",
            "status": _filter_value(status),
        }
        payload = self._request("POST", AGENTS_PATH, operation="list", json_body=body)
        page_data = normalize_collection(payload)
        return page_data.model_copy(update={"rows": coerce_rows(page_data.rows, Agent)})

    def search_agents(self, term: str, *, page: int = 1, page_size: int = 100) -> CollectionPage:
        body = {"search": term.strip(), "offSet": offset_for(page, page_size), "limit": str(page_size)}
        payload = self._request("POST", AGENTS_SEARCH_PATH, operation="search", json_body=body)
        page_data = normalize_collection(payload)
        return page_data.model_copy(update={"rows": coerce_rows(page_data.rows, Agent)})

    def approve(self, agent_id: int | str, remark: str | None = None):
        return self._set_stage(agent_id, ApprovalStage.APPROVED, (remark or "").strip() or APPROVE_REMARK)

    def reject(self, agent_id: int | str, remark: str):
        return self._set_stage(agent_id, ApprovalStage.REJECTED, require_text(remark, "remark"))

    def retry_onboarding(self, agent_id: int | str):
        return self._request("POST", f"/crm/v1/agents/{agent_id}/retry", operation="retry")

    def _set_stage(self, agent_id: int | str, stage: ApprovalStage, remark: str):
        body = {"agentId": agent_id, "agentStage": stage.value, "remark": remark}
        return self._request("POST", AGENTS_APPROVE_PATH, operation=stage.value.lower(), json_body=body)


def _filter_value(value: str | None) -> str:
    if value is None or value.strip().lower() in {"", "all"}:
        return ""
    return value.strip()
