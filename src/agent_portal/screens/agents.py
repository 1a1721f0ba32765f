from __future__ import annotations

from ..clients.agents import AGENTS_PATH, APPROVE_REMARK, AgentsClient
from ..models import Agent, CollectionPage
from ..query_cache import QueryKey
from ..views import ActionVariant, ColumnDescriptor, summarize
from ..views.listing_view import read_field
from .base import ListScreen

APPROVABLE_STAGES = {"CAPTURED"}
RETRYABLE_STAGES = {"RETRY"}


def _stage_matches(record: Agent, accepted: str) -> bool:
    stage = read_field(record, "agent_stage")
    return stage is not None and str(stage).upper() == accepted.upper()


class AgentsScreen(ListScreen):
    name = "agents"
    columns = (
        ColumnDescriptor("agent_id", "Agent ID"),
        ColumnDescriptor("full_name", "Name"),
        ColumnDescriptor("email", "Email"),
        ColumnDescriptor("mobile", "Mobile"),
        ColumnDescriptor("region", "Region"),
        ColumnDescriptor("agent_stage", "Stage"),
    )
    searchable_fields = ("full_name", "email", "mobile", "agent_id")
    load_error_title = "Failed to load agents"

    def __init__(self, client: AgentsClient, *, fetch_limit: int = 100, **kwargs) -> None:
        self.client = client
        self.fetch_limit = fetch_limit
        super().__init__(**kwargs)
        self.approval_dialog = self.make_dialog(
            "agents.approval",
            [
                ActionVariant(
                    name="approve",
                    perform=lambda agent, remarks: self.client.approve(agent.agent_id, remarks),
                    default_remarks=APPROVE_REMARK,
                    success_title="Agent approved",
                    success_message="The agent onboarding has been approved.",
                    failure_title="Approval failed",
                ),
                ActionVariant(
                    name="reject",
                    perform=lambda agent, remarks: self.client.reject(agent.agent_id, remarks),
                    requires_remarks=True,
                    success_title="Agent rejected",
                    success_message="The agent onboarding has been rejected.",
                    failure_title="Rejection failed",
                    validation_message="Please provide rejection remarks",
                ),
            ],
        )

    def query_key(self) -> QueryKey:
        return (AGENTS_PATH, self.fetch_limit)

    def fetch(self) -> CollectionPage:
        return self.client.list_agents(page=1, page_size=self.fetch_limit)

    def column_matchers(self):
        return {"agent_stage": _stage_matches}

    def stage_counts(self) -> dict[str, int]:
        return summarize(self.records, "agent_stage", normalize=lambda value: str(value).upper())

    def can_approve(self, agent: Agent) -> bool:
        return (agent.agent_stage or "").upper() in APPROVABLE_STAGES

    def can_retry(self, agent: Agent) -> bool:
        return (agent.agent_stage or "").upper() in RETRYABLE_STAGES

    def retry(self, agent: Agent) -> bool:
        return self.run_action(
            "retry",
            lambda: self.client.retry_onboarding(agent.agent_id),
            success_title="Retry submitted",
            failure_title="Retry failed",
        )
