from __future__ import annotations

import json
import logging

from agent_portal.logger import get_logger, log_action
from agent_portal.views import ToastCenter, ToastVariant


def test_log_action_emits_json_without_secrets(caplog) -> None:
    logger = get_logger("agent_portal.test")

    with caplog.at_level(logging.INFO, logger="agent_portal.test"):
        log_action(
            logger,
            module="agents",
            action="approve",
            outcome="success",
            trace_id="t-1",
            access_token="abc",
            Authorization="Bearer abc",
            agent_id=7,
        )

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["module"] == "agents"
    assert payload["outcome"] == "success"
    assert payload["trace_id"] == "t-1"
    assert payload["agent_id"] == 7
    assert "access_token" not in payload
    assert "Authorization" not in payload


def test_toast_history_is_bounded_and_logged(caplog) -> None:
    toasts = ToastCenter(max_history=2)

    with caplog.at_level(logging.INFO, logger="agent_portal.views.toasts"):
        toasts.notify("one")
        toasts.notify("two", variant="success")
        toasts.notify("three", "went wrong", ToastVariant.DESTRUCTIVE)

    assert [toast.title for toast in toasts.history] == ["two", "three"]
    assert toasts.last.variant is ToastVariant.DESTRUCTIVE
    assert json.loads(caplog.records[-1].getMessage())["outcome"] == "destructive"
    assert caplog.records[-1].levelno == logging.WARNING
