from __future__ import annotations

import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = BASE_DIR / "src"

sys.path.insert(0, str(SRC_DIR))

from agent_portal.config import PortalConfig  # noqa: E402
from agent_portal.http_client import HttpClient  # noqa: E402
from agent_portal.query_cache import QueryCache  # noqa: E402
from agent_portal.tracing import TraceContext  # noqa: E402
from agent_portal.views import ToastCenter  # noqa: E402

BASE_URL = "https://portal.example.com"


@pytest.fixture()
def config(tmp_path: Path) -> PortalConfig:
    return PortalConfig(
        env_name="test",
        api_base_url=BASE_URL,
        retries=1,
        retry_backoff_seconds=0,
        export_dir=tmp_path / "exports",
    )


@pytest.fixture()
def http(config: PortalConfig) -> HttpClient:
    return HttpClient(config, trace=TraceContext())


@pytest.fixture()
def cache() -> QueryCache:
    return QueryCache()


@pytest.fixture()
def toasts() -> ToastCenter:
    return ToastCenter()
