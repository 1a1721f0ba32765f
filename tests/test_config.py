from __future__ import annotations

from pathlib import Path

import pytest

from agent_portal.config import ConfigError, load_config

PORTAL_VARS = (
    "PORTAL_ENV",
    "PORTAL_API_BASE_URL",
    "PORTAL_API_BASE_URL_DEV",
    "PORTAL_API_BASE_URL_STAGING",
    "PORTAL_TIMEOUT_SECONDS",
    "PORTAL_CONNECT_TIMEOUT_SECONDS",
    "PORTAL_READ_TIMEOUT_SECONDS",
    "PORTAL_RETRIES",
    "PORTAL_RETRY_BACKOFF_SECONDS",
    "PORTAL_VERIFY_SSL",
    "PORTAL_PAGE_SIZE",
    "PORTAL_CACHE_TTL_SECONDS",
    "PORTAL_EXPORT_DIR",
    "PORTAL_DEMO_DATA",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path: Path):
    for name in PORTAL_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep load_dotenv from picking up a developer's .env
    monkeypatch.chdir(tmp_path)


def test_defaults(monkeypatch) -> None:
    monkeypatch.setenv("PORTAL_API_BASE_URL", "https://portal.example.com/")

    config = load_config()

    assert config.env_name == "dev"
    assert config.api_base_url == "https://portal.example.com"
    assert config.connect_timeout_seconds == 5.0
    assert config.read_timeout_seconds == 10.0
    assert config.retries == 2
    assert config.page_size == 10
    assert config.cache_ttl_seconds is None
    assert config.export_dir == Path("exports")
    assert config.verify_ssl is True
    assert config.demo_data is False


def test_missing_base_url_raises() -> None:
    with pytest.raises(ConfigError, match="PORTAL_API_BASE_URL"):
        load_config()


def test_env_specific_base_url_wins(monkeypatch) -> None:
    monkeypatch.setenv("PORTAL_ENV", "staging")
    monkeypatch.setenv("PORTAL_API_BASE_URL", "https://prod.example.com")
    monkeypatch.setenv("PORTAL_API_BASE_URL_STAGING", "https://staging.example.com")

    config = load_config()

    assert config.api_base_url == "https://staging.example.com"
    assert config.normalized_env == "staging"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("PORTAL_TIMEOUT_SECONDS", "0"),
        ("PORTAL_RETRIES", "-1"),
        ("PORTAL_PAGE_SIZE", "0"),
        ("PORTAL_PAGE_SIZE", "ten"),
        ("PORTAL_CACHE_TTL_SECONDS", "-5"),
    ],
)
def test_invalid_values_name_the_variable(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv("PORTAL_API_BASE_URL", "https://portal.example.com")
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigError, match=name):
        load_config()


def test_flags_and_optional_values(monkeypatch) -> None:
    monkeypatch.setenv("PORTAL_API_BASE_URL", "https://portal.example.com")
    monkeypatch.setenv("PORTAL_VERIFY_SSL", "false")
    monkeypatch.setenv("PORTAL_DEMO_DATA", "yes")
    monkeypatch.setenv("PORTAL_CACHE_TTL_SECONDS", "30")
    monkeypatch.setenv("PORTAL_EXPORT_DIR", "out/csv")

    config = load_config()

    assert config.verify_ssl is False
    assert config.demo_data is True
    assert config.cache_ttl_seconds == 30.0
    assert config.export_dir == Path("out/csv")


def test_env_file_is_loaded(tmp_path: Path) -> None:
    env_file = tmp_path / "portal.env"
    env_file.write_text("PORTAL_API_BASE_URL=https://file.example.com\nPORTAL_PAGE_SIZE=25\n", encoding="utf-8")

    config = load_config(str(env_file))

    assert config.api_base_url == "https://file.example.com"
    assert config.page_size == 25
