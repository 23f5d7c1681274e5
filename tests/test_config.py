import pytest
from datahub_mcp.core.config import (
    MissingTokenError,
    create_client_from_env,
    load_env_config,
    log_level_from_env,
)


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    # Prevent load_dotenv from repopulating values from .env
    monkeypatch.setattr("datahub_mcp.core.config.load_dotenv", lambda *a, **k: None)


def test_create_client_from_env_missing_token(monkeypatch):
    monkeypatch.delenv("WRIKE_TOKEN", raising=False)

    with pytest.raises(MissingTokenError) as exc:
        create_client_from_env()

    assert "Please set WRIKE_TOKEN environment variable." in str(exc.value)


def test_host_defaults_to_wrike(monkeypatch):
    monkeypatch.setenv("WRIKE_TOKEN", " tok ")
    monkeypatch.delenv("WRIKE_HOST", raising=False)

    assert load_env_config() == ("tok", "www.wrike.com")


def test_create_client_from_env_uses_host(monkeypatch):
    monkeypatch.setenv("WRIKE_TOKEN", "tok")
    monkeypatch.setenv("WRIKE_HOST", "eu.wrike.test")

    client = create_client_from_env()

    assert client.base_url == "https://eu.wrike.test/app/wrike_v2_web"


def test_log_level_from_env(monkeypatch):
    monkeypatch.delenv("DATAHUB_MCP_LOG_LEVEL", raising=False)
    assert log_level_from_env() == "INFO"
    monkeypatch.setenv("DATAHUB_MCP_LOG_LEVEL", "debug")
    assert log_level_from_env() == "debug"
