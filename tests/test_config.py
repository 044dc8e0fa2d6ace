import pytest
from orchestrator_client.config import (
    MissingBaseUrlError,
    create_client_from_env,
    load_settings,
)
from orchestrator_client.envelope import CodeConvention

ENV_VARS = [
    "ORCHESTRATOR_URL",
    "ORCHESTRATOR_ENDPOINTS",
    "ORCHESTRATOR_USERNAME",
    "ORCHESTRATOR_PASSWORD",
    "ORCHESTRATOR_HEADERS",
    "ORCHESTRATOR_TIMEOUT",
    "ORCHESTRATOR_INSECURE_SKIP_VERIFY",
    "ORCHESTRATOR_URL_PREFIX",
    "ORCHESTRATOR_CODE_CONVENTION",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_env_is_empty():
    settings = load_settings(use_dotenv=False)

    assert settings.base_url == ""
    assert settings.endpoints == ()
    assert settings.timeout_seconds == 30.0
    assert settings.insecure_skip_verify is False
    assert settings.code_convention == "auto"


def test_settings_read_from_env(monkeypatch):
    monkeypatch.setenv("ORCHESTRATOR_ENDPOINTS", "http://orc1:3000, http://orc2:3000,")
    monkeypatch.setenv("ORCHESTRATOR_USERNAME", "orc")
    monkeypatch.setenv("ORCHESTRATOR_PASSWORD", "s3cret")
    monkeypatch.setenv("ORCHESTRATOR_HEADERS", "X-Auth-Token: abc, X-Env: prod")
    monkeypatch.setenv("ORCHESTRATOR_TIMEOUT", "12.5")
    monkeypatch.setenv("ORCHESTRATOR_INSECURE_SKIP_VERIFY", "yes")
    monkeypatch.setenv("ORCHESTRATOR_URL_PREFIX", "/orchestrator")
    monkeypatch.setenv("ORCHESTRATOR_CODE_CONVENTION", "string")

    settings = load_settings(use_dotenv=False)

    assert settings.endpoints == ("http://orc1:3000", "http://orc2:3000")
    assert settings.headers == {"X-Auth-Token": "abc", "X-Env": "prod"}
    assert settings.timeout_seconds == 12.5
    kwargs = settings.client_kwargs()
    assert kwargs["verify"] is False
    assert kwargs["base_url"] is None
    assert kwargs["url_prefix"] == "/orchestrator"


@pytest.mark.parametrize(
    "name,value",
    [
        ("ORCHESTRATOR_TIMEOUT", "soon"),
        ("ORCHESTRATOR_TIMEOUT", "-1"),
        ("ORCHESTRATOR_HEADERS", "no-colon-here"),
    ],
)
def test_bad_values_are_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        load_settings(use_dotenv=False)


def test_missing_url_and_endpoints(monkeypatch):
    with pytest.raises(MissingBaseUrlError):
        create_client_from_env(use_dotenv=False)


@pytest.mark.asyncio
async def test_create_client_from_env(monkeypatch):
    monkeypatch.setenv("ORCHESTRATOR_URL", "http://orc.example.com:3000/")
    monkeypatch.setenv("ORCHESTRATOR_CODE_CONVENTION", "integer")

    client = create_client_from_env(use_dotenv=False, timeout_seconds=3)
    try:
        assert client.resolver.base_url == "http://orc.example.com:3000/api"
        assert client.code_convention is CodeConvention.INTEGER
        assert client.timeout_seconds == 3
    finally:
        await client.aclose()
