from __future__ import annotations

import asyncio
import logging

import httpx
import pytest

from plankit.config import (
    ConfigurationError,
    MissingConfigurationError,
    PolarServer,
    get_polar_config,
    log_error_response,
    parse_server,
)


@pytest.fixture(autouse=True)
def clear_polar_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("POLAR_ACCESS_TOKEN", "POLAR_ORGANIZATION_ID", "POLAR_SERVER"):
        monkeypatch.delenv(name, raising=False)


def test_access_token_is_required() -> None:
    with pytest.raises(MissingConfigurationError, match="POLAR_ACCESS_TOKEN"):
        get_polar_config()


def test_defaults_to_sandbox(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POLAR_ACCESS_TOKEN", "token")

    config = get_polar_config()

    assert config.server is PolarServer.SANDBOX
    assert config.resilience.base_url == "https://sandbox-api.polar.sh/v1/"
    assert config.resilience.default_headers == {
        "Authorization": "Bearer token",
        "Accept": "application/json",
    }
    assert config.organization_id is None


def test_environment_selects_server_and_organization(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POLAR_ACCESS_TOKEN", "token")
    monkeypatch.setenv("POLAR_SERVER", "Production")
    monkeypatch.setenv("POLAR_ORGANIZATION_ID", "org-env")

    config = get_polar_config()

    assert config.server is PolarServer.PRODUCTION
    assert config.resilience.base_url == "https://api.polar.sh/v1/"
    assert config.require_organization_id() == "org-env"


def test_explicit_arguments_win_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POLAR_ACCESS_TOKEN", "token")
    monkeypatch.setenv("POLAR_SERVER", "production")
    monkeypatch.setenv("POLAR_ORGANIZATION_ID", "org-env")

    config = get_polar_config(server="sandbox", organization_id="org-arg")

    assert config.server is PolarServer.SANDBOX
    assert config.organization_id == "org-arg"


def test_missing_organization_id_is_a_configuration_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("POLAR_ACCESS_TOKEN", "token")

    with pytest.raises(ConfigurationError, match="organization id"):
        get_polar_config().require_organization_id()


def test_unknown_server_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="staging"):
        parse_server("staging")


def test_default_config_logs_failed_response_bodies(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.setenv("POLAR_ACCESS_TOKEN", "token")
    hooks = get_polar_config().resilience.response_hooks
    request = httpx.Request("GET", "https://sandbox-api.polar.sh/v1/products/")
    failed = httpx.Response(422, json={"detail": "bad metadata"}, request=request)
    succeeded = httpx.Response(200, json={"items": []}, request=request)

    with caplog.at_level(logging.DEBUG, logger="plankit.config.polar"):
        for hook in hooks:
            asyncio.run(hook(failed))
            asyncio.run(hook(succeeded))

    assert hooks == (log_error_response,)
    (record,) = caplog.records
    assert "returned 422" in record.getMessage()
    assert "bad metadata" in record.getMessage()
