"""Polar API configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

if TYPE_CHECKING:
    import httpx

log = getLogger(__name__)

POLAR_TIMEOUT_SECONDS = 30.0
POLAR_PAGE_SIZE = 100


class PolarServer(StrEnum):
    SANDBOX = "sandbox"
    PRODUCTION = "production"


POLAR_BASE_URLS: dict[PolarServer, str] = {
    PolarServer.SANDBOX: "https://sandbox-api.polar.sh/v1/",
    PolarServer.PRODUCTION: "https://api.polar.sh/v1/",
}

POLAR_DASHBOARD_URLS: dict[PolarServer, str] = {
    PolarServer.SANDBOX: "https://sandbox.polar.sh",
    PolarServer.PRODUCTION: "https://dashboard.polar.sh",
}

POLAR_DASHBOARD_PAGES: tuple[tuple[str, str], ...] = (
    ("API Settings", "settings"),
    ("Products", "products"),
    ("Webhooks", "settings/webhooks"),
    ("Subscriptions", "subscriptions"),
    ("Orders", "orders"),
)


@dataclass(frozen=True)
class PolarConfig:
    """Holds Polar API configuration values."""

    access_token: str
    organization_id: str | None
    server: PolarServer
    resilience: ResilienceConfig
    page_size: int = POLAR_PAGE_SIZE

    def require_organization_id(self) -> str:
        if not self.organization_id:
            raise ConfigurationError(
                "An organization id is required: set POLAR_ORGANIZATION_ID "
                "or pass --organization-id"
            )
        return self.organization_id


def parse_server(value: str | None) -> PolarServer:
    if value is None:
        return PolarServer.SANDBOX
    try:
        return PolarServer(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(server.value for server in PolarServer)
        raise ConfigurationError(f"Unknown Polar server {value!r} (expected {choices})") from exc


async def log_error_response(response: httpx.Response) -> None:
    """Log the body of a failed Polar response at debug level."""

    if not response.is_error:
        return
    await response.aread()
    request = response.request
    log.debug(
        f"Polar {request.method} {request.url} returned {response.status_code}: {response.text}"
    )


def default_resilience_config(server: PolarServer, access_token: str) -> ResilienceConfig:
    return ResilienceConfig(
        name=f"polar-{server}",
        base_url=POLAR_BASE_URLS[server],
        timeout_seconds=POLAR_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        response_hooks=(log_error_response,),
        default_headers={
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        },
    )


def get_polar_config(
    *,
    server: PolarServer | str | None = None,
    organization_id: str | None = None,
    resilience: ResilienceConfig | None = None,
) -> PolarConfig:
    values = require_env_vars(("POLAR_ACCESS_TOKEN",))
    access_token = values["POLAR_ACCESS_TOKEN"]
    if isinstance(server, PolarServer):
        resolved_server = server
    else:
        resolved_server = parse_server(server or optional_env_var("POLAR_SERVER"))
    return PolarConfig(
        access_token=access_token,
        organization_id=organization_id or optional_env_var("POLAR_ORGANIZATION_ID"),
        server=resolved_server,
        resilience=resilience or default_resilience_config(resolved_server, access_token),
    )
