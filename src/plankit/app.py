"""Application orchestration entry points.

Each entry point resolves its configuration first, so a missing credential,
organization id or broken catalog fails before any remote or local write.
Clients and adapters can be injected; otherwise the Polar client and the
SQLAlchemy mirror are built from the environment.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from plankit.adapters.polar import PolarClient
from plankit.adapters.sqlalchemy import SqlAlchemyDatabaseAdapter, is_started, startup
from plankit.config import (
    POLAR_DASHBOARD_PAGES,
    POLAR_DASHBOARD_URLS,
    get_polar_config,
    load_catalog,
    parse_server,
)
from plankit.config.env import optional_env_var
from plankit.domain.mirroring import PurgeOrchestrator, PurgeResult, SyncOrchestrator, SyncResult
from plankit.domain.model import MetadataFields, archive_ids
from plankit.domain.reconciliation import IdentityResolver, ReconciliationEngine

if TYPE_CHECKING:
    from plankit.config import PolarConfig, PolarServer
    from plankit.domain.model import Catalog, RemotePrice, RemoteProduct
    from plankit.domain.ports import RemoteCatalogClient
    from plankit.domain.reconciliation import ArchiveResult, CreateResult, UpdateResult

log = getLogger(__name__)

DEFAULT_CATALOG_PATH = Path("plankit.toml")


@dataclass(frozen=True, slots=True)
class DashboardLink:
    name: str
    url: str


@dataclass(frozen=True, slots=True)
class _Remote:
    config: PolarConfig
    organization_id: str
    resolver: IdentityResolver


def _remote(
    fields: MetadataFields,
    *,
    server: PolarServer | str | None,
    organization_id: str | None,
    polar_config: PolarConfig | None,
    client: RemoteCatalogClient | None,
) -> _Remote:
    config = polar_config or get_polar_config(server=server, organization_id=organization_id)
    resolved_organization = organization_id or config.require_organization_id()
    effective_client = client or PolarClient(config=config)
    log.info(f"Using Polar {config.server} server, organization {resolved_organization}")
    return _Remote(
        config=config,
        organization_id=resolved_organization,
        resolver=IdentityResolver(effective_client, fields, page_size=config.page_size),
    )


def metadata_fields(catalog_path: str | Path | None) -> MetadataFields:
    """Metadata keys from the catalog when one is available, defaults otherwise."""

    path = Path(catalog_path) if catalog_path is not None else DEFAULT_CATALOG_PATH
    if catalog_path is None and not path.exists():
        return MetadataFields()
    return load_catalog(path).fields


def _load(catalog_path: str | Path | None) -> Catalog:
    catalog = load_catalog(catalog_path or DEFAULT_CATALOG_PATH)
    log.info(f"Loaded {len(catalog)} plans")
    return catalog


def _mirror_adapter(fields: MetadataFields, database_uri: str | None) -> SqlAlchemyDatabaseAdapter:
    if not is_started():
        startup(database_uri=database_uri or optional_env_var("DATABASE_URI"))
    return SqlAlchemyDatabaseAdapter(fields)


def create_plans(
    *,
    catalog_path: str | Path | None = None,
    server: PolarServer | str | None = None,
    organization_id: str | None = None,
    polar_config: PolarConfig | None = None,
    client: RemoteCatalogClient | None = None,
) -> CreateResult:
    """Ensure every catalog plan exists as a managed Polar product."""

    catalog = _load(catalog_path)
    remote = _remote(
        catalog.fields,
        server=server,
        organization_id=organization_id,
        polar_config=polar_config,
        client=client,
    )
    engine = ReconciliationEngine(remote.resolver.client, remote.resolver)
    result = engine.create(catalog.entries, remote.organization_id)
    log.info(f"Finished create: {result.summary()}")
    return result


def update_plans(
    *,
    catalog_path: str | Path | None = None,
    server: PolarServer | str | None = None,
    organization_id: str | None = None,
    polar_config: PolarConfig | None = None,
    client: RemoteCatalogClient | None = None,
) -> UpdateResult:
    """Push catalog changes onto the managed Polar products."""

    catalog = _load(catalog_path)
    remote = _remote(
        catalog.fields,
        server=server,
        organization_id=organization_id,
        polar_config=polar_config,
        client=client,
    )
    engine = ReconciliationEngine(remote.resolver.client, remote.resolver)
    result = engine.update(catalog.entries, remote.organization_id)
    log.info(f"Finished update: {result.summary()}")
    return result


def archive_plans(
    *,
    catalog_path: str | Path | None = None,
    server: PolarServer | str | None = None,
    organization_id: str | None = None,
    polar_config: PolarConfig | None = None,
    client: RemoteCatalogClient | None = None,
) -> ArchiveResult:
    """Archive the managed Polar products targeted by the catalog."""

    catalog = _load(catalog_path)
    remote = _remote(
        catalog.fields,
        server=server,
        organization_id=organization_id,
        polar_config=polar_config,
        client=client,
    )
    engine = ReconciliationEngine(remote.resolver.client, remote.resolver)
    result = engine.archive(archive_ids(catalog), remote.organization_id)
    log.info(f"Finished archive: {result.summary()}")
    return result


def sync_mirror(
    *,
    catalog_path: str | Path | None = None,
    server: PolarServer | str | None = None,
    organization_id: str | None = None,
    database_uri: str | None = None,
    polar_config: PolarConfig | None = None,
    client: RemoteCatalogClient | None = None,
    adapter: object | None = None,
) -> SyncResult:
    """Mirror the managed Polar products and prices into the database."""

    fields = metadata_fields(catalog_path)
    remote = _remote(
        fields,
        server=server,
        organization_id=organization_id,
        polar_config=polar_config,
        client=client,
    )
    orchestrator = SyncOrchestrator(
        remote.resolver,
        adapter if adapter is not None else _mirror_adapter(fields, database_uri),
    )
    result = orchestrator.sync(remote.organization_id)
    log.info(f"Finished sync: {result.summary()}")
    return result


def purge_mirror(
    *,
    catalog_path: str | Path | None = None,
    database_uri: str | None = None,
    adapter: object | None = None,
) -> PurgeResult:
    """Delete every mirrored price and product."""

    effective_adapter = (
        adapter
        if adapter is not None
        else _mirror_adapter(metadata_fields(catalog_path), database_uri)
    )
    result = PurgeOrchestrator(effective_adapter).purge()
    log.info(f"Finished purge: {result.summary()}")
    return result


def list_products(
    *,
    include_all: bool = False,
    catalog_path: str | Path | None = None,
    server: PolarServer | str | None = None,
    organization_id: str | None = None,
    polar_config: PolarConfig | None = None,
    client: RemoteCatalogClient | None = None,
) -> list[RemoteProduct]:
    remote = _remote(
        metadata_fields(catalog_path),
        server=server,
        organization_id=organization_id,
        polar_config=polar_config,
        client=client,
    )
    return list(remote.resolver.list_managed(remote.organization_id, include_all=include_all))


def list_prices(
    *,
    include_all: bool = False,
    catalog_path: str | Path | None = None,
    server: PolarServer | str | None = None,
    organization_id: str | None = None,
    polar_config: PolarConfig | None = None,
    client: RemoteCatalogClient | None = None,
) -> list[RemotePrice]:
    remote = _remote(
        metadata_fields(catalog_path),
        server=server,
        organization_id=organization_id,
        polar_config=polar_config,
        client=client,
    )
    return list(
        remote.resolver.list_managed_prices(remote.organization_id, include_all=include_all)
    )


def dashboard_urls(server: PolarServer | str | None = None) -> list[DashboardLink]:
    """Dashboard pages for ``server`` (``POLAR_SERVER`` or sandbox by default)."""

    resolved = parse_server(server if server is not None else optional_env_var("POLAR_SERVER"))
    base = POLAR_DASHBOARD_URLS[resolved]
    return [DashboardLink(name=name, url=f"{base}/{path}") for name, path in POLAR_DASHBOARD_PAGES]
